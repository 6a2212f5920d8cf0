"""TopicVisibilityTracker: per-entity topic smoothing with enter/exit hysteresis."""

from __future__ import annotations

import logging
from collections.abc import Hashable, Iterable, Sequence

from ._config import EngineConfig
from ._types import ScoredTopic, TopicPhase, TopicState, VisualTarget

logger = logging.getLogger(__name__)


class TopicVisibilityTracker:
    """Keeps one TopicState per (entity, token) so visible topics change smoothly.

    A topic becomes visible once its smoothed value has held at or above
    ``enter_threshold`` for ``min_enter_duration``. It then stays visible
    until the value has been below ``exit_threshold`` for longer than
    ``min_enter_duration``. States idle past ``max_idle`` or decayed below
    ``value_floor`` are dropped.
    """

    __slots__ = ("_config", "_entities")

    def __init__(self, config: EngineConfig | None = None) -> None:
        self._config = config or EngineConfig()
        self._entities: dict[Hashable, dict[str, TopicState]] = {}

    # -- Passes --

    def update(
        self,
        entity_key: Hashable,
        scored: Sequence[ScoredTopic],
        now: float,
    ) -> None:
        """Feed one scoring pass for an entity."""
        if not scored:
            self.decay_only(entity_key, now)
            return

        cfg = self._config
        state = self._entities.setdefault(entity_key, {})

        best = max(t.score for t in scored)
        active: set[str] = set()
        for topic in scored:
            normalized = min(1.0, topic.score / best) if best > 0 else 0.0
            active.add(topic.token)
            st = state.get(topic.token)
            if st is None:
                state[topic.token] = TopicState(
                    value=normalized, last_seen_at=now, last_value=normalized,
                )
            else:
                st.last_value = normalized
                st.value = st.value * (1 - cfg.smoothing) + normalized * cfg.smoothing
                st.last_seen_at = now

        for token, st in state.items():
            if token not in active:
                st.value *= cfg.absent_decay

        self._settle(state, now)

    def decay_only(self, entity_key: Hashable, now: float) -> None:
        """Wind down an entity's topics without adding candidates."""
        state = self._entities.get(entity_key)
        if not state:
            return
        decay = self._config.absent_decay
        for st in state.values():
            st.value *= decay
        self._settle(state, now)

    # -- Output --

    def visible_targets(self, entity_key: Hashable) -> list[VisualTarget]:
        """Visible topics for an entity, strongest first."""
        state = self._entities.get(entity_key)
        if not state:
            return []

        visible = [
            (token, st.value) for token, st in state.items()
            if st.visible and st.value > 0
        ]
        visible.sort(key=lambda v: v[1], reverse=True)
        return [
            VisualTarget(token=token, strength=max(0.0, min(1.0, value)), rank=i)
            for i, (token, value) in enumerate(
                visible[: self._config.max_visual_topics]
            )
        ]

    def states(self, entity_key: Hashable) -> dict[str, TopicState]:
        """Shallow copy of an entity's topic states."""
        return dict(self._entities.get(entity_key, {}))

    # -- Memory management --

    def prune(self, active_keys: Iterable[Hashable]) -> int:
        """Drop state for every entity not in ``active_keys``."""
        active = set(active_keys)
        dead = [key for key in self._entities if key not in active]
        for key in dead:
            del self._entities[key]
        if dead:
            logger.debug(
                f"Pruned topic state for {len(dead)} inactive entities "
                f"({len(self._entities)} remain)"
            )
        return len(dead)

    def forget(self, entity_key: Hashable) -> None:
        self._entities.pop(entity_key, None)

    @property
    def entity_count(self) -> int:
        return len(self._entities)

    @property
    def topic_count(self) -> int:
        return sum(len(state) for state in self._entities.values())

    # -- Internal methods --

    def _settle(self, state: dict[str, TopicState], now: float) -> None:
        """Prune idle/negligible states, then step the rest through hysteresis."""
        cfg = self._config
        dead: list[str] = []
        for token, st in state.items():
            if now - st.last_seen_at > cfg.max_idle or st.value < cfg.value_floor:
                dead.append(token)
            else:
                self._advance(st, now)
        for token in dead:
            del state[token]

    def _advance(self, st: TopicState, now: float) -> None:
        cfg = self._config
        if st.phase is TopicPhase.ENTERING:
            if st.value >= cfg.enter_threshold:
                if st.entered_at is None:
                    st.entered_at = now
                if now - st.entered_at >= cfg.min_enter_duration:
                    st.phase = TopicPhase.VISIBLE
            else:
                st.entered_at = None
        elif st.phase is TopicPhase.VISIBLE:
            if st.value < cfg.exit_threshold:
                st.phase = TopicPhase.EXITING
                st.exit_since = now
        else:
            if st.value >= cfg.exit_threshold:
                st.phase = TopicPhase.VISIBLE
                st.exit_since = None
            elif now - st.exit_since > cfg.min_enter_duration:
                st.phase = TopicPhase.ENTERING
                st.entered_at = None
                st.exit_since = None
