"""TelemetryEngine: the in-process API collaborators call each tick."""

from __future__ import annotations

import logging
from collections.abc import Hashable, Iterable, Mapping, MutableMapping

from ._config import EngineConfig
from ._fingerprint import EntityFingerprinter, Population
from ._scorer import RelevanceScorer
from ._stats import TokenStatsStore
from ._types import FingerprintReport, ScoredTopic, VisualTarget
from ._visibility import TopicVisibilityTracker

logger = logging.getLogger(__name__)


class TelemetryEngine:
    """Main engine. Owns the token store, scorer, tracker and fingerprinter.

    Nothing here runs on its own timer: the caller drives ``merge_tokens``
    as batches arrive, ``decay_global_tokens`` once per tick,
    ``get_entity_visual_targets`` per entity per frame, and ``prune`` /
    ``compute_fingerprints`` on a slower cadence.
    """

    __slots__ = ("_config", "_stats", "_scorer", "_tracker", "_fingerprinter")

    def __init__(self, config: EngineConfig | None = None) -> None:
        self._config = config or EngineConfig()
        self._stats = TokenStatsStore(self._config)
        self._scorer = RelevanceScorer(self._config)
        self._tracker = TopicVisibilityTracker(self._config)
        self._fingerprinter = EntityFingerprinter(self._config)

    # -- Token statistics --

    def merge_tokens(
        self,
        local_map: MutableMapping[str, float],
        batch: Mapping[str, float] | None,
    ) -> float:
        """Merge a token batch into an entity map and the global table."""
        return self._stats.merge(local_map, batch)

    def decay_global_tokens(self) -> None:
        self._stats.decay_global()

    def decay_local_tokens(self, local_map: MutableMapping[str, float]) -> float:
        """Decay an entity-owned map; returns its new total."""
        return self._stats.decay_local(local_map)

    # -- Relevance --

    def get_top_tokens(
        self,
        local_map: Mapping[str, float],
        local_total: float,
        limit: int = 10,
    ) -> list[ScoredTopic]:
        stats = self._stats
        return self._scorer.score(
            local_map, local_total, stats.tokens, stats.total, limit,
        )

    def get_global_top_tokens(self, limit: int = 10) -> list[ScoredTopic]:
        return self._scorer.global_top(self._stats.tokens, limit)

    def topic_prominence(
        self,
        entities: Iterable[tuple[Hashable, Mapping[str, float], float]],
        limit: int = 5,
    ) -> dict[Hashable, list[ScoredTopic]]:
        """Top ``limit`` tokens for each ``(key, local_map, local_total)``."""
        return {
            key: self.get_top_tokens(local_map, local_total, limit)
            for key, local_map, local_total in entities
        }

    def get_entity_visual_targets(
        self,
        entity_key: Hashable,
        local_map: Mapping[str, float],
        local_total: float,
        now: float,
    ) -> list[VisualTarget]:
        """Score an entity, advance its topic hysteresis, return visible topics.

        ``now`` should be the playback clock so pausing and replay behave.
        """
        tracker = self._tracker
        if not local_map or not local_total:
            tracker.decay_only(entity_key, now)
            return tracker.visible_targets(entity_key)

        scored = self.get_top_tokens(
            local_map, local_total, self._config.visual_candidate_limit,
        )
        if scored:
            tracker.update(entity_key, scored, now)
        else:
            tracker.decay_only(entity_key, now)
        return tracker.visible_targets(entity_key)

    # -- Maintenance --

    def prune(self, active_keys: Iterable[Hashable]) -> None:
        """Forget departed entities; sweep the global table if it has bloated."""
        self._tracker.prune(active_keys)

        cfg = self._config
        size = len(self._stats)
        if size > cfg.global_sweep_threshold:
            removed = self._stats.sweep(cfg.global_sweep_floor)
            logger.warning(
                f"Global token table at {size} entries; emergency sweep "
                f"removed {removed} below {cfg.global_sweep_floor}"
            )

    # -- Fingerprints --

    def compute_fingerprints(self, population: Population) -> FingerprintReport:
        return self._fingerprinter.compute(population)

    # -- Accessors --

    @property
    def config(self) -> EngineConfig:
        return self._config

    @property
    def stats(self) -> TokenStatsStore:
        return self._stats

    @property
    def tracker(self) -> TopicVisibilityTracker:
        return self._tracker
