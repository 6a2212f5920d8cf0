"""TokenStatsStore: rolling global token frequencies and batch merging."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping, MutableMapping
from types import MappingProxyType

from ._config import EngineConfig

logger = logging.getLogger(__name__)


def normalize_token(token: str) -> str:
    """Lower-case and collapse internal whitespace."""
    return " ".join(token.lower().split())


class TokenStatsStore:
    """Owns the process-wide token table.

    Only ``merge``, ``decay_global``, ``sweep`` and ``reset`` write to the
    global table; everything else reads it.
    """

    __slots__ = ("_config", "_tokens", "_total")

    def __init__(self, config: EngineConfig | None = None) -> None:
        self._config = config or EngineConfig()
        self._tokens: dict[str, float] = {}
        self._total = 0.0

    # -- Mutation --

    def accepts(self, token: str) -> bool:
        """Whether a normalized token passes the length and stop-word filters."""
        if len(token) < self._config.min_token_length:
            return False
        return token not in self._config.stop_words

    def merge(
        self,
        local_map: MutableMapping[str, float],
        batch: Mapping[str, float] | None,
    ) -> float:
        """Add a batch of counts to ``local_map`` and the global table.

        Returns the mass added, so the caller can keep its local total.
        """
        if not batch:
            return 0.0

        tokens = self._tokens
        added = 0.0
        for raw_token, count in batch.items():
            if not count or count <= 0:
                continue
            token = normalize_token(raw_token)
            if not token or not self.accepts(token):
                continue

            local_map[token] = local_map.get(token, 0.0) + count
            tokens[token] = tokens.get(token, 0.0) + count
            added += count

        self._total += added
        return added

    def decay_global(self) -> None:
        """One decay step over the global table; call once per tick."""
        if not self._tokens:
            return
        self._total = self._decay(
            self._tokens, self._config.global_decay_rate,
        )

    def decay_local(self, local_map: MutableMapping[str, float]) -> float:
        """Apply the same decay contract to an entity-owned map.

        Returns the recomputed local total.
        """
        if not local_map:
            return 0.0
        return self._decay(local_map, self._config.local_decay_rate)

    def _decay(self, table: MutableMapping[str, float], rate: float) -> float:
        epsilon = self._config.prune_epsilon
        total = 0.0
        dead: list[str] = []
        for token, count in table.items():
            nxt = count * rate
            if nxt < epsilon:
                dead.append(token)
            else:
                table[token] = nxt
                total += nxt
        for token in dead:
            del table[token]
        return total

    def sweep(self, floor: float) -> int:
        """Remove every global entry below ``floor``; returns how many went."""
        dead = [t for t, c in self._tokens.items() if c < floor]
        for token in dead:
            del self._tokens[token]
        if dead:
            self._total = sum(self._tokens.values())
            logger.debug(
                f"Swept {len(dead)} global tokens below {floor} "
                f"({len(self._tokens)} remain)"
            )
        return len(dead)

    def reset(self) -> None:
        self._tokens.clear()
        self._total = 0.0

    # -- Read access --

    @property
    def total(self) -> float:
        return self._total

    @property
    def tokens(self) -> Mapping[str, float]:
        """Read-only view of the global table."""
        return MappingProxyType(self._tokens)

    def get(self, token: str) -> float:
        return self._tokens.get(token, 0.0)

    def global_weight(self, token: str) -> float:
        """Global count used as a frequency numerator (unseen tokens count 1)."""
        return self._tokens.get(token) or 1.0

    def items(self) -> list[tuple[str, float]]:
        return list(self._tokens.items())

    def __len__(self) -> int:
        return len(self._tokens)

    def __contains__(self, token: object) -> bool:
        return token in self._tokens

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._tokens))
