"""RelevanceScorer: local-over-global frequency ratio with constituent boosting."""

from __future__ import annotations

import re
from collections.abc import Mapping

from ._config import EngineConfig
from ._types import ScoredTopic

_PHRASE_SPLIT_RE = re.compile(r"[\s\-_]+")


class RelevanceScorer:
    """Ranks an entity's tokens by how unusually often it uses them.

    The pipeline has three phases:

    1. Raw ratio: ``(count / local_total) / (global_count / global_total)``.
       Tokens the entity says a lot but the population says rarely win.
    2. Constituent boost: words that recur inside several of the top
       phrases get multiplied up, so "learning" outranks each of
       "machine learning", "deep learning", "learning rate".
    3. Variance shaping: every score is raised to ``variance_exponent``
       to widen the gap between strong and weak signals.

    Sorting is stable, so ties keep the order in which the local map first
    saw each token.
    """

    __slots__ = ("_config",)

    def __init__(self, config: EngineConfig | None = None) -> None:
        self._config = config or EngineConfig()

    # -- Public scoring API --

    def score(
        self,
        local_map: Mapping[str, float],
        local_total: float,
        global_table: Mapping[str, float],
        global_total: float,
        limit: int = 20,
    ) -> list[ScoredTopic]:
        """Score an entity's local tokens against the global table."""
        if not local_map or limit <= 0:
            return []
        raw = self.raw_scores(local_map, local_total, global_table, global_total)
        return self._finish(raw, local_map, limit)

    def global_top(
        self, global_table: Mapping[str, float], limit: int = 10
    ) -> list[ScoredTopic]:
        """Population-wide top tokens, scored by raw global count."""
        if not global_table or limit <= 0:
            return []
        raw = [(token, float(count)) for token, count in global_table.items()]
        return self._finish(raw, global_table, limit)

    def raw_scores(
        self,
        local_map: Mapping[str, float],
        local_total: float,
        global_table: Mapping[str, float],
        global_total: float,
    ) -> list[tuple[str, float]]:
        """Phase 1 only: unboosted ratio per token, in local map order."""
        local_total = max(local_total, 1.0)
        global_total = max(global_total, 1.0)

        out: list[tuple[str, float]] = []
        for token, count in local_map.items():
            tf = count / local_total
            global_freq = (global_table.get(token) or 1.0) / global_total
            out.append((token, tf / global_freq))
        return out

    # -- Internal methods --

    def _finish(
        self,
        raw: list[tuple[str, float]],
        counts: Mapping[str, float],
        limit: int,
    ) -> list[ScoredTopic]:
        """Phases 2-3, final sort and truncation."""
        # Rank raw scores; sorted() is stable so ties keep input order
        order = sorted(range(len(raw)), key=lambda i: raw[i][1], reverse=True)
        top = [raw[i][0] for i in order[: self._config.boost_window]]

        # Phase 2: constituent boost (single pass, boosted words never
        # feed back into the phrase counts)
        constituents = self._constituent_counts(top)
        boost = self._config.constituent_boost
        exponent = self._config.variance_exponent

        scored: list[ScoredTopic] = []
        for i in order:
            token, score = raw[i]
            occurrences = constituents.get(token, 0)
            if occurrences:
                score *= 1 + occurrences * boost
            # Phase 3: variance shaping
            scored.append(ScoredTopic(
                token=token,
                score=score ** exponent,
                count=counts.get(token, 0.0),
            ))

        scored.sort(key=lambda t: t.score, reverse=True)
        return scored[:limit]

    def _constituent_counts(self, top_tokens: list[str]) -> dict[str, int]:
        """Count, per word, how many distinct top phrases contain it."""
        stop_words = self._config.stop_words
        min_len = self._config.min_token_length
        counts: dict[str, int] = {}
        for token in top_tokens:
            parts = [p for p in _PHRASE_SPLIT_RE.split(token.lower()) if p]
            if len(parts) < 2:
                continue
            for word in set(parts):
                if word in stop_words or len(word) < min_len:
                    continue
                counts[word] = counts.get(word, 0) + 1
        return counts
