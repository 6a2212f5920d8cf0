"""Text to token-batch conversion: phrase scan (Aho-Corasick) plus word counting."""

from __future__ import annotations

import re
from collections.abc import Iterable

import ahocorasick
import Stemmer

_WORD_RE = re.compile(r"[a-z]+")


class Tokenizer:
    """Builds the ``{token: count}`` batches the engine merges.

    Configured phrases are matched first (whole words, leftmost-longest,
    non-overlapping) and counted as single tokens; the words they cover are
    not counted again.
    """

    __slots__ = ("_phrase_ac", "_stemmer", "_min_length", "_max_tokens")

    def __init__(
        self,
        phrases: Iterable[str] = (),
        *,
        stem: bool = False,
        min_length: int = 4,
        max_tokens: int = 50,
    ) -> None:
        self._min_length = min_length
        self._max_tokens = max_tokens
        self._stemmer = Stemmer.Stemmer("english") if stem else None
        self._phrase_ac = self._build_automaton(phrases)

    @staticmethod
    def _build_automaton(phrases: Iterable[str]) -> ahocorasick.Automaton | None:
        normalized = sorted({" ".join(p.lower().split()) for p in phrases} - {""})
        if not normalized:
            return None
        ac = ahocorasick.Automaton()
        for phrase in normalized:
            ac.add_word(phrase, phrase)
        ac.make_automaton()
        return ac

    def scan_phrases(
        self, text_lower: str
    ) -> tuple[list[str], list[tuple[int, int]]]:
        """Phase 1: phrase scan.

        Returns (matched_phrases, consumed_spans).
        """
        if self._phrase_ac is None:
            return [], []

        raw_matches: list[tuple[int, int, str]] = []  # (start, end, phrase)
        for end_inclusive, phrase in self._phrase_ac.iter(text_lower):
            end = end_inclusive + 1
            start = end - len(phrase)
            # Whole-word matches only
            if start > 0 and text_lower[start - 1].isalpha():
                continue
            if end < len(text_lower) and text_lower[end].isalpha():
                continue
            raw_matches.append((start, end, phrase))

        # Sort by start position, then by length descending (longest first)
        raw_matches.sort(key=lambda m: (m[0], -(m[1] - m[0])))

        phrases: list[str] = []
        consumed: list[tuple[int, int]] = []
        last_end = -1
        for start, end, phrase in raw_matches:
            if start >= last_end:
                phrases.append(phrase)
                consumed.append((start, end))
                last_end = end

        return phrases, consumed

    def words(
        self, text_lower: str, consumed_spans: list[tuple[int, int]]
    ) -> list[str]:
        """Phase 2: words outside consumed spans, length-filtered, maybe stemmed."""
        out: list[str] = []
        for m in _WORD_RE.finditer(text_lower):
            tok_start, tok_end = m.start(), m.end()

            in_phrase = False
            for cs, ce in consumed_spans:
                if tok_start >= cs and tok_end <= ce:
                    in_phrase = True
                    break
            if in_phrase:
                continue

            token = m.group()
            if len(token) < self._min_length:
                continue
            if self._stemmer is not None:
                token = self._stemmer.stemWord(token)
            out.append(token)
        return out

    def count(self, text: str) -> dict[str, float]:
        """Run the full pipeline and return the top ``max_tokens`` counts."""
        text_lower = text.lower()
        phrases, consumed = self.scan_phrases(text_lower)

        counts: dict[str, float] = {}
        for token in phrases + self.words(text_lower, consumed):
            counts[token] = counts.get(token, 0.0) + 1.0

        # Stable sort: equal counts keep phrases first, then words in text order
        ranked = sorted(counts.items(), key=lambda kv: kv[1], reverse=True)
        return dict(ranked[: self._max_tokens])
