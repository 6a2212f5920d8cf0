"""Data structures for riptide."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

# Fingerprint dimensions, in vector order.
DIMENSIONS: tuple[str, ...] = (
    "io_pkt",     # share of packets that are internal (requests)
    "io_vol",     # share of bytes that are internal
    "upload",     # ln(bytes per internal packet + 1)
    "download",   # ln(bytes per external packet + 1)
    "density",    # ln(packet count + 1)
    "heaviness",  # ln(bytes per packet + 1)
    "sprawl",     # ln(sub-entity count + 1)
    "lingo",      # unique tokens / total token weight
)


@dataclass(slots=True, frozen=True)
class ScoredTopic:
    token: str
    score: float
    count: float


@dataclass(slots=True, frozen=True)
class VisualTarget:
    token: str
    strength: float  # 0..1
    rank: int        # 0-based position in the visible list


class TopicPhase(enum.Enum):
    ENTERING = "entering"  # tracked but not emitted
    VISIBLE = "visible"
    EXITING = "exiting"    # still emitted, exit timer running


@dataclass(slots=True)
class TopicState:
    value: float
    last_seen_at: float
    last_value: float = 0.0
    phase: TopicPhase = TopicPhase.ENTERING
    entered_at: float | None = None
    exit_since: float | None = None

    @property
    def visible(self) -> bool:
        return self.phase is not TopicPhase.ENTERING


@dataclass(slots=True)
class RawEntityStat:
    packet_count: float = 0.0
    internal_bytes: float = 0.0
    external_bytes: float = 0.0
    internal_packets: float = 0.0
    external_packets: float = 0.0
    unique_tokens: int = 0
    token_weight: float = 0.0
    sub_entities: int = 0


@dataclass(slots=True, frozen=True)
class Fingerprint:
    key: object
    metrics: dict[str, float]     # normalized, 0..1
    deviations: dict[str, float]  # metrics minus population average
    weirdness: float
    max_dev_metric: str | None
    raw: dict[str, float] = field(default_factory=dict)

    def vector(self) -> list[float]:
        """Metrics as a list in DIMENSIONS order."""
        return [self.metrics[d] for d in DIMENSIONS]


@dataclass(slots=True, frozen=True)
class FingerprintReport:
    fingerprints: list[Fingerprint]
    average_profile: dict[str, float]

    def get(self, key: object) -> Fingerprint | None:
        for fp in self.fingerprints:
            if fp.key == key:
                return fp
        return None

    def most_anomalous(self, n: int = 5) -> list[Fingerprint]:
        """The n fingerprints with the highest weirdness, descending."""
        if n <= 0:
            return []
        ranked = sorted(
            self.fingerprints, key=lambda fp: fp.weirdness, reverse=True,
        )
        return ranked[:n]
