"""EntityFingerprinter: population-relative metric vectors and anomaly scores."""

from __future__ import annotations

import math
from collections.abc import Hashable, Iterable, Mapping

from ._config import EngineConfig
from ._types import DIMENSIONS, Fingerprint, FingerprintReport, RawEntityStat

Population = Mapping[Hashable, RawEntityStat] | Iterable[tuple[Hashable, RawEntityStat]]


def _ratio(part: float, whole: float, default: float) -> float:
    return part / whole if whole > 0 else default


def _log1p_ratio(num: float, den: float) -> float:
    return math.log(num / den + 1) if den > 0 else 0.0


def raw_metrics(stat: RawEntityStat) -> dict[str, float]:
    """Un-normalized metrics for one entity.

    Counts and byte averages are heavy-tailed, so they go through
    ``ln(x + 1)`` before min-max scaling; ratios are already bounded.
    """
    total_bytes = stat.internal_bytes + stat.external_bytes
    return {
        "io_pkt": _ratio(
            stat.internal_packets,
            stat.internal_packets + stat.external_packets,
            0.5,
        ),
        "io_vol": _ratio(stat.internal_bytes, total_bytes, 0.5),
        "upload": _log1p_ratio(stat.internal_bytes, stat.internal_packets),
        "download": _log1p_ratio(stat.external_bytes, stat.external_packets),
        "density": math.log(max(0.0, stat.packet_count) + 1),
        "heaviness": _log1p_ratio(total_bytes, stat.packet_count),
        "sprawl": math.log(max(0, stat.sub_entities) + 1),
        "lingo": _ratio(stat.unique_tokens, stat.token_weight, 0.0),
    }


class EntityFingerprinter:
    """Turns a population snapshot into comparable fingerprints."""

    __slots__ = ("_config",)

    def __init__(self, config: EngineConfig | None = None) -> None:
        self._config = config or EngineConfig()

    def compute(self, population: Population) -> FingerprintReport:
        items = population.items() if isinstance(population, Mapping) else population
        keys: list[Hashable] = []
        raws: list[dict[str, float]] = []
        for key, stat in items:
            keys.append(key)
            raws.append(raw_metrics(stat))

        if not raws:
            return FingerprintReport(
                fingerprints=[],
                average_profile={d: 0.0 for d in DIMENSIONS},
            )

        # Phase 1: population range per dimension
        lo = {d: min(r[d] for r in raws) for d in DIMENSIONS}
        hi = {d: max(r[d] for r in raws) for d in DIMENSIONS}

        # Phase 2: min-max normalize; no variance means neutral
        eps = self._config.variance_epsilon
        normalized: list[dict[str, float]] = []
        for r in raws:
            vec: dict[str, float] = {}
            for d in DIMENSIONS:
                span = hi[d] - lo[d]
                if span < eps:
                    vec[d] = 0.5
                else:
                    vec[d] = min(1.0, max(0.0, (r[d] - lo[d]) / span))
            normalized.append(vec)

        # Phase 3: centroid
        n = len(normalized)
        average = {d: sum(v[d] for v in normalized) / n for d in DIMENSIONS}

        # Phase 4: deviation from centroid
        fingerprints: list[Fingerprint] = []
        for key, raw, vec in zip(keys, raws, normalized):
            deviations = {d: vec[d] - average[d] for d in DIMENSIONS}
            weirdness = math.sqrt(sum(dev * dev for dev in deviations.values()))
            fingerprints.append(Fingerprint(
                key=key,
                metrics=vec,
                deviations=deviations,
                weirdness=weirdness,
                max_dev_metric=_max_dev_metric(deviations),
                raw=raw,
            ))

        return FingerprintReport(fingerprints=fingerprints, average_profile=average)


def _max_dev_metric(deviations: dict[str, float]) -> str | None:
    """Dimension with the largest absolute deviation; first wins ties."""
    best: str | None = None
    best_abs = 0.0
    for d in DIMENSIONS:
        mag = abs(deviations[d])
        if mag > best_abs:
            best, best_abs = d, mag
    return best


def peer_average(report: FingerprintReport, key: Hashable) -> dict[str, float]:
    """Population average with ``key``'s own fingerprint taken out."""
    n = len(report.fingerprints)
    fp = report.get(key)
    if fp is None or n <= 1:
        return {d: 0.0 for d in DIMENSIONS}
    avg = report.average_profile
    return {d: (avg[d] * n - fp.metrics[d]) / (n - 1) for d in DIMENSIONS}
