"""Riptide: online topic relevance and population fingerprints for traffic entities."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ._config import EngineConfig
from ._errors import RiptideConfigError, RiptideError, RiptideVersionError
from ._fingerprint import EntityFingerprinter, peer_average, raw_metrics
from ._loader import dump_config, load_config
from ._scorer import RelevanceScorer
from ._stats import TokenStatsStore, normalize_token
from ._stop_words import STOP_WORDS
from ._types import (
    DIMENSIONS,
    Fingerprint,
    FingerprintReport,
    RawEntityStat,
    ScoredTopic,
    TopicPhase,
    TopicState,
    VisualTarget,
)
from ._visibility import TopicVisibilityTracker

if TYPE_CHECKING:
    from pathlib import Path

    from ._engine import TelemetryEngine

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "create_engine",
    "dump_config",
    "load_config",
    "normalize_token",
    "peer_average",
    "raw_metrics",
    "DIMENSIONS",
    "EngineConfig",
    "EntityFingerprinter",
    "Fingerprint",
    "FingerprintReport",
    "RawEntityStat",
    "RelevanceScorer",
    "RiptideConfigError",
    "RiptideError",
    "RiptideVersionError",
    "ScoredTopic",
    "STOP_WORDS",
    "TelemetryEngine",
    "TokenStatsStore",
    "Tokenizer",
    "TopicPhase",
    "TopicState",
    "TopicVisibilityTracker",
    "VisualTarget",
]


def create_engine(
    config: EngineConfig | None = None,
    profile: Path | str | None = None,
) -> "TelemetryEngine":
    """Build a ready-to-use TelemetryEngine.

    Args:
        config: Explicit configuration. Takes precedence over ``profile``.
        profile: Tuning profile file to load when no config is given.
            If both are None, built-in defaults are used.
    """
    from ._engine import TelemetryEngine

    if config is None:
        config = load_config(profile)
    return TelemetryEngine(config)


# Deferred imports so TelemetryEngine and Tokenizer are available as
# riptide.TelemetryEngine / riptide.Tokenizer without loading the
# tokenizer's C extensions for engine-only callers.
def __getattr__(name: str):
    if name == "TelemetryEngine":
        from ._engine import TelemetryEngine
        return TelemetryEngine
    if name == "Tokenizer":
        from ._tokenizer import Tokenizer
        return Tokenizer
    raise AttributeError(f"module 'riptide' has no attribute {name!r}")
