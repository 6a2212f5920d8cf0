"""Engine tuning constants and their validation."""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Any

from ._errors import RiptideConfigError
from ._stop_words import STOP_WORDS


@dataclass(slots=True, frozen=True)
class EngineConfig:
    """Every tuned constant of the engine, by name."""

    # Token statistics
    global_decay_rate: float = 0.992   # ~1.5 s half-life at 60 ticks/s
    local_decay_rate: float = 0.998
    prune_epsilon: float = 0.1
    min_token_length: int = 3
    stop_words: frozenset[str] = STOP_WORDS

    # Relevance scoring
    boost_window: int = 40
    constituent_boost: float = 1.5
    variance_exponent: float = 1.3

    # Topic visibility (times in seconds, same clock as ``now``)
    smoothing: float = 0.3
    absent_decay: float = 0.9
    value_floor: float = 0.02
    enter_threshold: float = 0.01
    exit_threshold: float = 0.005
    min_enter_duration: float = 0.0
    max_idle: float = 60.0
    max_visual_topics: int = 30
    visual_candidate_limit: int = 60

    # Emergency sweep of the global table
    global_sweep_threshold: int = 20000
    global_sweep_floor: float = 1.0

    # Fingerprinting
    variance_epsilon: float = 1e-6

    def __post_init__(self) -> None:
        if not isinstance(self.stop_words, frozenset):
            object.__setattr__(
                self, "stop_words",
                frozenset(w.lower() for w in self.stop_words),
            )

        for name in ("global_decay_rate", "local_decay_rate"):
            rate = getattr(self, name)
            if not (0.0 < rate < 1.0):
                raise RiptideConfigError(
                    f"{name} must be in (0, 1), got {rate}"
                )
        for name in ("smoothing", "absent_decay"):
            val = getattr(self, name)
            if not (0.0 < val <= 1.0):
                raise RiptideConfigError(
                    f"{name} must be in (0, 1], got {val}"
                )
        if self.enter_threshold < self.exit_threshold:
            raise RiptideConfigError(
                f"enter_threshold ({self.enter_threshold}) must be >= "
                f"exit_threshold ({self.exit_threshold})"
            )
        if self.exit_threshold < 0.0:
            raise RiptideConfigError(
                f"exit_threshold must be >= 0, got {self.exit_threshold}"
            )
        for name in ("min_enter_duration", "max_idle", "prune_epsilon",
                     "value_floor", "global_sweep_floor", "constituent_boost",
                     "variance_epsilon"):
            if getattr(self, name) < 0:
                raise RiptideConfigError(
                    f"{name} must be >= 0, got {getattr(self, name)}"
                )
        for name in ("boost_window", "max_visual_topics",
                     "visual_candidate_limit", "global_sweep_threshold"):
            if getattr(self, name) < 1:
                raise RiptideConfigError(
                    f"{name} must be >= 1, got {getattr(self, name)}"
                )
        if self.min_token_length < 0:
            raise RiptideConfigError(
                f"min_token_length must be >= 0, got {self.min_token_length}"
            )
        if self.variance_exponent <= 0:
            raise RiptideConfigError(
                f"variance_exponent must be > 0, got {self.variance_exponent}"
            )

    def with_overrides(self, **overrides: Any) -> EngineConfig:
        """Return a copy with the given fields replaced (and re-validated)."""
        unknown = set(overrides) - field_names()
        if unknown:
            raise RiptideConfigError(
                f"Unknown config field(s): {', '.join(sorted(unknown))}"
            )
        return replace(self, **overrides)

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        for f in fields(self):
            val = getattr(self, f.name)
            if isinstance(val, frozenset):
                val = sorted(val)
            out[f.name] = val
        return out


def field_names() -> set[str]:
    return {f.name for f in fields(EngineConfig)}
