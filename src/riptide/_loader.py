"""Tuning profile loading (JSON or msgpack) and version validation."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import msgpack

from ._config import EngineConfig, field_names
from ._errors import RiptideConfigError, RiptideError, RiptideVersionError

logger = logging.getLogger(__name__)

_EXPECTED_VERSION = "1.0"

_MSGPACK_SUFFIXES = (".msgpack", ".mpk")


def _is_msgpack(path: Path) -> bool:
    return path.suffix.lower() in _MSGPACK_SUFFIXES


def _read_profile(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise RiptideError(f"Profile not found: {path}")
    if _is_msgpack(path):
        with open(path, "rb") as f:
            profile = msgpack.unpackb(f.read(), raw=False)
    else:
        with open(path) as f:
            profile = json.load(f)
    if not isinstance(profile, dict):
        raise RiptideError(f"Profile {path} must contain a mapping")
    return profile


def _validate_profile(profile: dict[str, Any]) -> dict[str, Any]:
    version = profile.get("version")
    if version != _EXPECTED_VERSION:
        raise RiptideVersionError(
            f"Expected profile version {_EXPECTED_VERSION!r}, got {version!r}"
        )
    engine = profile.get("engine", {})
    if not isinstance(engine, dict):
        raise RiptideConfigError("Profile 'engine' section must be a mapping")
    unknown = set(engine) - field_names()
    if unknown:
        raise RiptideConfigError(
            f"Unknown config field(s): {', '.join(sorted(unknown))}"
        )
    return engine


def load_config(path: Path | str | None = None) -> EngineConfig:
    """Load a tuning profile and return the resulting EngineConfig.

    Args:
        path: Profile file (``.json``, ``.msgpack`` or ``.mpk``). If None,
            returns the built-in defaults.
    """
    if path is None:
        return EngineConfig()
    path = Path(path)

    overrides = dict(_validate_profile(_read_profile(path)))
    if "stop_words" in overrides:
        overrides["stop_words"] = frozenset(
            w.lower() for w in overrides["stop_words"]
        )
    try:
        config = EngineConfig(**overrides)
    except TypeError as exc:
        raise RiptideConfigError(f"Invalid profile {path}: {exc}") from exc

    logger.info(f"Loaded tuning profile {path} ({len(overrides)} overrides)")
    return config


def dump_config(config: EngineConfig, path: Path | str) -> None:
    """Write ``config`` as a complete profile; format chosen by suffix."""
    path = Path(path)
    profile = {"version": _EXPECTED_VERSION, "engine": config.to_dict()}
    if _is_msgpack(path):
        with open(path, "wb") as f:
            f.write(msgpack.packb(profile, use_bin_type=True))
    else:
        with open(path, "w") as f:
            json.dump(profile, f, indent=2, sort_keys=True)
