"""Shared fixtures for riptide tests."""

import pytest

import riptide
from riptide import EngineConfig, RawEntityStat


@pytest.fixture
def engine():
    """A fresh engine with default tuning."""
    return riptide.create_engine()


@pytest.fixture
def store():
    return riptide.TokenStatsStore()


@pytest.fixture
def scorer():
    return riptide.RelevanceScorer()


@pytest.fixture
def hysteresis_config():
    """Direct (unsmoothed) values and a one-second hysteresis window."""
    return EngineConfig(
        smoothing=1.0,
        enter_threshold=0.5,
        exit_threshold=0.3,
        min_enter_duration=1.0,
    )


@pytest.fixture
def make_stat():
    """Factory for population members with controllable traffic shape."""
    return _make_stat


def _make_stat(
    packets: float = 100,
    bytes_per_packet: float = 500,
    sub_entities: int = 3,
    unique_tokens: int = 20,
    token_weight: float = 80,
) -> RawEntityStat:
    """Half-internal, half-external traffic with a uniform packet size."""
    half = packets / 2
    return RawEntityStat(
        packet_count=packets,
        internal_bytes=half * bytes_per_packet,
        external_bytes=half * bytes_per_packet,
        internal_packets=half,
        external_packets=half,
        unique_tokens=unique_tokens,
        token_weight=token_weight,
        sub_entities=sub_entities,
    )
