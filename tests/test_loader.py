"""Tests for engine configuration and tuning-profile loading."""

import json

import msgpack
import pytest

import riptide
from riptide import EngineConfig, STOP_WORDS
from riptide._errors import RiptideConfigError, RiptideError, RiptideVersionError
from riptide._loader import dump_config, load_config


def _write_json(path, profile):
    path.write_text(json.dumps(profile))
    return path


def test_defaults():
    config = EngineConfig()
    assert config.global_decay_rate == 0.992
    assert config.constituent_boost == 1.5
    assert config.variance_exponent == 1.3
    assert config.smoothing == 0.3
    assert config.stop_words is STOP_WORDS


def test_enter_below_exit_rejected():
    with pytest.raises(RiptideConfigError, match="enter_threshold"):
        EngineConfig(enter_threshold=0.1, exit_threshold=0.2)


def test_config_error_is_value_error():
    with pytest.raises(ValueError):
        EngineConfig(global_decay_rate=1.0)


@pytest.mark.parametrize("field,value", [
    ("global_decay_rate", 0.0),
    ("local_decay_rate", 1.5),
    ("smoothing", 0.0),
    ("absent_decay", 1.1),
    ("max_idle", -1.0),
    ("max_visual_topics", 0),
    ("min_token_length", -1),
    ("variance_exponent", 0.0),
])
def test_out_of_range_rejected(field, value):
    with pytest.raises(RiptideConfigError, match=field):
        EngineConfig(**{field: value})


def test_stop_words_coerced_to_frozenset():
    config = EngineConfig(stop_words=["Kernel", "driver"])
    assert config.stop_words == frozenset({"kernel", "driver"})


def test_with_overrides():
    config = EngineConfig().with_overrides(constituent_boost=2.0)
    assert config.constituent_boost == 2.0
    with pytest.raises(RiptideConfigError, match="Unknown config field"):
        EngineConfig().with_overrides(bogus=1)
    with pytest.raises(RiptideConfigError):
        EngineConfig().with_overrides(enter_threshold=0.0)


def test_load_none_returns_defaults():
    assert load_config() == EngineConfig()


def test_load_json_profile(tmp_path):
    path = _write_json(tmp_path / "tuning.json", {
        "version": "1.0",
        "engine": {"global_decay_rate": 0.995, "stop_words": ["Kernel"]},
    })
    config = load_config(path)
    assert config.global_decay_rate == 0.995
    assert config.stop_words == frozenset({"kernel"})
    assert config.variance_exponent == 1.3


def test_load_msgpack_profile(tmp_path):
    path = tmp_path / "tuning.msgpack"
    path.write_bytes(msgpack.packb(
        {"version": "1.0", "engine": {"max_visual_topics": 12}},
        use_bin_type=True,
    ))
    assert load_config(str(path)).max_visual_topics == 12


def test_missing_profile(tmp_path):
    with pytest.raises(RiptideError, match="not found"):
        load_config(tmp_path / "nope.json")


def test_version_mismatch(tmp_path):
    path = _write_json(tmp_path / "tuning.json", {"version": "0.9", "engine": {}})
    with pytest.raises(RiptideVersionError):
        load_config(path)


def test_unknown_field(tmp_path):
    path = _write_json(tmp_path / "tuning.json", {
        "version": "1.0", "engine": {"decay": 0.5},
    })
    with pytest.raises(RiptideConfigError, match="decay"):
        load_config(path)


def test_invalid_values_in_profile(tmp_path):
    path = _write_json(tmp_path / "tuning.json", {
        "version": "1.0",
        "engine": {"enter_threshold": 0.001, "exit_threshold": 0.5},
    })
    with pytest.raises(RiptideConfigError):
        load_config(path)


def test_non_mapping_profile(tmp_path):
    path = tmp_path / "tuning.json"
    path.write_text("[1, 2, 3]")
    with pytest.raises(RiptideError, match="mapping"):
        load_config(path)


@pytest.mark.parametrize("name", ["tuning.json", "tuning.mpk"])
def test_dump_then_load(tmp_path, name):
    config = EngineConfig(min_enter_duration=0.25, stop_words=["kernel"])
    dump_config(config, tmp_path / name)
    assert load_config(tmp_path / name) == config


def test_create_engine_from_profile(tmp_path):
    path = _write_json(tmp_path / "tuning.json", {
        "version": "1.0", "engine": {"visual_candidate_limit": 10},
    })
    engine = riptide.create_engine(profile=path)
    assert engine.config.visual_candidate_limit == 10
