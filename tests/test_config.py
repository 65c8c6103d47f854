import logging

import pytest

from eventemitter import (
    ConfigurationError,
    EmitterConfig,
    EventEmitter,
    InvalidArgumentError,
    configure_logging,
    get_default_config,
    set_default_config,
)


@pytest.fixture
def ctx_pair():
    return {"value": "abc"}, {"value": "abc"}


def noop(*args):
    pass


def test_defaults():
    config = EmitterConfig()

    assert config.context_match == "equal"
    assert config.max_listeners == 0
    assert config.trace_dispatch is False
    assert config.max_traces == 10000
    assert config.log_level == "WARNING"


def test_environment_variables(monkeypatch):
    monkeypatch.setenv("EVENTEMITTER_CONTEXT_MATCH", "identity")
    monkeypatch.setenv("EVENTEMITTER_MAX_LISTENERS", "5")
    monkeypatch.setenv("EVENTEMITTER_TRACE_DISPATCH", "true")

    config = EmitterConfig()

    assert config.context_match == "identity"
    assert config.max_listeners == 5
    assert config.trace_dispatch is True


def test_log_level_is_normalized():
    assert EmitterConfig(log_level="debug").log_level == "DEBUG"


@pytest.mark.parametrize(
    "values",
    [
        {"context_match": "deep"},
        {"max_listeners": -1},
        {"max_traces": -5},
        {"log_level": "LOUD"},
    ],
)
def test_load_rejects_invalid_values(values):
    with pytest.raises(ConfigurationError):
        EmitterConfig.load(**values)


def test_yaml_round_trip(tmp_path):
    path = tmp_path / "emitter.yaml"
    EmitterConfig(context_match="identity", max_listeners=3).to_yaml(path)

    loaded = EmitterConfig.from_yaml(path)

    assert loaded.context_match == "identity"
    assert loaded.max_listeners == 3


def test_yaml_values_lose_to_environment(tmp_path, monkeypatch):
    path = tmp_path / "emitter.yaml"
    path.write_text("max_listeners: 3\ntrace_dispatch: true\n", encoding="utf-8")
    monkeypatch.setenv("EVENTEMITTER_MAX_LISTENERS", "8")

    loaded = EmitterConfig.from_yaml(path)

    assert loaded.max_listeners == 8
    assert loaded.trace_dispatch is True


def test_yaml_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        EmitterConfig.from_yaml(tmp_path / "absent.yaml")


def test_yaml_invalid_content(tmp_path):
    path = tmp_path / "emitter.yaml"
    path.write_text("- just\n- a list\n", encoding="utf-8")

    with pytest.raises(ConfigurationError):
        EmitterConfig.from_yaml(path)


def test_yaml_non_string_key(tmp_path):
    path = tmp_path / "emitter.yaml"
    path.write_text("1: x\nmax_listeners: 2\n", encoding="utf-8")

    with pytest.raises(ConfigurationError, match="keys must be strings"):
        EmitterConfig.from_yaml(path)


def test_yaml_invalid_value(tmp_path):
    path = tmp_path / "emitter.yaml"
    path.write_text("context_match: fuzzy\n", encoding="utf-8")

    with pytest.raises(ConfigurationError):
        EmitterConfig.from_yaml(path)


def test_default_config_is_cached_and_overridable():
    first = get_default_config()
    assert get_default_config() is first

    custom = EmitterConfig(max_listeners=2)
    set_default_config(custom)

    assert get_default_config() is custom
    assert EventEmitter()._config is custom


def test_identity_context_match(ctx_pair):
    registered, lookalike = ctx_pair
    ee = EventEmitter(EmitterConfig(context_match="identity"))
    ee.on("evt", noop, registered)

    ee.off("evt", noop, lookalike)
    assert ee.listener_count("evt") == 1

    ee.off("evt", noop, registered)
    assert ee.listener_count("evt") == 0


def test_custom_context_comparison(ctx_pair):
    registered, _ = ctx_pair
    ee = EventEmitter(context_equals=lambda live, given: live["value"].upper() == given["value"])
    ee.on("evt", noop, registered)

    ee.off("evt", noop, {"value": "ABC"})

    assert ee.listener_count("evt") == 0


def test_context_equals_must_be_callable():
    with pytest.raises(InvalidArgumentError):
        EventEmitter(context_equals="identity")


def test_max_listeners_warns_once_per_event(caplog):
    ee = EventEmitter(EmitterConfig(max_listeners=2))

    with caplog.at_level(logging.WARNING, logger="eventemitter"):
        for _ in range(4):
            ee.on("evt", noop)
        ee.on("other", noop)

    leaks = [r for r in caplog.records if "Possible listener leak" in r.getMessage()]
    assert len(leaks) == 1
    assert "'evt'" in leaks[0].getMessage()
    assert ee.listener_count("evt") == 4


def test_max_listeners_warning_rearms_after_prune(caplog):
    ee = EventEmitter(EmitterConfig(max_listeners=1))

    with caplog.at_level(logging.WARNING, logger="eventemitter"):
        ee.on("evt", noop).on("evt", noop)
        ee.remove_all_listeners("evt")
        ee.on("evt", noop).on("evt", noop)

    leaks = [r for r in caplog.records if "Possible listener leak" in r.getMessage()]
    assert len(leaks) == 2


def test_configure_logging_sets_package_level():
    package_logger = configure_logging(EmitterConfig(log_level="debug"))

    try:
        assert package_logger.name == "eventemitter"
        assert package_logger.level == logging.DEBUG
    finally:
        package_logger.setLevel(logging.NOTSET)
