import pytest

from pathreveal.core.config import DEFAULT_CONFIG, SequencerConfig, resolve_config


def test_defaults():
    cfg = resolve_config(argv=[], environ={})
    assert cfg == DEFAULT_CONFIG
    assert (cfg.search_delay_ms, cfg.path_delay_ms) == (250, 100)
    assert (cfg.pause_ms, cfg.wipe_ms) == (2000, 800)
    assert cfg.density == 0.35
    assert cfg.attempts == 1000
    assert cfg.debug is False


def test_env_then_flags():
    env = {"PATHREVEAL_SEARCH_MS": "40", "PATHREVEAL_PATH_MS": "20", "PATHREVEAL_DEBUG": "yes"}
    cfg = resolve_config(argv=["--search-ms=10", "--seed=7", "--blocks=3"], environ=env)
    assert cfg.search_delay_ms == 10
    assert cfg.path_delay_ms == 20
    assert cfg.seed == 7
    assert cfg.block_count == 3
    assert cfg.debug is True


def test_bare_debug_flag():
    assert resolve_config(argv=["--debug"], environ={}).debug is True


def test_bad_number_names_the_source():
    with pytest.raises(ValueError, match="PATHREVEAL_DENSITY"):
        resolve_config(argv=[], environ={"PATHREVEAL_DENSITY": "lots"})


@pytest.mark.parametrize("kwargs", [
    {"search_delay_ms": 0},
    {"path_delay_ms": -1},
    {"density": 1.0},
    {"attempts": 0},
    {"block_size": 0},
])
def test_invalid_values_rejected(kwargs):
    with pytest.raises(ValueError):
        SequencerConfig(**kwargs)


def test_flag_override_is_validated():
    with pytest.raises(ValueError):
        resolve_config(argv=["--path-ms=0"], environ={})
