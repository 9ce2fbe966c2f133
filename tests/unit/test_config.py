from pathlib import Path

import pytest

from trackprop import units
from trackprop.config import load_options
from trackprop.errors import ConfigError
from trackprop.propagator.lists import AbortList, ActionList
from trackprop.propagator.status import Direction

DATA_DIR = Path(__file__).resolve().parents[1] / "data" / "configs"


def test_load_from_toml_file():
    opts = load_options(DATA_DIR / "propagation.toml")
    assert opts.direction is Direction.BACKWARD
    assert opts.max_steps == 50
    assert opts.target_tolerance == pytest.approx(10 * units.um)
    assert opts.max_step_size == pytest.approx(50.0)
    assert opts.max_path_length == pytest.approx(2000.0)


def test_load_from_mapping_without_table():
    opts = load_options({"max_steps": 7, "max_path_length": "inf"})
    assert opts.max_steps == 7
    assert opts.max_path_length == float("inf")


def test_lists_are_passed_through():
    actions = ActionList()
    aborters = AbortList()
    opts = load_options({"propagation": {}}, action_list=actions, stop_conditions=aborters)
    assert opts.action_list is actions
    assert opts.stop_conditions is aborters


def test_unknown_keys_warn_and_are_ignored():
    with pytest.warns(RuntimeWarning, match="Unknown propagation options"):
        opts = load_options(DATA_DIR / "unknown_keys.toml")
    assert opts.max_steps == 10
    assert opts.max_step_size == 1.0


def test_bad_unit_raises():
    with pytest.raises(ConfigError, match="max_path_length"):
        load_options(DATA_DIR / "bad_unit.toml")


def test_non_integer_steps_raise():
    with pytest.raises(ConfigError, match="max_steps"):
        load_options({"propagation": {"max_steps": "ten"}})


def test_bad_direction_raises():
    with pytest.raises(ConfigError, match="direction"):
        load_options({"propagation": {"direction": "up"}})


def test_invalid_values_still_checked_by_options():
    with pytest.raises(ConfigError, match="max_step_size"):
        load_options({"propagation": {"max_step_size": "-1 mm"}})


def test_missing_file_raises(tmp_path: Path):
    with pytest.raises(ConfigError, match="not found"):
        load_options(tmp_path / "nope.toml")


def test_malformed_toml_raises(tmp_path: Path):
    bad = tmp_path / "bad.toml"
    bad.write_text("[propagation\nmax_steps = 3\n")
    with pytest.raises(ConfigError, match="Malformed TOML"):
        load_options(bad)


def test_table_must_be_a_table():
    with pytest.raises(ConfigError, match="must be a table"):
        load_options({"propagation": 3})


def test_unbounded_step_size_rejected():
    with pytest.raises(ConfigError, match="finite"):
        load_options({"propagation": {"max_step_size": "inf"}})
