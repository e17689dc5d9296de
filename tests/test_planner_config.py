"""
tests/test_planner_config.py

Unit tests for planner configuration loading.
"""

import pytest

from planner_config import (
    PlannerConfig,
    get_config,
    load_config,
    reset_config,
    set_config,
)
from planner_exceptions import InvalidConfigError


@pytest.fixture(autouse=True)
def clean_global_config():
    reset_config()
    yield
    reset_config()


class TestPlannerConfig:
    """Defaults and validation."""

    def test_defaults(self):
        config = PlannerConfig()
        assert config.expansion_budget == 50000
        assert config.displacement_cost == 4
        assert config.already_true_message == "The interpretation is already true!"
        assert config.error_separator == " ; "

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"expansion_budget": 0},
            {"displacement_cost": 0},
            {"heuristic_cache_size": -1},
        ],
    )
    def test_invalid_values(self, kwargs):
        with pytest.raises(InvalidConfigError):
            PlannerConfig(**kwargs)

    def test_from_dict(self):
        config = PlannerConfig.from_dict(
            {"planner": {"expansion_budget": 100}, "logging": {"level": "debug"}}
        )
        assert config.expansion_budget == 100
        assert config.displacement_cost == 4
        assert config.log_level == "DEBUG"

    def test_unknown_keys_are_ignored(self):
        config = PlannerConfig.from_dict({"planner": {"beam_width": 3}})
        assert config == PlannerConfig()

    def test_non_mapping_rejected(self):
        with pytest.raises(InvalidConfigError):
            PlannerConfig.from_dict(["planner"])

    def test_to_dict(self):
        data = PlannerConfig(expansion_budget=7).to_dict()
        assert data["expansion_budget"] == 7
        assert PlannerConfig.from_dict({"planner": data}) == PlannerConfig(expansion_budget=7)


class TestLoadConfig:
    """YAML files."""

    def test_load_yaml(self, tmp_path):
        path = tmp_path / "planner.yaml"
        path.write_text(
            "planner:\n"
            "  expansion_budget: 1234\n"
            "  error_separator: ' | '\n"
            "logging:\n"
            "  level: WARNING\n",
            encoding="utf-8",
        )

        config = load_config(path)
        assert config.expansion_budget == 1234
        assert config.error_separator == " | "
        assert config.log_level == "WARNING"

    def test_missing_file_gives_defaults(self, tmp_path):
        assert load_config(tmp_path / "missing.yaml") == PlannerConfig()

    def test_empty_file_gives_defaults(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")
        assert load_config(path) == PlannerConfig()

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("planner: [unclosed\n", encoding="utf-8")

        with pytest.raises(InvalidConfigError) as exc_info:
            load_config(path)
        assert exc_info.value.original_exception is not None

    def test_invalid_value_in_file(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("planner:\n  expansion_budget: -5\n", encoding="utf-8")

        with pytest.raises(InvalidConfigError):
            load_config(path)


class TestGlobalConfig:
    """Process-wide config accessors."""

    def test_get_config_is_cached(self):
        assert get_config() is get_config()

    def test_set_and_reset(self):
        custom = PlannerConfig(expansion_budget=10)
        set_config(custom)
        assert get_config() is custom

        reset_config()
        assert get_config() is not custom
        assert get_config().expansion_budget == 50000
