"""Test UserConfig aliases and loading from Python files."""

import pytest

from nexrad_json.contracts import ConfigError
from nexrad_json.schemas import ParamConfig, UserConfig, load_user_config_dict, resolve_config


def test_uppercase_aliases():
    user = UserConfig(PRODUCT="VEL", ELEVATIONS_TIL=4, MINIMUM=-30, OUTPUT="out/ktlx")

    assert user.product == "vel"
    assert user.elevations_til == 4
    assert user.minimum == -30.0
    assert user.output_name == "out/ktlx"


def test_populate_by_name():
    assert UserConfig(product="sw").product == "sw"


def test_unknown_keys_ignored():
    user = UserConfig.model_validate({"PRODUCT": "ref", "RADAR_ID": "KTLX"})
    assert user.product == "ref"


def test_nested_sections_override():
    user = {
        "OUTPUT": "flat-name",
        "output": {"indent": 2},
        "projection": {"ecef": "EPSG:4978"},
    }
    config = resolve_config(ParamConfig(), user, None)

    assert config.output.name == "flat-name"
    assert config.output.indent == 2
    assert config.projection.ecef == "EPSG:4978"


def test_nested_output_name_wins_over_flat_alias():
    user = UserConfig.model_validate({"OUTPUT": "flat", "output": {"name": "nested"}})
    assert user.to_internal_overrides()["output"]["name"] == "nested"


def test_log_level_alias():
    assert UserConfig(LOG_LEVEL="warn").log_level == "WARNING"


class TestLoadUserConfigDict:

    def test_load_config_file(self, temp_dir):
        path = temp_dir / "my_config.py"
        path.write_text('CONFIG = {"PRODUCT": "vel", "MINIMUM": 2}\n')

        assert load_user_config_dict(path) == {"PRODUCT": "vel", "MINIMUM": 2}

    def test_missing_file(self, temp_dir):
        with pytest.raises(ConfigError, match="not found"):
            load_user_config_dict(temp_dir / "nope.py")

    def test_file_without_config(self, temp_dir):
        path = temp_dir / "empty.py"
        path.write_text("X = 1\n")

        with pytest.raises(ConfigError, match="No CONFIG"):
            load_user_config_dict(path)

    def test_file_that_fails_to_execute(self, temp_dir):
        path = temp_dir / "broken.py"
        path.write_text("CONFIG = {\n")

        with pytest.raises(ConfigError, match="Failed to execute"):
            load_user_config_dict(path)


def test_negative_elevations_til_alias_is_clamped():
    config = resolve_config(ParamConfig(), {"ELEVATIONS_TIL": -5}, None)
    assert config.batch_mode is False
