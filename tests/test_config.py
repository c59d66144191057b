"""
Smoke tests for configuration loading and validation.
"""

import os
import pytest

from main import load_config, validate_config
from models.config import Config, PostprocessConfig


class TestValidateConfig:
    """Tests for validate_config function."""

    def test_valid_config_passes(self, valid_config):
        """A complete valid config passes validation."""
        is_valid, error = validate_config(valid_config)

        assert is_valid is True
        assert error is None

    @pytest.mark.parametrize("section", ["model", "postprocess", "log_path", "log_level"])
    def test_missing_required_section(self, valid_config, section):
        del valid_config[section]

        is_valid, error = validate_config(valid_config)

        assert is_valid is False
        assert section in error

    def test_labels_section_optional(self, valid_config):
        del valid_config["labels"]

        assert validate_config(valid_config) == (True, None)

    @pytest.mark.parametrize("size", [0, -640, "640", 640.0])
    def test_invalid_input_size(self, valid_config, size):
        valid_config["model"]["input_size"] = size

        is_valid, error = validate_config(valid_config)

        assert is_valid is False
        assert "input_size" in error

    @pytest.mark.parametrize("key", ["conf_threshold", "iou_threshold"])
    @pytest.mark.parametrize("value", [-0.1, 1.5, "0.3", None, True])
    def test_invalid_thresholds(self, valid_config, key, value):
        valid_config["postprocess"][key] = value

        is_valid, error = validate_config(valid_config)

        assert is_valid is False
        assert key in error

    @pytest.mark.parametrize("value", [0, 1])
    def test_threshold_bounds_inclusive(self, valid_config, value):
        valid_config["postprocess"]["conf_threshold"] = value

        assert validate_config(valid_config)[0] is True

    def test_zero_limit_allowed(self, valid_config):
        valid_config["postprocess"]["limit"] = 0

        assert validate_config(valid_config)[0] is True

    @pytest.mark.parametrize("limit", [-1, 1.5, "15"])
    def test_invalid_limit(self, valid_config, limit):
        valid_config["postprocess"]["limit"] = limit

        is_valid, error = validate_config(valid_config)

        assert is_valid is False
        assert "limit" in error

    def test_descending_sort_order(self, valid_config):
        valid_config["postprocess"]["sort_order"] = "descending"

        assert validate_config(valid_config)[0] is True

    def test_invalid_sort_order(self, valid_config):
        valid_config["postprocess"]["sort_order"] = "random"

        is_valid, error = validate_config(valid_config)

        assert is_valid is False
        assert "sort_order" in error

    def test_invalid_labels_path(self, valid_config):
        valid_config["labels"]["path"] = 42

        is_valid, error = validate_config(valid_config)

        assert is_valid is False
        assert "labels.path" in error

    def test_invalid_log_level(self, valid_config):
        valid_config["log_level"] = "VERBOSE"

        is_valid, error = validate_config(valid_config)

        assert is_valid is False
        assert "log_level" in error

    @pytest.mark.parametrize("scale", [0, -1.0, "2", None, True])
    def test_invalid_annotate_scale(self, valid_config, scale):
        valid_config["annotate"] = {"scale": scale}

        is_valid, error = validate_config(valid_config)

        assert is_valid is False
        assert "annotate.scale" in error

    @pytest.mark.parametrize("color", [[0, 0], [0, 0, 255, 0], [0, 0, "255"], [0, 0, 25.5], [True, 0, 0], "red"])
    def test_invalid_annotate_color(self, valid_config, color):
        valid_config["annotate"] = {"color": color}

        is_valid, error = validate_config(valid_config)

        assert is_valid is False
        assert "annotate.color" in error

    @pytest.mark.parametrize("thickness", [0, -2, 1.5])
    def test_invalid_annotate_thickness(self, valid_config, thickness):
        valid_config["annotate"] = {"thickness": thickness}

        is_valid, error = validate_config(valid_config)

        assert is_valid is False
        assert "annotate.thickness" in error

    def test_valid_annotate_section(self, valid_config):
        valid_config["annotate"] = {"color": [0, 255, 0], "thickness": 2, "scale": 0.5}

        assert validate_config(valid_config) == (True, None)


class TestLoadConfig:
    """Tests for load_config layering."""

    def test_loads_default(self, temp_config_dir):
        config = load_config(str(temp_config_dir / "config.yaml"))

        assert config["model"]["input_size"] == 640
        assert config["postprocess"]["limit"] == 15

    def test_local_override_merges(self, temp_config_dir):
        (temp_config_dir / "config.yaml").write_text("""
postprocess:
  limit: 5
""")

        config = load_config(str(temp_config_dir / "config.yaml"))

        assert config["postprocess"]["limit"] == 5
        # Other keys survive the deep merge
        assert config["postprocess"]["conf_threshold"] == 0.3

    def test_explicit_config_applied_last(self, temp_config_dir):
        (temp_config_dir / "config.yaml").write_text("postprocess:\n  limit: 5\n")
        explicit = temp_config_dir / "descending.yaml"
        explicit.write_text("postprocess:\n  limit: 7\n  sort_order: descending\n")

        config = load_config(str(explicit))

        assert config["postprocess"]["limit"] == 7
        assert config["postprocess"]["sort_order"] == "descending"

    def test_invalid_yaml_exits(self, temp_config_dir):
        (temp_config_dir / "config.yaml").write_text("postprocess: [unclosed\n")

        with pytest.raises(SystemExit):
            load_config(str(temp_config_dir / "config.yaml"))

    def test_checked_in_default_is_valid(self):
        path = os.path.join(os.path.dirname(__file__), "..", "config", "config.yaml")

        config = load_config(path)

        assert validate_config(config) == (True, None)


class TestTypedConfig:
    def test_defaults(self):
        cfg = Config.from_dict({})

        assert cfg.model.input_size == 640
        assert cfg.postprocess == PostprocessConfig(0.3, 0.3, 15, "ascending")
        assert cfg.labels.path is None
        assert cfg.annotate.scale == 1.0
        assert cfg.log_level == "INFO"

    def test_from_valid_config(self, valid_config):
        valid_config["postprocess"]["sort_order"] = "descending"

        cfg = Config.from_dict(valid_config)

        assert cfg.postprocess.sort_order == "descending"
        assert cfg.log_path == "logs/test.log"

    def test_roundtrip(self, valid_config):
        cfg = Config.from_dict(valid_config)

        assert Config.from_dict(cfg.to_dict()) == cfg
