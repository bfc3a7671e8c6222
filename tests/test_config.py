"""
Tests for configuration loading.

Tests YAML loading, defaults, validation and environment overrides.
"""

import logging

import pytest

from scalespace import ConfigError, Layout, length
from scalespace.config import AppConfig, LayoutConfig, LoggingConfig, load_config, describe_config, configure
from scalespace.obs.logging import JsonFormatter


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Make sure no override leaks in from the surrounding environment."""
    for name in (
        "SCALESPACE_COORDINATE_BOUND", "SCALESPACE_DIMENSION", "SCALESPACE_DIMENSION_UNIT",
        "SCALESPACE_DISTANCE_PRECISION", "SCALESPACE_LOG_LEVEL", "SCALESPACE_LOG_JSON",
    ):
        monkeypatch.delenv(name, raising=False)


class TestConfigDefaults:
    """Tests for default configuration values."""

    def test_defaults(self):
        """Test defaults match the default layout."""
        config = AppConfig()

        assert config.layout.coordinate_bound == 1000
        assert config.layout.dimension == 1.0
        assert config.layout.dimension_unit == "light_year"
        assert config.layout.distance_precision == "single"
        assert config.logging.level == "INFO"
        assert config.logging.json_format is True

    def test_default_config_builds_default_layout(self):
        """Test the default configuration gives the default layout."""
        layout = Layout.from_config(AppConfig().layout)
        default = Layout.default()

        assert layout.coordinate_bound == default.coordinate_bound
        assert layout.dimension == default.dimension

    def test_missing_file_uses_defaults(self, tmp_path):
        """Test fallback behavior when the YAML file doesn't exist."""
        config = load_config(str(tmp_path / "missing.yaml"))

        assert config == AppConfig()


class TestConfigValidation:
    """Tests for rejected configuration values."""

    @pytest.mark.parametrize("bound", [0, -1])
    def test_bound_must_be_positive(self, bound):
        """Test non-positive bounds."""
        with pytest.raises(ValueError):
            LayoutConfig(coordinate_bound=bound)

    def test_dimension_must_be_positive(self):
        """Test a zero dimension."""
        with pytest.raises(ValueError):
            LayoutConfig(dimension=0.0)

    @pytest.mark.parametrize("unit", ["degree", "second", "not_a_unit"])
    def test_dimension_unit_must_be_length(self, unit):
        """Test units that are not lengths."""
        with pytest.raises(ValueError) as exc_info:
            LayoutConfig(dimension_unit=unit)

        assert "Invalid dimension unit" in str(exc_info.value)

    def test_precision_choices(self):
        """Test unknown distance precision."""
        with pytest.raises(ValueError):
            LayoutConfig(distance_precision="extended")

    def test_log_level_normalised(self):
        """Test lowercase levels are accepted."""
        assert LoggingConfig(level="debug").level == "DEBUG"

    def test_log_level_rejected(self):
        """Test unknown log levels."""
        with pytest.raises(ValueError):
            LoggingConfig(level="chatty")

    def test_unknown_top_level_key(self, tmp_path):
        """Test that unexpected keys are refused."""
        path = tmp_path / "scalespace.yaml"
        path.write_text("layout:\n  coordinate_bound: 5\nrenderer:\n  enabled: true\n")

        with pytest.raises(ConfigError) as exc_info:
            load_config(str(path))

        assert exc_info.value.code == "CONFIG.INVALID"


class TestConfigLoading:
    """Tests for YAML files and environment overrides."""

    def test_load_from_yaml(self, tmp_path):
        """Test values are read from the YAML file."""
        path = tmp_path / "scalespace.yaml"
        path.write_text("""
layout:
  coordinate_bound: 5
  dimension: 3844000
  dimension_unit: kilometer
logging:
  level: debug
  json_format: false
""")

        config = load_config(str(path))

        assert config.layout.coordinate_bound == 5
        assert config.layout.dimension == 3844000.0
        assert config.layout.dimension_unit == "kilometer"
        assert config.logging.level == "DEBUG"
        assert config.logging.json_format is False

        layout = Layout.from_config(config.layout)
        assert layout.unit_length == length(384400.0, "kilometer")

    def test_invalid_yaml(self, tmp_path):
        """Test malformed YAML."""
        path = tmp_path / "broken.yaml"
        path.write_text("layout: [unclosed\n")

        with pytest.raises(ConfigError) as exc_info:
            load_config(str(path))

        assert "Invalid YAML" in exc_info.value.detail

    def test_non_mapping_yaml(self, tmp_path):
        """Test a YAML document that is not a mapping."""
        path = tmp_path / "list.yaml"
        path.write_text("- 1\n- 2\n")

        with pytest.raises(ConfigError):
            load_config(str(path))

    def test_environment_overrides(self, tmp_path, monkeypatch):
        """Test environment variables take precedence over the file."""
        path = tmp_path / "scalespace.yaml"
        path.write_text("layout:\n  coordinate_bound: 5\n  dimension_unit: kilometer\n")
        monkeypatch.setenv("SCALESPACE_COORDINATE_BOUND", "50")
        monkeypatch.setenv("SCALESPACE_DIMENSION", "2.5")
        monkeypatch.setenv("SCALESPACE_DISTANCE_PRECISION", "double")
        monkeypatch.setenv("SCALESPACE_LOG_LEVEL", "warning")
        monkeypatch.setenv("SCALESPACE_LOG_JSON", "false")

        config = load_config(str(path))

        assert config.layout.coordinate_bound == 50
        assert config.layout.dimension == 2.5
        assert config.layout.dimension_unit == "kilometer"
        assert config.layout.distance_precision == "double"
        assert config.logging.level == "WARNING"
        assert config.logging.json_format is False

    def test_invalid_environment_override(self, tmp_path, monkeypatch):
        """Test a bad override is reported as a config error."""
        monkeypatch.setenv("SCALESPACE_DIMENSION_UNIT", "kilogram")

        with pytest.raises(ConfigError):
            load_config(str(tmp_path / "missing.yaml"))

    def test_describe_config(self):
        """Test the flat startup summary."""
        summary = describe_config(AppConfig())

        assert summary["coordinate_bound"] == 1000
        assert summary["dimension"] == "1.0 light_year"
        assert summary["distance_precision"] == "single"


class CollectingHandler(logging.Handler):
    def __init__(self):
        super().__init__()
        self.records = []

    def emit(self, record):
        self.records.append(record)


@pytest.fixture
def config_records():
    """Collect records from the config logger; unaffected by root reconfiguration."""
    handler = CollectingHandler()
    config_logger = logging.getLogger("scalespace.config")
    config_logger.addHandler(handler)
    yield handler.records
    config_logger.removeHandler(handler)


class TestConfigure:
    """Tests for applying configuration at startup."""

    def test_logging_section_applied(self, tmp_path, restore_root_logger):
        """Test the logging level and format from YAML reach the root logger."""
        config_file = tmp_path / "scalespace.yaml"
        config_file.write_text("logging:\n  level: debug\n  json_format: false\n")

        config = configure(str(config_file))

        root = restore_root_logger
        assert config.logging.level == "DEBUG"
        assert root.level == logging.DEBUG
        assert not any(isinstance(h.formatter, JsonFormatter) for h in root.handlers)

    def test_environment_logging_override_applied(self, tmp_path, monkeypatch, restore_root_logger):
        """Test SCALESPACE_LOG_* overrides take effect through configure."""
        monkeypatch.setenv("SCALESPACE_LOG_LEVEL", "WARNING")
        monkeypatch.setenv("SCALESPACE_LOG_JSON", "true")

        configure(str(tmp_path / "missing.yaml"))

        root = restore_root_logger
        assert root.level == logging.WARNING
        assert any(isinstance(h.formatter, JsonFormatter) for h in root.handlers)

    def test_effective_config_logged(self, tmp_path, restore_root_logger, config_records):
        """Test the configuration summary is logged as a startup event."""
        config_file = tmp_path / "scalespace.yaml"
        config_file.write_text("layout:\n  coordinate_bound: 5\nlogging:\n  level: INFO\n")

        config = configure(str(config_file))

        startup = [r for r in config_records if getattr(r, "operation", None) == "startup"]
        assert len(startup) == 1
        record = startup[0]
        assert record.levelno == logging.INFO
        assert record.component == "configuration"
        assert record.status == "ready"
        assert record.config_path == str(config_file)
        assert record.coordinate_bound == 5
        assert record.log_level == config.logging.level
