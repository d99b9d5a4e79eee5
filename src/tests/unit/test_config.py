"""Tests for tagvault.core.config module."""

import logging

import pytest

import tagvault.core.config as config
from tagvault.core.errors import SettingsError
from tagvault.core.types import TagSettings


class TestEnvHelpers:
    """Tests for environment variable helpers."""

    def test_get_env_returns_value(self, monkeypatch):
        """get_env returns environment variable value."""
        monkeypatch.setenv("TEST_VAR", "test_value")

        assert config.get_env("TEST_VAR") == "test_value"

    def test_get_env_returns_default(self, monkeypatch):
        """get_env returns default when var not set."""
        monkeypatch.delenv("NONEXISTENT_VAR", raising=False)

        assert config.get_env("NONEXISTENT_VAR", "default") == "default"

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("true", True),
            ("True", True),
            ("1", True),
            ("yes", True),
            ("false", False),
            ("0", False),
            ("no", False),
        ],
    )
    def test_get_env_bool_parses_known_values(self, monkeypatch, value, expected):
        """get_env_bool parses known values."""
        monkeypatch.setenv("BOOL_VAR", value)

        assert config.get_env_bool("BOOL_VAR") is expected

    @pytest.mark.parametrize("default", [True, False])
    def test_get_env_bool_default(self, monkeypatch, default):
        """get_env_bool returns default for unknown values."""
        monkeypatch.setenv("BOOL_VAR", "maybe")

        assert config.get_env_bool("BOOL_VAR", default) is default


class TestTagSettings:
    """Tests for TagSettings validation."""

    def test_defaults(self):
        """Dashes closing and / separator by default."""
        settings = TagSettings()

        assert settings.use_three_dash_closing is True
        assert settings.hierarchy_separator == "/"
        assert settings.closing_marker == "---"

    def test_dots_closing_marker(self):
        """Closing marker follows the flag."""
        assert TagSettings(use_three_dash_closing=False).closing_marker == "..."

    @pytest.mark.parametrize("separator", ["", " ", "a b"])
    def test_invalid_separator(self, separator):
        """Empty or whitespace separators are rejected."""
        with pytest.raises(ValueError):
            TagSettings(hierarchy_separator=separator)

    def test_frozen(self):
        """Settings cannot be mutated."""
        settings = TagSettings()

        with pytest.raises(ValueError):
            settings.hierarchy_separator = "."


class TestLoadSettings:
    """Tests for load_settings()."""

    def test_defaults_without_file_or_env(self, clean_env):
        """Defaults apply when nothing is configured."""
        assert config.load_settings() == TagSettings()

    def test_default_file_in_data_dir(self, clean_env):
        """tagvault.yaml in the data directory is picked up."""
        data_dir = clean_env / "data"
        data_dir.mkdir()
        (data_dir / "tagvault.yaml").write_text("hierarchy_separator: '.'\n")

        assert config.load_settings().hierarchy_separator == "."

    def test_explicit_file(self, clean_env):
        """Values are read from the given YAML file."""
        path = clean_env / "settings.yaml"
        path.write_text(
            "use_three_dash_closing: false\nhierarchy_separator: '::'\n"
        )

        settings = config.load_settings(path)

        assert settings.use_three_dash_closing is False
        assert settings.hierarchy_separator == "::"

    def test_empty_file(self, clean_env):
        """An empty file gives defaults."""
        path = clean_env / "settings.yaml"
        path.write_text("")

        assert config.load_settings(path) == TagSettings()

    def test_env_overrides_file(self, clean_env, monkeypatch):
        """Environment variables win over the file."""
        path = clean_env / "settings.yaml"
        path.write_text("use_three_dash_closing: true\nhierarchy_separator: '::'\n")
        monkeypatch.setenv("TAGVAULT_USE_THREE_DASH_CLOSING", "false")
        monkeypatch.setenv("TAGVAULT_HIERARCHY_SEPARATOR", ".")

        settings = config.load_settings(path)

        assert settings.use_three_dash_closing is False
        assert settings.hierarchy_separator == "."

    def test_unparseable_env_bool_keeps_default(self, clean_env, monkeypatch):
        """Unknown boolean strings fall back to dashes closing."""
        monkeypatch.setenv("TAGVAULT_USE_THREE_DASH_CLOSING", "maybe")

        assert config.load_settings().use_three_dash_closing is True

    def test_missing_explicit_file(self, clean_env):
        """An explicit path must exist."""
        with pytest.raises(SettingsError, match="not found"):
            config.load_settings(clean_env / "missing.yaml")

    def test_invalid_yaml(self, clean_env, caplog):
        """Invalid YAML raises SettingsError and logs it."""
        caplog.set_level(logging.ERROR, logger="tagvault.core.config")
        path = clean_env / "settings.yaml"
        path.write_text("invalid: yaml: content: [")

        with pytest.raises(SettingsError, match="Invalid YAML"):
            config.load_settings(path)
        assert "Invalid YAML" in caplog.text

    def test_non_mapping(self, clean_env):
        """Settings must be a mapping."""
        path = clean_env / "settings.yaml"
        path.write_text("- a\n- b\n")

        with pytest.raises(SettingsError, match="must be a mapping"):
            config.load_settings(path)

    def test_unknown_key(self, clean_env):
        """Typos in settings keys are rejected."""
        path = clean_env / "settings.yaml"
        path.write_text("hierarchy_seperator: '.'\n")

        with pytest.raises(SettingsError, match="Invalid tagvault settings"):
            config.load_settings(path)

    def test_invalid_env_separator(self, clean_env, monkeypatch):
        """Bad separators from the environment are rejected."""
        monkeypatch.setenv("TAGVAULT_HIERARCHY_SEPARATOR", "")

        with pytest.raises(SettingsError):
            config.load_settings()


class TestSetupLogging:
    """Tests for setup_logging()."""

    def test_returns_logger(self):
        """setup_logging returns the config logger."""
        logger = config.setup_logging("DEBUG")

        assert logger.name == "tagvault.core.config"
