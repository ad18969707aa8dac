"""Tests for configuration."""

import math

from model_ui import config as config_module
from model_ui.config import ModelUIConfig, get_config, update_config


class TestModelUIConfig:
    """Tests for ModelUIConfig."""

    def test_defaults(self):
        config = ModelUIConfig()
        assert config.date_format == "yyyy-MM-dd"
        assert math.isinf(config.default_order_priority)
        assert config.escape_html is True
        assert config.default_flavour is None
        assert config.enable_tracing is False

    def test_from_env(self, monkeypatch):
        """Test reading settings from MODEL_UI_* variables."""
        monkeypatch.setenv("MODEL_UI_DATE_FORMAT", "dd/MM/yyyy")
        monkeypatch.setenv("MODEL_UI_ESCAPE_HTML", "false")
        monkeypatch.setenv("MODEL_UI_DEFAULT_FLAVOUR", "tree")
        monkeypatch.setenv("MODEL_UI_LOG_LEVEL", "debug")
        monkeypatch.setenv("MODEL_UI_DEFAULT_ORDER", "100")
        monkeypatch.setenv("MODEL_UI_ENABLE_TRACING", "true")

        config = ModelUIConfig.from_env()

        assert config.date_format == "dd/MM/yyyy"
        assert config.escape_html is False
        assert config.default_flavour == "tree"
        assert config.log_level == "DEBUG"
        assert config.default_order_priority == 100
        assert config.enable_tracing is True

    def test_from_env_defaults(self, monkeypatch):
        """Test unset variables fall back to field defaults."""
        for name in ("MODEL_UI_DATE_FORMAT", "MODEL_UI_ESCAPE_HTML", "MODEL_UI_DEFAULT_ORDER"):
            monkeypatch.delenv(name, raising=False)

        config = ModelUIConfig.from_env()

        assert config.date_format == "yyyy-MM-dd"
        assert config.escape_html is True
        assert math.isinf(config.default_order_priority)


class TestGlobalConfig:
    """Tests for the module-level configuration."""

    def test_get_config(self):
        assert get_config() is config_module.config

    def test_update_config(self, monkeypatch):
        monkeypatch.setattr(config_module, "config", ModelUIConfig())

        updated = update_config(date_format="MM/dd/yyyy", not_a_setting=1)

        assert updated.date_format == "MM/dd/yyyy"
        assert get_config().date_format == "MM/dd/yyyy"
        assert not hasattr(updated, "not_a_setting")
