"""
Configuration module for model-ui.

Handles environment variables and default settings.
"""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

from model_ui.constants import HTML5_DATE_FORMAT

# Load environment variables
load_dotenv()


def _env_bool(name: str, default: bool) -> bool:
    return os.getenv(name, str(default).lower()).lower() == "true"


@dataclass
class ModelUIConfig:
    """Configuration settings for model-ui."""

    # Field tree settings
    date_format: str = HTML5_DATE_FORMAT
    default_order_priority: float = float("inf")  # Unordered nodes follow ordered ones
    escape_html: bool = True

    # Rendering engine settings
    default_flavour: str | None = None

    # Logging and tracing settings
    log_level: str = "WARNING"
    enable_tracing: bool = False
    trace_to_console: bool = True
    trace_verbose: bool = False
    trace_file: str | None = None

    # Output settings
    json_schema_version: str = "https://json-schema.org/draft/2020-12/schema"
    indent_json_output: int = 2

    @classmethod
    def from_env(cls) -> "ModelUIConfig":
        """
        Create configuration from environment variables.

        If an environment variable is not set, uses the class field default value.
        """
        _defaults = cls()

        return cls(
            date_format=os.getenv("MODEL_UI_DATE_FORMAT", _defaults.date_format),
            default_order_priority=float(
                os.getenv("MODEL_UI_DEFAULT_ORDER", str(_defaults.default_order_priority))
            ),
            escape_html=_env_bool("MODEL_UI_ESCAPE_HTML", _defaults.escape_html),
            default_flavour=os.getenv("MODEL_UI_DEFAULT_FLAVOUR", _defaults.default_flavour),
            log_level=os.getenv("MODEL_UI_LOG_LEVEL", _defaults.log_level).upper(),
            enable_tracing=_env_bool("MODEL_UI_ENABLE_TRACING", _defaults.enable_tracing),
            trace_to_console=_env_bool("MODEL_UI_TRACE_CONSOLE", _defaults.trace_to_console),
            trace_verbose=_env_bool("MODEL_UI_TRACE_VERBOSE", _defaults.trace_verbose),
            trace_file=os.getenv("MODEL_UI_TRACE_FILE", _defaults.trace_file),
            indent_json_output=int(
                os.getenv("MODEL_UI_JSON_INDENT", str(_defaults.indent_json_output))
            ),
        )


config = ModelUIConfig.from_env()


def get_config() -> ModelUIConfig:
    """Get the current configuration."""
    return config


def update_config(**kwargs) -> ModelUIConfig:
    """Update configuration settings."""
    global config
    for key, value in kwargs.items():
        if hasattr(config, key):
            setattr(config, key, value)
    return config
