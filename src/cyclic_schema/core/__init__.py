"""Configuration and logging."""

from cyclic_schema.core.config import DEFAULT_MAX_SHALLOW_DEPTH, ValidatorSettings, load_settings
from cyclic_schema.core.logging import configure_logging, get_logger

__all__ = [
    "DEFAULT_MAX_SHALLOW_DEPTH",
    "ValidatorSettings",
    "configure_logging",
    "get_logger",
    "load_settings",
]
