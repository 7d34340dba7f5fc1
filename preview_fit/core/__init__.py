"""Logging, configuration and path helpers shared by every preview_fit package."""

from .config_manager import ConfigManager, get_config_manager
from .logging_config import configure_logging
from .logging_utils import LoggerLike, StructuredLogger, ensure_structured_logger, get_module_logger
from .preferences import Preferences, ScopedPreferences

__all__ = [
    "ConfigManager",
    "LoggerLike",
    "Preferences",
    "ScopedPreferences",
    "StructuredLogger",
    "configure_logging",
    "ensure_structured_logger",
    "get_config_manager",
    "get_module_logger",
]
