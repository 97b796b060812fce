"""Configuration package: structured logging and environment settings."""

from .logger import configure_logging, logger
from .settings import DEFAULT_SOURCE, Settings, load_settings

__all__ = ["configure_logging", "logger", "DEFAULT_SOURCE", "Settings", "load_settings"]
