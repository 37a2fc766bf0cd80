"""Core utility modules for awscontactman."""

from .config import CONFIG_DIR, CONFIG_FILE_YAML, Config
from .logging_config import LoggingConfig, LogLevel, setup_logging

__all__ = [
    "CONFIG_DIR",
    "CONFIG_FILE_YAML",
    "Config",
    "LoggingConfig",
    "LogLevel",
    "setup_logging",
]
