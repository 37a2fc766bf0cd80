"""Configuration utilities for awscontactman."""

import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from rich.console import Console

from ..contacts.retry import RetryPolicy

console = Console(stderr=True)

CONFIG_DIR = Path.home() / ".awscontactman"
CONFIG_FILE_YAML = CONFIG_DIR / "config.yaml"
CONFIG_FILE_ENV_VAR = "AWSCONTACTMAN_CONFIG"

# Default retry configuration
DEFAULT_RETRY_CONFIG = {
    "max_attempts": 3,
    "base_delay_ms": 100,
    "max_delay_ms": 5000,
}

# Default export configuration
DEFAULT_EXPORT_CONFIG = {
    "bucket": None,  # Prompted for when not configured
    "prefix": "",
}

# Default logging configuration
DEFAULT_LOGGING_CONFIG = {
    "level": "WARNING",
    "file": None,  # Rotating log file path, disabled when unset
}


class Config:
    """Manages awscontactman configuration stored as YAML."""

    def __init__(self, config_file: Optional[Path] = None):
        """Initialize the configuration manager.

        Args:
            config_file: Path of the YAML file. Defaults to the path in
                AWSCONTACTMAN_CONFIG, then ~/.awscontactman/config.yaml.
        """
        env_path = os.environ.get(CONFIG_FILE_ENV_VAR)
        self.config_file = Path(config_file or env_path or CONFIG_FILE_YAML).expanduser()
        self.config_data: Dict[str, Any] = {}
        self._config_loaded = False

    def _ensure_config_loaded(self):
        """Ensure configuration is loaded from file."""
        if not self._config_loaded:
            self._load_config()
            self._config_loaded = True

    def _load_config(self):
        """Load the configuration from file; a missing file means an empty config."""
        if not self.config_file.exists():
            self.config_data = {}
            return

        try:
            with open(self.config_file, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            console.print(
                f"[red]Error: Configuration file {self.config_file} is not valid YAML: {e}[/red]"
            )
            data = {}
        except OSError as e:
            console.print(f"[red]Error reading configuration file {self.config_file}: {e}[/red]")
            data = {}

        if not isinstance(data, dict):
            console.print(
                f"[yellow]Warning: Ignoring {self.config_file}, expected a mapping at top level[/yellow]"
            )
            data = {}
        self.config_data = data

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value with dot notation support.

        Args:
            key: Configuration key (supports dot notation like "retry.max_attempts")
            default: Default value if key doesn't exist

        Returns:
            Configuration value
        """
        self._ensure_config_loaded()

        value: Any = self.config_data
        for part in key.split("."):
            if isinstance(value, dict) and part in value:
                value = value[part]
            else:
                return default
        return value

    def get_retry_config(self) -> Dict[str, Any]:
        """Get retry configuration merged over the defaults, with env overrides."""
        retry_config = dict(DEFAULT_RETRY_CONFIG)
        user_config = self.get("retry", {})
        if isinstance(user_config, dict):
            retry_config.update({k: v for k, v in user_config.items() if v is not None})

        retry_config["max_attempts"] = self._get_env_int(
            "AWSCONTACTMAN_RETRY_MAX_ATTEMPTS", retry_config["max_attempts"]
        )
        return retry_config

    def retry_policy(self) -> RetryPolicy:
        """Build the retry policy for a run.

        Raises:
            ValueError: If the configured values are out of range
        """
        retry_config = self.get_retry_config()
        return RetryPolicy.from_milliseconds(
            max_attempts=int(retry_config["max_attempts"]),
            base_delay_ms=int(retry_config["base_delay_ms"]),
            max_delay_ms=int(retry_config["max_delay_ms"]),
        )

    def get_export_config(self) -> Dict[str, Any]:
        """Get S3 export configuration merged over the defaults."""
        export_config = dict(DEFAULT_EXPORT_CONFIG)
        user_config = self.get("export", {})
        if isinstance(user_config, dict):
            export_config.update(user_config)
        return export_config

    def get_logging_config(self) -> Dict[str, Any]:
        """Get logging configuration merged over the defaults."""
        logging_config = dict(DEFAULT_LOGGING_CONFIG)
        user_config = self.get("logging", {})
        if isinstance(user_config, dict):
            logging_config.update(user_config)
        return logging_config

    def _get_env_int(self, env_var: str, default: int) -> int:
        """Read an integer from the environment, falling back to ``default``."""
        value = os.environ.get(env_var)
        if value is None:
            return default
        try:
            return int(value)
        except ValueError:
            console.print(
                f"[yellow]Warning: Invalid integer value for {env_var}: {value}, "
                f"using default {default}[/yellow]"
            )
            return default
