"""Configuration management for botwire.

Loads YAML settings (settings.yaml) and environment variables (.env)
into a typed Config object. Property getters provide safe access with
sensible defaults for logging and declared commands.

Key classes:
    Config: Central configuration manager.

Key functions:
    get_config: Singleton accessor for the global Config instance.
"""

import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import structlog
import yaml
from dotenv import load_dotenv

from .exceptions import ConfigurationError

logger = structlog.get_logger("botwire.config")


class Config:
    """Central configuration manager for botwire.

    Args:
        config_dir: Path to the config directory. Defaults to
            ``$BOTWIRE_CONFIG_DIR`` or ``<repo_root>/config/``.
    """

    def __init__(self, config_dir: Optional[Path] = None):
        if config_dir is None:
            env_dir = os.environ.get("BOTWIRE_CONFIG_DIR")
            config_dir = Path(env_dir) if env_dir else Path(__file__).parent.parent / "config"
        self.config_dir = config_dir

        env_file = config_dir / ".env"
        if env_file.exists():
            load_dotenv(env_file)

        self.settings = self._load_yaml("settings.yaml")

    def _load_yaml(self, filename: str) -> dict:
        """Load a YAML configuration file."""
        filepath = self.config_dir / filename
        if not filepath.exists():
            return {}
        with open(filepath, "r") as f:
            try:
                data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ConfigurationError(
                    "Cannot parse YAML", setting_name=filename, error=str(e)
                ) from e
        if not isinstance(data, dict):
            raise ConfigurationError(
                "Top-level YAML must be a mapping",
                setting_name=filename,
                type=type(data).__name__,
            )
        return data

    def validate(self):
        """Validate settings at startup.

        Logs errors but does not raise; invalid command entries are
        rejected later when they are loaded.
        """
        commands = self.settings.get("commands", [])
        if not isinstance(commands, list):
            logger.error("commands_invalid_type", type=type(commands).__name__)
            return
        for index, entry in enumerate(commands):
            if not isinstance(entry, dict):
                logger.error("command_entry_invalid_type", index=index, type=type(entry).__name__)

    @property
    def log_dir(self) -> Path:
        """Get log directory path."""
        configured = self.settings.get("log_dir")
        if configured:
            return Path(configured).expanduser()
        return Path(__file__).parent.parent / "logs"

    @property
    def logging_level(self) -> str:
        """Global log level (default INFO). Env var BOTWIRE_LOG_LEVEL takes precedence."""
        log_config = self.settings.get("logging", {})
        return os.environ.get("BOTWIRE_LOG_LEVEL") or log_config.get("level", "INFO")

    @property
    def logging_subsystem_levels(self) -> dict:
        """Per-subsystem log level overrides. E.g. {"commands": "DEBUG"}."""
        log_config = self.settings.get("logging", {})
        return log_config.get("subsystem_levels", {})

    @property
    def logging_max_file_size_mb(self) -> int:
        """Max size per log file in MB before rotation (default 10)."""
        log_config = self.settings.get("logging", {})
        return log_config.get("max_file_size_mb", 10)

    @property
    def logging_backup_count(self) -> int:
        """Number of rotated log files to keep (default 5)."""
        log_config = self.settings.get("logging", {})
        return log_config.get("backup_count", 5)

    @property
    def commands(self) -> List[Dict[str, Any]]:
        """Raw command entries declared under ``commands``."""
        commands = self.settings.get("commands", [])
        if not isinstance(commands, list):
            return []
        return commands


# Global config instance
_config: Optional[Config] = None


def get_config() -> Config:
    """Get or create the global config instance."""
    global _config
    if _config is None:
        _config = Config()
    return _config
