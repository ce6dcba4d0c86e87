"""Configuration management for rubo.

Loads ``settings.yaml`` and ``.env`` from the config directory into a
Config object. Environment variables override the YAML values for the
robot identity and adapter so a deployment can be retargeted without
editing files.

Key classes:
    Config: Central configuration manager.

Key functions:
    get_config: Singleton accessor for the global Config instance.
"""

import os
from pathlib import Path
from typing import List, Optional

import structlog
import yaml
from dotenv import load_dotenv

logger = structlog.get_logger("rubo.config")

DEFAULT_PLUGINS = ["rubo.plugins.help", "rubo.plugins.ping"]


class Config:
    """Typed access to rubo settings.

    Args:
        config_dir: Directory holding ``settings.yaml`` and ``.env``.
            Defaults to ``RUBO_CONFIG_DIR`` or ``./config``.
    """

    def __init__(self, config_dir: Optional[Path] = None):
        if config_dir is None:
            config_dir = Path(os.environ.get("RUBO_CONFIG_DIR", "config"))
        self.config_dir = Path(config_dir)

        env_file = self.config_dir / ".env"
        if env_file.exists():
            load_dotenv(env_file)

        self.settings = self._load_yaml("settings.yaml")

    def _load_yaml(self, filename: str) -> dict:
        """Load a YAML configuration file."""
        filepath = self.config_dir / filename
        if filepath.exists():
            with open(filepath, "r", encoding="utf-8") as f:
                return yaml.safe_load(f) or {}
        return {}

    @property
    def name(self) -> str:
        """Robot name. Env var RUBO_NAME takes precedence."""
        return os.environ.get("RUBO_NAME") or str(self.settings.get("name", "Rubo"))

    @property
    def alias(self) -> Optional[str]:
        """Optional alias prefix (e.g. "/"). Env var RUBO_ALIAS takes precedence."""
        value = os.environ.get("RUBO_ALIAS") or self.settings.get("alias")
        return str(value) if value else None

    @property
    def adapter(self) -> str:
        """Adapter name (default shell). Env var RUBO_ADAPTER takes precedence."""
        return os.environ.get("RUBO_ADAPTER") or self.settings.get("adapter", "shell")

    @property
    def plugins(self) -> List[str]:
        """Plugin names or module paths, loaded in this order."""
        plugins = self.settings.get("plugins", DEFAULT_PLUGINS)
        if not isinstance(plugins, list):
            logger.error("plugins_invalid_type", type=type(plugins).__name__)
            return list(DEFAULT_PLUGINS)
        return [str(p) for p in plugins]

    @property
    def _log_config(self) -> dict:
        log_config = self.settings.get("logging", {})
        return log_config if isinstance(log_config, dict) else {}

    @property
    def logging_level(self) -> str:
        """Global log level (default INFO)."""
        return self._log_config.get("level", "INFO")

    @property
    def log_dir(self) -> Optional[Path]:
        """Directory for rubo.log; None keeps logging console-only."""
        configured = self._log_config.get("dir")
        if configured:
            return Path(configured).expanduser()
        return None

    @property
    def logging_max_file_size_mb(self) -> int:
        return self._log_config.get("max_file_size_mb", 10)

    @property
    def logging_backup_count(self) -> int:
        return self._log_config.get("backup_count", 5)

    def validate(self) -> None:
        """Log obviously broken settings. Never raises."""
        if not self.name.strip():
            logger.error("config_invalid_value", key="name", value=self.name)
        if self.alias is not None and self.alias == self.name:
            logger.warning("config_alias_equals_name", alias=self.alias)
        log_config = self.settings.get("logging", {})
        if not isinstance(log_config, dict):
            logger.error("config_invalid_value", key="logging", value=log_config)
        plugins = self.settings.get("plugins")
        if plugins is not None and not isinstance(plugins, list):
            logger.error("config_invalid_value", key="plugins", value=plugins)


# Global config instance
_config: Optional[Config] = None


def get_config() -> Config:
    """Get or create the global config instance."""
    global _config
    if _config is None:
        _config = Config()
    return _config
