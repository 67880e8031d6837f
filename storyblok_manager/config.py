"""
Configuration management for Storyblok Manager.

Configuration is resolved once into an immutable StoryblokConfig, which is
passed into the API client at construction time.

Sources, lowest to highest priority:
    1. Built-in defaults
    2. Config file (~/.storyblok-manager/config.json)
    3. Environment variables (STORYBLOK_SPACE_ID, STORYBLOK_MANAGEMENT_TOKEN, ...)
"""

import json
import logging
import os
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://mapi.storyblok.com/v1"
DEFAULT_TIMEOUT = 30
DEFAULT_CONFIG_DIR = Path.home() / ".storyblok-manager"
CONFIG_FILE_NAME = "config.json"

ENV_CONFIG_DIR = "STORYBLOK_CONFIG_DIR"
ENV_OVERRIDES = {
    "STORYBLOK_SPACE_ID": "space_id",
    "STORYBLOK_MANAGEMENT_TOKEN": "management_token",
    "STORYBLOK_API_URL": "base_url",
    "STORYBLOK_TIMEOUT": "timeout",
}


@dataclass(frozen=True)
class StoryblokConfig:
    """Immutable client configuration."""

    space_id: str = ""
    management_token: str = ""
    base_url: str = DEFAULT_API_URL
    timeout: int = DEFAULT_TIMEOUT
    verify_ssl: bool = True

    def is_configured(self) -> bool:
        """Check whether both required settings are present."""
        return not self.missing_settings()

    def missing_settings(self) -> List[str]:
        """Names of required settings that are empty."""
        missing = []
        if not self.space_id:
            missing.append("space_id")
        if not self.management_token:
            missing.append("management_token")
        return missing

    def replace(self, **changes: Any) -> "StoryblokConfig":
        """Return a copy with the given fields changed."""
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StoryblokConfig":
        """
        Build a config from a dict, ignoring unknown keys.

        A timeout that is not a whole number is dropped with a warning and
        the default is used; the remaining values are kept.
        """
        known = {f.name for f in fields(cls)}
        values = {k: v for k, v in data.items() if k in known and v is not None}
        if "space_id" in values:
            values["space_id"] = str(values["space_id"])
        if "timeout" in values:
            try:
                values["timeout"] = int(values["timeout"])
            except (TypeError, ValueError):
                logger.warning(
                    "Ignoring invalid timeout %r, using %d seconds",
                    values.pop("timeout"), DEFAULT_TIMEOUT
                )
        return cls(**values)


class ConfigManager:
    """Loads, caches and persists the configuration file."""

    def __init__(self, config_dir: Optional[Path] = None):
        if config_dir is None:
            env_dir = os.environ.get(ENV_CONFIG_DIR)
            config_dir = Path(env_dir) if env_dir else DEFAULT_CONFIG_DIR
        self.config_dir = Path(config_dir)
        self._config: Optional[StoryblokConfig] = None

    def get_config_path(self) -> Path:
        return self.config_dir / CONFIG_FILE_NAME

    def _read_file(self) -> Dict[str, Any]:
        path = self.get_config_path()
        if not path.exists():
            return {}
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Could not read config file %s: %s", path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring config file %s: expected a JSON object", path)
            return {}
        return data

    def _read_env(self) -> Dict[str, Any]:
        values: Dict[str, Any] = {}
        for env_name, field_name in ENV_OVERRIDES.items():
            value = os.environ.get(env_name)
            if value:
                values[field_name] = value
        return values

    def load(self) -> StoryblokConfig:
        """Resolve configuration from file and environment."""
        data = self._read_file()
        data.update(self._read_env())
        try:
            return StoryblokConfig.from_dict(data)
        except (TypeError, ValueError) as e:
            logger.warning("Invalid configuration values, using defaults: %s", e)
            return StoryblokConfig()

    def get(self) -> StoryblokConfig:
        """Get the resolved configuration (loaded once)."""
        if self._config is None:
            self._config = self.load()
        return self._config

    def save(self, config: StoryblokConfig) -> None:
        """Write configuration to the config file."""
        self.config_dir.mkdir(parents=True, exist_ok=True)
        path = self.get_config_path()
        with open(path, "w", encoding="utf-8") as f:
            json.dump(config.to_dict(), f, indent=2)
        try:
            path.chmod(0o600)
        except OSError:
            logger.debug("Could not restrict permissions on %s", path)
        self._config = config

    def update(self, **kwargs: Any) -> StoryblokConfig:
        """Persist the given settings and return the new configuration."""
        data = self._read_file()
        data.update(kwargs)
        config = StoryblokConfig.from_dict(data)
        self.save(config)
        # Environment still wins for the running process
        self._config = None
        return self.get()

    def clear(self) -> None:
        """Remove the config file."""
        path = self.get_config_path()
        if path.exists():
            path.unlink()
        self._config = None


_config_manager: Optional[ConfigManager] = None


def get_config_manager(config_dir: Optional[Path] = None) -> ConfigManager:
    """Get the process-wide config manager, creating it if needed."""
    global _config_manager
    if _config_manager is None or config_dir is not None:
        _config_manager = ConfigManager(config_dir)
    return _config_manager


def get_config() -> StoryblokConfig:
    """Get the resolved process-wide configuration."""
    return get_config_manager().get()
