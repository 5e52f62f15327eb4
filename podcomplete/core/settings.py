"""
Settings loader for podcomplete.

Settings come from a YAML file: an explicit path, else ``$PODCOMPLETE_CONFIG``,
else ``~/.config/podcomplete/config.yaml``. A missing default file means
defaults; a missing explicit file is an error.
"""

import os
import logging
from typing import Any, Dict, List, Optional

import yaml

from .accounts import DEFAULT_GROUP_PATH, DEFAULT_PASSWD_PATH
from .exceptions import ConfigError

logger = logging.getLogger("podcomplete")

CONFIG_ENV_VAR = "PODCOMPLETE_CONFIG"
ENGINE_ENV_VAR = "PODCOMPLETE_ENGINE"
DEFAULT_CONFIG_PATH = os.path.join("~", ".config", "podcomplete", "config.yaml")
DEFAULT_ENGINE_COMMAND = "podman"


class Settings:
    """Engine and account settings used to build the completion backend."""

    def __init__(
        self,
        engine_command: str = DEFAULT_ENGINE_COMMAND,
        engine_global_args: Optional[List[str]] = None,
        service_destinations: Optional[Dict[str, str]] = None,
        registries: Optional[List[str]] = None,
        passwd_path: str = DEFAULT_PASSWD_PATH,
        group_path: str = DEFAULT_GROUP_PATH,
        source: Optional[str] = None,
    ):
        self.engine_command = engine_command
        self.engine_global_args = list(engine_global_args or [])
        self.service_destinations = dict(service_destinations or {})
        self.registries = list(registries or [])
        self.passwd_path = passwd_path
        self.group_path = group_path
        self.source = source

    @classmethod
    def from_dict(cls, data: Dict[str, Any], source: Optional[str] = None) -> "Settings":
        """
        Build settings from the parsed YAML document.

        Raises:
            ConfigError: If a section or value has the wrong type
        """
        if not isinstance(data, dict):
            raise ConfigError(f"Settings must be a mapping, got {type(data).__name__}")

        engine = _section(data, "engine")
        accounts = _section(data, "accounts")

        destinations = engine.get("service_destinations") or {}
        if not isinstance(destinations, dict):
            raise ConfigError("engine.service_destinations must be a mapping of name to URI")
        parsed_destinations = {}
        for name, value in destinations.items():
            # Accept both `name: uri` and the containers.conf shape `name: {uri: ...}`
            uri = value.get("uri") if isinstance(value, dict) else value
            if not isinstance(uri, str):
                raise ConfigError(f"engine.service_destinations.{name} has no URI")
            parsed_destinations[str(name)] = uri

        return cls(
            engine_command=_string(engine, "command", DEFAULT_ENGINE_COMMAND, "engine.command"),
            engine_global_args=_string_list(engine, "global_args", "engine.global_args"),
            service_destinations=parsed_destinations,
            registries=_string_list(data, "registries", "registries"),
            passwd_path=_string(accounts, "passwd", DEFAULT_PASSWD_PATH, "accounts.passwd"),
            group_path=_string(accounts, "group", DEFAULT_GROUP_PATH, "accounts.group"),
            source=source,
        )

    def engine_argv(self, *args: str) -> List[str]:
        """Full engine command line for a subcommand."""
        return [self.engine_command, *self.engine_global_args, *args]

    def __repr__(self):
        return f"Settings(engine={self.engine_command!r}, source={self.source!r})"


def _section(data: Dict[str, Any], name: str) -> Dict[str, Any]:
    section = data.get(name) or {}
    if not isinstance(section, dict):
        raise ConfigError(f"'{name}' must be a mapping")
    return section


def _string(section: Dict[str, Any], key: str, default: str, label: str) -> str:
    value = section.get(key, default)
    if not isinstance(value, str) or not value:
        raise ConfigError(f"{label} must be a non-empty string")
    return value


def _string_list(section: Dict[str, Any], key: str, label: str) -> List[str]:
    value = section.get(key) or []
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ConfigError(f"{label} must be a list of strings")
    return value


def load_settings(path: Optional[str] = None) -> Settings:
    """
    Load settings from YAML.

    Args:
        path: Settings file; falls back to $PODCOMPLETE_CONFIG, then the default path

    Returns:
        Settings, with $PODCOMPLETE_ENGINE applied last

    Raises:
        ConfigError: If an explicitly requested file is missing or any file is invalid
    """
    explicit = path or os.environ.get(CONFIG_ENV_VAR)
    file_path = os.path.expanduser(explicit or DEFAULT_CONFIG_PATH)

    if not os.path.exists(file_path):
        if explicit:
            raise ConfigError(f"Settings file not found: {file_path}")
        logger.debug(f"No settings file at {file_path}, using defaults")
        settings = Settings()
    else:
        logger.debug(f"Reading settings from file: {file_path}")
        try:
            with open(file_path, "r") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Error parsing YAML in settings file {file_path}: {e}") from e
        except OSError as e:
            raise ConfigError(f"Cannot read settings file {file_path}: {e}") from e
        settings = Settings.from_dict(data or {}, source=file_path)

    engine_override = os.environ.get(ENGINE_ENV_VAR)
    if engine_override:
        logger.debug(f"Engine command overridden by {ENGINE_ENV_VAR}: {engine_override}")
        settings.engine_command = engine_override

    return settings
