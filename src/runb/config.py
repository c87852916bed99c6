"""Plugin configuration loader.

Configuration comes from an optional YAML file, overridden by environment
variables. Keys in the file may use either the environment variable name
(SENHASEGURA_URL) or the field name (api_url).
"""

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import yaml

from .errors import ConfigurationError
from .injector import DEFAULT_SECRETS_FILE

logger = logging.getLogger(__name__)

CONFIG_FILE_ENV = "SENHASEGURA_CONFIG_FILE"

# field name -> environment variable
ENV_VARS = {
    "api_url": "SENHASEGURA_URL",
    "client_id": "SENHASEGURA_CLIENT_ID",
    "client_secret": "SENHASEGURA_CLIENT_SECRET",
    "disabled": "SENHASEGURA_DISABLE_RUNB",
    "secrets_file": "SENHASEGURA_SECRETS_FILE",
    "mapping_file": "SENHASEGURA_MAPPING_FILE",
    "timeout": "SENHASEGURA_TIMEOUT",
    "verify_ssl": "SENHASEGURA_VERIFY_SSL",
}

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


@dataclass
class RunbConfig:
    """Settings for one plugin run."""

    api_url: str | None = None
    client_id: str | None = None
    client_secret: str | None = None
    disabled: bool = False
    secrets_file: str = DEFAULT_SECRETS_FILE
    mapping_file: str | None = None
    timeout: float = 30.0
    verify_ssl: bool = True

    @property
    def has_client_credentials(self) -> bool:
        return bool(self.client_id and self.client_secret)


def _parse_bool(field: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"Field '{field}' must be a boolean, got {value!r}")


def _parse_float(field: str, value: Any) -> float:
    try:
        result = float(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"Field '{field}' must be a number, got {value!r}") from None
    if result <= 0:
        raise ConfigurationError(f"Field '{field}' must be positive")
    return result


def _read_config_file(config_path: str) -> dict[str, Any]:
    """Read raw settings from a YAML file, keyed by field name.

    Raises:
        ConfigurationError: If the file is missing or not a YAML mapping.
    """
    try:
        with open(config_path, "r") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigurationError(f"Cannot read config file {config_path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in config file {config_path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError("Config file must contain a YAML dictionary")

    by_env_name = {env: field for field, env in ENV_VARS.items()}
    settings: dict[str, Any] = {}
    for key, value in data.items():
        field = by_env_name.get(key, key)
        if field not in ENV_VARS:
            logger.warning("Ignoring unknown config key: %s", key)
            continue
        settings[field] = value
    return settings


def load_config(
    config_path: str | None = None,
    environ: Mapping[str, str] | None = None,
) -> RunbConfig:
    """Load configuration from file and environment.

    Args:
        config_path: YAML config file. Defaults to SENHASEGURA_CONFIG_FILE,
            or no file at all when that is unset.
        environ: Environment to read from (default: os.environ).

    Returns:
        RunbConfig with environment values taking precedence over the file.

    Raises:
        ConfigurationError: If the config file or a value is invalid.
    """
    if environ is None:
        environ = os.environ

    config_path = config_path or environ.get(CONFIG_FILE_ENV)
    settings = _read_config_file(config_path) if config_path else {}

    for field, env_name in ENV_VARS.items():
        if env_name in environ:
            settings[field] = environ[env_name]

    config = RunbConfig()
    for field in ("api_url", "client_id", "client_secret", "mapping_file"):
        value = settings.get(field)
        setattr(config, field, str(value) if value not in (None, "") else None)

    if settings.get("secrets_file"):
        config.secrets_file = str(settings["secrets_file"])
    if "disabled" in settings:
        config.disabled = _parse_bool("disabled", settings["disabled"])
    if "verify_ssl" in settings:
        config.verify_ssl = _parse_bool("verify_ssl", settings["verify_ssl"])
    if settings.get("timeout") not in (None, ""):
        config.timeout = _parse_float("timeout", settings["timeout"])

    if config.api_url:
        config.api_url = config.api_url.rstrip("/")

    return config
