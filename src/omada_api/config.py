"""
Configuration for the Omada controller client.
Sources: dataclass defaults, optional YAML file, then environment (.env aware)
"""

import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Optional

import yaml

from .exceptions import ConfigurationError
from .utils import load_env_file

ENV_VARS = {
    "base_url": "OMADA_URL",
    "username": "OMADA_USER",
    "password": "OMADA_PASS",
    "verify_ssl": "OMADA_VERIFY_SSL",
    "timeout": "OMADA_TIMEOUT",
    "site": "OMADA_SITE",
}

_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class OmadaConfig:
    """Connection settings for one controller"""

    base_url: str = ""
    username: str = "admin"
    password: str = ""
    # Hardware controllers ship self-signed certificates
    verify_ssl: bool = False
    timeout: float = 30.0
    site: Optional[str] = None  # Site name; first site when unset

    def __post_init__(self):
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))

    def validate(self) -> "OmadaConfig":
        """Check required settings, returning self for chaining"""
        if not self.base_url:
            raise ConfigurationError(
                "Controller URL not set. Set OMADA_URL or base_url in the config file."
            )
        if not self.base_url.startswith(("http://", "https://")):
            raise ConfigurationError(
                f"Controller URL must start with http:// or https://: {self.base_url}"
            )
        if not self.password:
            raise ConfigurationError(
                "Controller password not set. Set OMADA_PASS or password in the config file."
            )
        if self.timeout <= 0:
            raise ConfigurationError(f"Timeout must be positive: {self.timeout}")
        return self

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "OmadaConfig":
        """Build a config from a mapping, ignoring unknown keys"""
        known = {f.name for f in fields(cls)}
        values = {k: _coerce(k, v) for k, v in data.items() if k in known and v is not None}
        return cls(**values)


def _coerce(name: str, value: Any) -> Any:
    if name == "verify_ssl" and isinstance(value, str):
        return value.strip().lower() in _TRUE_VALUES
    if name == "timeout":
        try:
            return float(value)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"Invalid timeout value: {value!r}") from e
    if name == "verify_ssl":
        return bool(value)
    return str(value)


def load_yaml_config(config_path: Path) -> dict[str, Any]:
    """Load controller settings from YAML (top-level or under ``omada:``)"""
    if not config_path.exists():
        raise ConfigurationError(f"Config file not found at {config_path}")

    try:
        with config_path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {config_path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Config at {config_path} must be a YAML mapping")

    section = data.get("omada", data)
    if not isinstance(section, dict):
        raise ConfigurationError(f"'omada' section in {config_path} must be a mapping")
    return section


def load_config(
    config_path: Optional[Path] = None,
    env_file: Optional[Path] = None,
    **overrides: Any,
) -> OmadaConfig:
    """Resolve the effective configuration.

    Precedence, lowest first: defaults, YAML file, environment variables
    (after loading ``.env``), keyword overrides.
    """
    load_env_file(env_file)

    values: dict[str, Any] = {}
    if config_path is not None:
        values.update(load_yaml_config(Path(config_path)))

    for name, env_var in ENV_VARS.items():
        env_value = os.getenv(env_var)
        if env_value is not None and env_value != "":
            values[name] = env_value

    values.update({k: v for k, v in overrides.items() if v is not None})
    return OmadaConfig.from_dict(values)
