"""YAML configuration loader with environment variable overrides.

Configuration is loaded in layers (later layers override earlier):

  1. YAML file (e.g. ``config/hotzenplotz.yaml``): static defaults
  2. ``.env`` file: local developer overrides
  3. Environment variables: set at deploy time

The YAML file is a flat mapping of :class:`Settings` field names::

    backend_url: https://api.example.com/data
    persist_locally: true
    store_db_path: data/cache.db
"""

from pathlib import Path

import yaml
from pydantic import ValidationError

from hotzenplotz.config.settings import Settings
from hotzenplotz.utils.errors import ConfigurationError


def load_config(path: str | Path = "config/hotzenplotz.yaml") -> Settings:
    """Load YAML defaults and overlay environment-based Settings.

    A missing file is not an error; the environment alone is used.

    Args:
        path: Path to the YAML configuration file.

    Returns:
        Fully resolved Settings.

    Raises:
        ConfigurationError: If the file is not valid YAML, is not a mapping,
            names unknown settings, or holds invalid values.
    """
    config_path = Path(path)
    yaml_config: dict = {}
    if config_path.exists():
        try:
            with open(config_path, encoding="utf-8") as f:
                yaml_config = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ConfigurationError(f"Cannot parse {config_path}: {exc}") from exc

    if not isinstance(yaml_config, dict):
        raise ConfigurationError(f"{config_path} must contain a mapping of settings")

    unknown = sorted(set(yaml_config) - set(Settings.model_fields))
    if unknown:
        raise ConfigurationError(f"Unknown settings in {config_path}: {', '.join(unknown)}")

    try:
        env_settings = Settings()
        # Only fields that actually came from the environment override YAML.
        env_overrides = env_settings.model_dump(include=env_settings.model_fields_set)
        return Settings(**{**yaml_config, **env_overrides})
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid configuration: {exc}") from exc
