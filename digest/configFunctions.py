from __future__ import annotations
import yaml
from typing import Any, Dict

from pydantic import ValidationError

from .config_model import Config, validate_config
from .errors import ConfigError


def getConfig(path: str) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    return data


def loadConfig(path: str) -> Config:
    """
    Read and validate config.yml. Any problem is fatal and surfaces as
    ConfigError before a single request is made to Plex.
    """
    try:
        raw = getConfig(path)
    except OSError as e:
        raise ConfigError(f"Unable to read config '{path}': {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Config '{path}' is not valid YAML: {e}") from e

    try:
        return validate_config(raw)
    except ValidationError as e:
        raise ConfigError(f"Config '{path}' is malformed: {e}") from e
