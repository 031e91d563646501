from __future__ import annotations
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field


class Config(BaseModel):
    model_config = ConfigDict(extra="ignore")

    token: str = Field(..., description="Plex X-Plex-Token")
    host: str = Field(..., description="Plex server base URL, e.g. http://plex.local:32400")
    webhook: str = Field(..., description="Chat webhook URL the digest is posted to")
    # Sent as-is; blank or padded names are the operator's choice.
    username: str = Field(..., description="Display name for the webhook message")


class ConfigFile(BaseModel):
    model_config = ConfigDict(extra="ignore")

    config: Config


def validate_config(raw: Dict[str, Any]) -> Config:
    """
    Validate the `config:` section of config.yml and return it.
    """
    return ConfigFile.model_validate(raw).config
