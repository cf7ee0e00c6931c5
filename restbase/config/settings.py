"""Pydantic Settings for the API client layer.

All environment variables use the RESTBASE_ prefix.
Example: RESTBASE_BASE_URL=https://api.example.com/v1, RESTBASE_FLAVOR=prd
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings

BUNDLED_MESSAGES_PATH = str(Path(__file__).with_name("messages.yaml"))


class Flavor(str, Enum):
    """Build flavors. Only production hides diagnostic status codes."""

    DEV = "dev"
    STG = "stg"
    PRD = "prd"


class ApiSettings(BaseSettings):
    """Client configuration validated from environment variables."""

    # Backend
    base_url: str  # e.g. "https://api.example.com/v1"
    timeout_seconds: float = Field(default=30.0, gt=0)

    # Build
    flavor: Flavor = Flavor.DEV
    log_level: str = "INFO"
    log_bodies: bool = True

    # Localization
    default_locale: str = "en"
    messages_path: str = BUNDLED_MESSAGES_PATH

    model_config = {"env_prefix": "RESTBASE_"}

    @property
    def is_production(self) -> bool:
        return self.flavor is Flavor.PRD
