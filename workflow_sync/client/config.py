"""Configuration for the synchronized list client."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ClientSettings(BaseSettings):
    """Settings for talking to the workflow API.

    Environment variables:
    - API_URL              (optional)
    - API_TIMEOUT_SECONDS  (optional)
    """

    api_url: str = Field(
        default="http://localhost:5000",
        validation_alias="API_URL",
        description="Base URL of the workflow API",
    )
    timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        validation_alias="API_TIMEOUT_SECONDS",
        description="Per-request timeout; a timeout surfaces as a service error",
    )

    model_config = SettingsConfigDict(env_prefix="", env_file=".env", extra="ignore")

    @property
    def base_url(self) -> str:
        return self.api_url.rstrip("/")
