"""Application configuration."""

import os
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from dinner_concierge.domain.orders import DEFAULT_HOUSEHOLD
from dinner_concierge.services.order_store import DEFAULT_STORAGE_KEY

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    openai_api_key: str | None = None
    openai_model: str = "gpt-5.2"
    openai_reasoning_effort: str = "medium"
    openai_store: bool = False
    storage_path: Path = Path(".dinner_concierge/storage.json")
    storage_key: str = DEFAULT_STORAGE_KEY
    household_members: str | None = None
    public_base_url: str = "http://localhost:8000/"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_household_members(raw: str | None) -> list[str]:
    """Parse the comma-separated household roster from env."""
    if raw is None:
        return list(DEFAULT_HOUSEHOLD)
    members: list[str] = []
    for chunk in raw.split(","):
        name = chunk.strip()
        if name and name not in members:
            members.append(name)
    return members or list(DEFAULT_HOUSEHOLD)
