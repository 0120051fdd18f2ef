"""Environment configuration for the Instagram client."""

from __future__ import annotations

import os
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, model_validator

load_dotenv()

DEFAULT_API_BASE_URL = "https://api.instagram.com/v1"


def _optional_env(name: str) -> Optional[str]:
    value = os.getenv(name)
    if value is None:
        return None
    return value.strip() or None


class AppSettings(BaseModel):
    name: str = Field(
        default_factory=lambda: os.getenv("APP_NAME", "Instagram Client").strip()
        or "Instagram Client"
    )
    log_level: str = Field(
        default_factory=lambda: os.getenv("LOG_LEVEL", "INFO").strip().upper()
    )

    @model_validator(mode="after")
    def _validate(self) -> "AppSettings":
        if self.log_level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(
                "LOG_LEVEL must be one of DEBUG, INFO, WARNING, ERROR, CRITICAL"
            )
        return self


class InstagramSettings(BaseModel):
    api_base_url: str = Field(
        default_factory=lambda: os.getenv(
            "INSTAGRAM_API_BASE_URL", DEFAULT_API_BASE_URL
        ).strip()
        or DEFAULT_API_BASE_URL
    )
    client_id: str = Field(
        default_factory=lambda: os.getenv("INSTAGRAM_CLIENT_ID", "").strip()
    )
    client_secret: str = Field(
        default_factory=lambda: os.getenv("INSTAGRAM_CLIENT_SECRET", "").strip()
    )
    # Acquired out of band (OAuth login is the embedding application's job)
    access_token: Optional[str] = Field(
        default_factory=lambda: _optional_env("INSTAGRAM_ACCESS_TOKEN")
    )

    @model_validator(mode="after")
    def _validate(self) -> "InstagramSettings":
        if not self.api_base_url.startswith(("http://", "https://")):
            raise ValueError(
                "INSTAGRAM_API_BASE_URL must start with http:// or https://"
            )
        self.api_base_url = self.api_base_url.rstrip("/")
        return self


class Settings(BaseModel):
    app: AppSettings = Field(default_factory=AppSettings)
    instagram: InstagramSettings = Field(default_factory=InstagramSettings)

    model_config = dict(extra="ignore")

    @property
    def app_name(self) -> str:
        return self.app.name

    @property
    def log_level(self) -> str:
        return self.app.log_level

    @property
    def api_base_url(self) -> str:
        return self.instagram.api_base_url

    @property
    def access_token(self) -> Optional[str]:
        return self.instagram.access_token


@lru_cache
def get_settings() -> Settings:
    return Settings()
