"""Notepad configuration loaded from environment variables."""

from __future__ import annotations

from typing import Literal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from .env file."""

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    # Remote collection
    store_backend: Literal["redis", "memory"] = "redis"
    redis_url: str = "redis://localhost:6379"
    notes_collection: str = "notes"

    # HTTP API
    api_host: str = "0.0.0.0"
    api_port: int = 8000

    log_level: str = "INFO"


settings = Settings()
