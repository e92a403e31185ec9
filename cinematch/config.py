"""
Runtime configuration helpers for the CineMatch client core.

Loads backend, storage and realtime settings from the environment and from
the .env file located in the project root.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Resolve the project root
BASE_DIR = Path(__file__).resolve().parents[1]

# Absolute path to .env
ENV_PATH = BASE_DIR / ".env"

# Load .env defaults without overriding environment variables provided by the platform
load_dotenv(dotenv_path=ENV_PATH, override=False)

DEFAULT_STORAGE_PATH = Path.home() / ".cinematch" / "storage.json"


class Settings(BaseSettings):
    api_base_url: str = Field(default="https://cine-match-backend.vercel.app", alias="CINEMATCH_API_BASE_URL")
    api_timeout: float = Field(default=30.0, alias="CINEMATCH_API_TIMEOUT")
    posters_timeout: float = Field(default=8.0, alias="CINEMATCH_POSTERS_TIMEOUT")
    log_api_traffic: bool = Field(default=False, alias="CINEMATCH_LOG_API_TRAFFIC")

    # Token store
    storage_path: Path = Field(default=DEFAULT_STORAGE_PATH, alias="CINEMATCH_STORAGE_PATH")
    vault_key: str | None = Field(default=None, alias="CINEMATCH_VAULT_KEY")

    # Realtime chat windows
    chat_page_size: int = Field(default=30, alias="CINEMATCH_CHAT_PAGE_SIZE")
    chat_list_limit: int = Field(default=50, alias="CINEMATCH_CHAT_LIST_LIMIT")

    # Debounce windows (seconds)
    refresh_debounce: float = Field(default=0.5, alias="CINEMATCH_REFRESH_DEBOUNCE")
    search_debounce: float = Field(default=1.5, alias="CINEMATCH_SEARCH_DEBOUNCE")
    movie_search_debounce: float = Field(default=0.5, alias="CINEMATCH_MOVIE_SEARCH_DEBOUNCE")

    # Firebase
    firebase_credentials: str | None = Field(default=None, alias="FIREBASE_CREDENTIALS")
    firebase_project_id: str | None = Field(default=None, alias="FIREBASE_PROJECT_ID")

    model_config = SettingsConfigDict(
        env_file=str(ENV_PATH),
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )


@lru_cache()
def get_settings() -> Settings:
    return Settings()


__all__ = ["Settings", "get_settings"]
