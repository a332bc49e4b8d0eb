from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration.

    Values are loaded from environment variables and optional .env file.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", case_sensitive=False)

    # App
    app_name: str = "Seating Planner API"
    app_version: str = "0.1.0"
    api_prefix: str = "/api/v1"
    debug: bool = False
    cors_origins: List[str] = ["http://localhost:3000", "http://localhost:5173"]
    log_level: str = "INFO"

    # Arrangement defaults
    default_table_limit: int = 5  # free tier
    default_room_name: str = "Main Hall"
    default_room_width: int = 800
    default_room_height: int = 600

    # Sessions kept in memory before the least recently used is evicted
    max_sessions: int = 1000

    # Distance between a table edge and the seats placed around it
    seat_offset: float = 20.0


@lru_cache
def get_settings() -> Settings:
    return Settings()
