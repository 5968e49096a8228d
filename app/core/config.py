"""
Configuration module - loads all env vars using pydantic-settings.
This is the SINGLE SOURCE OF TRUTH for all config values.
"""

from functools import lru_cache
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # PostgreSQL
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_user: str = "placement_user"
    postgres_password: str = "password"
    postgres_db: str = "placement_db"

    # MongoDB (notices + events)
    mongodb_uri: str = "mongodb://localhost:27017"
    mongodb_db: str = "placement_docs"

    # Draft generation (any OpenAI-compatible provider, DeepSeek by default)
    deepseek_api_key: str = ""
    deepseek_base_url: str = "https://api.deepseek.com/v1"
    draft_model: str = "deepseek-chat"

    # Listmonk mailing service
    listmonk_url: str = "http://localhost:9000"
    listmonk_username: str = "admin"
    listmonk_password: str = "listmonk"
    listmonk_timeout: Optional[float] = None  # seconds, None = wait forever

    # Used in email bodies
    portal_base_url: str = "http://localhost:8000"
    institution_name: str = "National Forensic Sciences University (NFSU), Dharwad"
    placement_cell_signature: str = "Placement Cell, NFSU Dharwad"

    # JWT Auth
    jwt_secret_key: str = "change-this-secret"
    jwt_algorithm: str = "HS256"
    jwt_expire_minutes: int = 1440

    # App
    debug: bool = True
    log_level: str = "INFO"

    @property
    def postgres_url(self) -> str:
        """Construct PostgreSQL connection URL"""
        return (
            f"postgresql://{self.postgres_user}:{self.postgres_password}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8"
    )


@lru_cache()
def get_settings() -> Settings:
    return Settings()
