"""
Configuration Settings.
"""

from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    """Application settings."""

    # App info
    app_name: str = "Daily Mood Check-in"
    app_version: str = "1.0.0"
    debug: bool = True

    # Storage (credential document lives under this directory)
    local_storage_path: str = "./data"

    # LLM Provider settings
    llm_provider: str = "openai"
    llm_api_key: Optional[str] = None
    llm_model: Optional[str] = "gpt-4o-mini"
    llm_base_url: Optional[str] = None  # uses provider default if not set
    llm_temperature: float = 0.7
    llm_max_tokens: int = 150
    llm_timeout: float = 60.0

    # Legacy key (still accepted)
    openai_api_key: Optional[str] = None

    # Notion workspace. Env values only seed an empty credential store.
    notion_api_key: Optional[str] = None
    notion_database_id: Optional[str] = None
    notion_api_url: str = "https://api.notion.com/v1"
    notion_version: str = "2022-06-28"
    notion_timeout: float = 30.0

    # Session lifecycle
    reset_delay_seconds: float = 3.0  # how long the saved indicator stays up

    # CORS
    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://localhost:8080",
        "http://127.0.0.1:3000",
    ]

    # Logging configuration
    log_level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_file_path: str = "./logs/moodcheck.log"
    log_file_enabled: bool = True
    log_console_enabled: bool = True
    log_json_format: bool = True  # JSON format for files, human-readable for console
    log_api_requests: bool = True  # Log all API requests/responses

    class Config:
        env_file = ".env"
        case_sensitive = False


settings = Settings()
