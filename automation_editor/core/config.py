"""
Application Configuration
"""
from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Application
    APP_NAME: str = "Workflow Automation Editor"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False

    # Persistence API (external collaborator that stores automations)
    AUTOMATION_API_BASE_URL: str = "http://localhost:5000"
    AUTOMATION_API_TOKEN: Optional[str] = None

    # Serializer
    # topology: walk connections from the trigger (ties broken by y)
    # position: sort action nodes by vertical position only
    ACTION_ORDERING: Literal["topology", "position"] = "topology"

    # Editor sessions
    # Sessions untouched for longer than this are dropped (0 disables)
    SESSION_IDLE_TIMEOUT_SECONDS: int = 3600

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    LOG_TO_FILE: bool = False
    LOG_DIR: Path = Path(__file__).parent.parent.parent / "logs"


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance
    Using lru_cache ensures settings are loaded once and reused
    """
    return Settings()
