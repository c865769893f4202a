"""
Configuration settings for the Space Grid Allocator

Uses pydantic-settings for environment variable management with .env file support.
"""

from typing import List, Optional
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # Initial grid bounds (the allocator only ever grows them)
    DEFAULT_GRID_ROWS: int = 5
    DEFAULT_GRID_COLS: int = 8
    # Largest number of rows or columns the grid may grow to
    MAX_GRID_DIM: int = 500

    # Activity log endpoint; events are only logged locally when unset
    ACTIVITY_LOG_URL: Optional[str] = None

    # Timeouts (in seconds)
    SERVICE_TIMEOUT: float = 10.0

    # Server config
    HOST: str = "0.0.0.0"
    PORT: int = 8090

    # CORS
    CORS_ORIGINS: List[str] = ["*"]

    # Logging
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True


settings = Settings()
