# speedx/core/config.py
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_INSIGHT_ENDPOINT = (
    "https://generativelanguage.googleapis.com/v1beta/models/gemini-1.5-flash:generateContent"
)

class Settings(BaseSettings):
    """Loads environment variables from .env file."""
    ANALYZE_ENDPOINT: str = "http://localhost:3000"
    GEMINI_API_KEY: str
    INSIGHT_ENDPOINT: str = DEFAULT_INSIGHT_ENDPOINT
    REQUEST_TIMEOUT: Optional[float] = 60.0
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_parse_none_str="none",
    )

# Create a single instance of the settings to be used across the application
settings = Settings()
