from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Text transform (Claude API)
    anthropic_api_key: str = ""
    claude_model: str = "claude-sonnet-4-20250514"
    transform_temperature: float = 0.65
    variation_temperature: float = 0.85
    transform_max_tokens: int = 1024

    # Speech synthesis (Gemini TTS)
    google_api_key: str = ""
    tts_model: str = "gemini-2.5-flash-preview-tts"
    tts_voice: str = "Kore"
    tts_delivery_instruction: str = "Say clearly and naturally"
    tts_sample_rate: int = 24000
    tts_channels: int = 1

    # Local persistence
    database_url: str = "sqlite:///linguaflow.db"
    history_storage_key: str = "linguaflow_history"
    history_cap: int = 15

    # Input limits
    max_chars: int = 5000

    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance."""
    return Settings()
