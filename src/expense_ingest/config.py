from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(Path(__file__).parent.parent.parent / ".env"),
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_env: str = "development"
    debug: bool = False
    log_level: str = "INFO"
    log_json: bool = False

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    # Ingestion defaults applied when the parser leaves a field unset
    default_currency: str = "USD"

    # LLM fallback (consulted only when no amount was found)
    llm_fallback_enabled: bool = False
    llm_fallback_url: str = "http://localhost:8000/api/v1/llm/parse"
    llm_timeout_seconds: float = 15.0

    # Header heuristics
    subject_vendor_max_length: int = 80

    # CSV import: header substrings that identify the vendor column
    csv_vendor_columns: list[str] = ["description", "vendor", "merchant", "narration"]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
