from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings

_PROJECT_DIR = Path(__file__).resolve().parents[1]
_ENV_FILES = (
    _PROJECT_DIR / ".env",
    ".env",
)


class Settings(BaseSettings):
    """Console settings loaded from environment variables."""

    app_title: str = "Admin Console"
    app_version: str = "0.1.0"

    # Remote API
    api_base_url: str = "http://localhost:8080/api"
    api_timeout_seconds: float = 10.0

    # Logging — per-category log levels (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    log_level: str = "INFO"                  # Root / app-wide
    log_level_http: str = "WARNING"          # httpx / httpcore — outbound HTTP
    log_level_gateway: str = "INFO"          # ApiClient + resource gateways
    log_level_orchestrator: str = "INFO"     # CRUD orchestrators

    model_config = {
        "env_file": _ENV_FILES,
        "env_file_encoding": "utf-8",
    }


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance — reads .env once."""
    return Settings()
