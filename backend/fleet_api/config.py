from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings

_BACKEND_DIR = Path(__file__).resolve().parents[1]
_ENV_FILES = (
    _BACKEND_DIR / ".env",
    ".env",
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    app_title: str = "Fleet API"
    app_version: str = "0.1.0"
    app_env: str = "development"
    database_url: str = "sqlite:///./fleet.db"
    cors_origins: list[str] = ["http://localhost:3000"]

    # Identity provider (OIDC). Issuer and JWKS URI derive from the domain.
    auth_domain: str = ""
    auth_audience: str | None = None
    auth_algorithms: list[str] = ["RS256"]

    # Logging — per-category log levels (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    log_level: str = "INFO"                  # Root / app-wide
    log_level_sql: str = "WARNING"           # sqlalchemy.engine — SQL queries
    log_level_uvicorn: str = "INFO"          # uvicorn.access / uvicorn.error
    log_level_store: str = "INFO"            # document store adapter
    log_level_auth: str = "INFO"             # bearer token verification
    log_level_lifecycle: str = "INFO"        # EntityLifecycle trace

    model_config = {
        "env_file": _ENV_FILES,
        "env_file_encoding": "utf-8",
    }

    @property
    def auth_issuer(self) -> str:
        return f"https://{self.auth_domain}/"

    @property
    def jwks_uri(self) -> str:
        return f"https://{self.auth_domain}/.well-known/jwks.json"


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance — reads .env once."""
    return Settings()
