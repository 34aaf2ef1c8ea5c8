"""Application configuration via environment variables."""
from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """App settings loaded from .env or environment."""

    DATABASE_URL: str = "sqlite:///./db.sqlite"

    # session | token | provider
    AUTH_MODE: str = "session"
    SECRET_KEY: str = "mitishirube-dev-secret"
    JWT_ALGORITHM: str = "HS256"
    TOKEN_TTL_HOURS: int = 24
    SESSION_COOKIE_NAME: str = "mitishirube_sid"
    SESSION_TTL_HOURS: int = 24
    SESSION_COOKIE_SECURE: bool = False

    SUPABASE_URL: str = ""
    SUPABASE_KEY: str = ""

    PUBLIC_READS: bool = True
    # server | client
    POSTED_AT_SOURCE: str = "server"
    POSTED_AT_TIMEZONE: str = "Asia/Tokyo"
    TIMELINE_LIMIT: int = 15

    CORS_ORIGINS: str = "http://localhost:3000"
    STATIC_DIR: Optional[str] = None
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"

    def get_cors_origins_list(self) -> list[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]


settings = Settings()
