from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # ── App ─────────────────────────────────────
    APP_NAME: str = "LeadFlow24 API"
    APP_VERSION: str = "1.0.0"
    ENVIRONMENT: Literal["local", "staging", "production"] = "local"
    DEBUG: bool = False
    PORT: int = 3000

    # ── Database ────────────────────────────────
    DATABASE_URL: str = "sqlite+aiosqlite:///./leadflow24.db"

    # ── Email Configuration ─────────────────────
    MAIL_HOST: str = "smtp.office365.com"
    MAIL_PORT: int = 587
    MAIL_USERNAME: str = ""
    MAIL_PASSWORD: str = ""
    MAIL_ENCRYPTION: str = "tls"
    MAIL_FROM_ADDRESS: str = "luke@leadflow24.com"
    MAIL_FROM_NAME: str = "LeadFlow24"
    MAIL_TIMEOUT: int = 15  # seconds per SMTP / relay call

    EMAIL_RELAY_URL: str = ""
    EMAIL_RELAY_API_KEY: str = ""

    NOTIFICATION_EMAIL: str = "luke@leadflow24.com"
    NOTIFICATION_PHONE: Optional[str] = None

    # ── Integrations ────────────────────────────
    WHOP_API_KEY: Optional[str] = None
    WHOP_WEBHOOK_SECRET: Optional[str] = None
    WEBHOOK_SECRET: Optional[str] = None  # Facebook verify token

    # ── JWT / Auth ──────────────────────────────
    JWT_SECRET_KEY: str = "your-secret-key-change-this-in-production"

    # ── Site ────────────────────────────────────
    BASE_URL: str = "https://leadflow24.com"
    PUBLIC_DIR: str = "public"

    # ── Logging ─────────────────────────────────
    LOG_DIR: str = "logs"
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = str(Path(__file__).parent.parent.parent / ".env")
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
