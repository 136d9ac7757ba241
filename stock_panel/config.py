"""
Stock Panel - Configuration Settings
"""
from typing import Annotated, List
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict
from pydantic import field_validator
import json


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore"
    )

    # =========================
    # Application Settings
    # =========================
    APP_NAME: str = "Stock Panel"
    APP_ENV: str = "development"
    DEBUG: bool = False
    API_PREFIX: str = ""

    # =========================
    # Server Configuration
    # =========================
    BACKEND_HOST: str = "0.0.0.0"
    BACKEND_PORT: int = 8080
    PUBLIC_BASE_URL: str = "http://localhost:8080"
    CORS_ORIGINS: Annotated[List[str], NoDecode] = ["http://localhost:8080"]
    WEB_DIR: str = "web"

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        if isinstance(v, str):
            try:
                return json.loads(v)
            except json.JSONDecodeError:
                return [origin.strip() for origin in v.split(",")]
        return v

    # =========================
    # Database - SQLite
    # =========================
    DATABASE_URL: str = "sqlite+aiosqlite:///./stocks.db"

    @property
    def database_url(self) -> str:
        """Get the async database URL."""
        url = self.DATABASE_URL
        # Ensure it uses the aiosqlite driver
        if url.startswith("sqlite:///"):
            url = url.replace("sqlite:///", "sqlite+aiosqlite:///", 1)
        return url

    # =========================
    # Session Tokens
    # =========================
    TOKEN_EXPIRE_HOURS: int = 24
    RESET_TOKEN_EXPIRE_MINUTES: int = 60
    TOKEN_SWEEP_INTERVAL_MINUTES: int = 60
    MIN_PASSWORD_LENGTH: int = 8

    # =========================
    # Email - SMTP
    # =========================
    SMTP_HOST: str = "smtp.gmail.com"
    SMTP_PORT: int = 587
    SMTP_USER: str = ""
    SMTP_PASSWORD: str = ""  # Gmail App Password
    SMTP_FROM_EMAIL: str = ""
    SMTP_FROM_NAME: str = "Stock Panel"
    SMTP_USE_TLS: bool = True

    # =========================
    # Kite Alert Forwarding
    # =========================
    KITE_API_KEY: str = ""
    KITE_API_SECRET: str = ""
    KITE_BASE_URL: str = ""
    KITE_TIMEOUT_SECONDS: float = 30.0

    # =========================
    # Logging
    # =========================
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "logs"


# Create global settings instance
settings = Settings()
