# gelato_ops/core/config.py
import os
from pydantic_settings import BaseSettings
from pydantic import validator
from typing import List, Optional


class Settings(BaseSettings):
    """Application settings loaded from .env"""

    # === Database ===
    DATABASE_URL: str = "sqlite+aiosqlite:///./gelato_ops.db"
    DATABASE_ECHO: bool = False

    @validator("DATABASE_URL")
    def validate_database_url(cls, v):
        """Ensure database URL is safe for current environment"""
        env = os.getenv("ENVIRONMENT", "development").lower()
        if env == "production" and "localhost" in v:
            raise ValueError("🚨 Production environment cannot use localhost database!")
        return v

    # === JWT ===
    SECRET_KEY: str = "change-me"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7
    AUTH_COOKIE_NAME: str = "authToken"

    # === CORS ===
    ALLOWED_ORIGINS: List[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]
    ALLOWED_METHODS: List[str] = ["*"]
    ALLOWED_HEADERS: List[str] = ["*"]

    # === System ===
    DEBUG: bool = False
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "logs"
    LOG_TO_FILE: bool = True

    # === Business Rules ===
    HUB_STORE_SLUG: str = "factory"
    SNAPSHOT_SCAN_LIMIT: int = 50
    DEFAULT_TARGET_STOCK: int = 10
    DELIVERY_LEAD_DAYS: int = 1
    STOCKTAKE_LIST_LIMIT: int = 100
    STOCKTAKE_EXPORT_LIMIT: int = 2000
    LATEST_STOCKTAKES_LIMIT: int = 6
    STORE_DELIVERIES_LIMIT: int = 100

    # === Optional TLS for the bundled runner ===
    SSL_CERTFILE: Optional[str] = None
    SSL_KEYFILE: Optional[str] = None

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


# Create a global settings instance
settings = Settings()
