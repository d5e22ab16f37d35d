from __future__ import annotations
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings

from components.authservice.config import DEFAULT_TOKEN_TTL_SECONDS

APP_NAME = "mailadmin-api"

class AdminSettings(BaseSettings):
    APP_VERSION: str = Field(default="0.1.0")
    # Token signing
    AUTH_SECRET: Optional[str] = None
    AUTH_ISSUER: str = Field(default="mailadmin")
    TOKEN_TTL_SECONDS: int = Field(default=DEFAULT_TOKEN_TTL_SECONDS)
    # Operator bootstrap, used only when the store is first created
    ADMIN_EMAIL: str = Field(default="admin@example.com")
    ADMIN_PASSWORD: str = Field(default="changeme123")
    PASSWORD_HASH_ITERATIONS: int = Field(default=200_000)
    # Store
    STORE_BACKEND: str = Field(default="json")  # "json" | "memory"
    STORE_PATH: str = Field(default="./data/store.json")
    # Mail transport
    SMTP_TIMEOUT_SECONDS: float = Field(default=30.0)

    class Config:
        env_file = ".env"
        case_sensitive = False
        extra = "ignore"
