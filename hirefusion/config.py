# hirefusion/config.py

from __future__ import annotations
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional

class Settings(BaseSettings):
    # --- Core ---
    SECRET_KEY: str = Field("change-me", description="JWT signing key")
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(60 * 24, ge=5, le=60 * 24)
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # --- Database ---
    # No default: a missing URL fails at first use, see database.get_engine().
    DATABASE_URL: Optional[str] = None

    # --- Signup verification ---
    VERIFY_CODE_EXPIRE_MINUTES: int = Field(60, ge=1)

    # --- Outbound email (SMTP) ---
    EMAIL_USER: Optional[str] = None
    EMAIL_PASSWORD: Optional[str] = None
    EMAIL_FROM: Optional[str] = None
    EMAIL_SENDER_NAME: str = "HireFusion"
    SMTP_SERVER: str = "smtp.gmail.com"
    SMTP_PORT: int = 587

    # --- Recommendations ---
    RECOMMENDATION_MIN_MATCH: int = Field(50, ge=0, le=100)

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

settings = Settings()
