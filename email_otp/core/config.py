"""
Configuration settings for the Email OTP API.
"""

from pydantic_settings import BaseSettings
from typing import List, Literal
import os
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables from .env file in project root
PROJECT_ROOT = Path(__file__).parent.parent.parent
ENV_FILE = PROJECT_ROOT / ".env"
if ENV_FILE.exists():
    load_dotenv(ENV_FILE)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Server
    SERVER_HOST: str = "0.0.0.0"
    SERVER_PORT: int = 8000
    ENVIRONMENT: str = "development"
    DEBUG: bool = True

    # CORS
    ALLOWED_ORIGINS: List[str] = [
        "http://localhost:4200",
        "http://localhost:3000",
        "http://127.0.0.1:4200",
    ]

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str = "logs/email_otp.log"

    # OTP policy
    OTP_ALLOWED_DOMAIN: str = ".dso.org.sg"

    # Delivery ("log" prints the code, "smtp" sends a real email)
    NOTIFIER_BACKEND: Literal["log", "smtp"] = "log"
    NOTIFIER_WORKERS: int = 4
    OTP_EMAIL_SUBJECT: str = "Your OTP code"

    # SMTP
    SMTP_HOST: str = "localhost"
    SMTP_PORT: int = 25
    SMTP_USER: str = ""
    SMTP_PASSWORD: str = ""
    SMTP_FROM: str = ""

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True
        extra = "ignore"


# Create settings instance
settings = Settings()

# Ensure logs directory exists
os.makedirs(os.path.dirname(settings.LOG_FILE) or ".", exist_ok=True)
