"""Centralized configuration loading.

Loads environment variables once and provides a typed Settings object
for the rest of the codebase. Entry points (the app shell, scripts) read
settings through get_settings() so .env is respected.
"""

import os
from dataclasses import dataclass
from typing import Optional
from dotenv import load_dotenv


# Load .env once at import time
load_dotenv()


@dataclass
class Settings:
    # REST objects API
    api_base_url: str = os.getenv(
        "CARGOPRO_API_BASE_URL", "https://api.restful-api.dev/objects"
    )
    request_timeout: float = float(os.getenv("CARGOPRO_REQUEST_TIMEOUT", "15"))

    # Objects list
    page_size: int = int(os.getenv("CARGOPRO_PAGE_SIZE", "10"))
    # Server-seeded objects use ids 1..reserved_max_id and are read-only
    reserved_max_id: int = int(os.getenv("CARGOPRO_RESERVED_MAX_ID", "13"))

    # Phone sign-in (Firebase Identity Toolkit)
    firebase_api_key: Optional[str] = os.getenv("FIREBASE_WEB_API_KEY")
    identity_base_url: str = os.getenv(
        "CARGOPRO_IDENTITY_BASE_URL", "https://identitytoolkit.googleapis.com/v1"
    )

    # Development bypass for devices that cannot receive SMS
    dev_phone_number: str = os.getenv("CARGOPRO_DEV_PHONE", "+91 99999 99999")
    dev_otp_code: str = os.getenv("CARGOPRO_DEV_OTP", "123456")

    # Logging
    log_level: str = os.getenv("CP_LOG_LEVEL", "INFO")
    verbose: bool = os.getenv("CP_VERBOSE", "0") == "1"


def get_settings() -> Settings:
    """Return a new Settings instance (cheap dataclass construction)."""
    return Settings()
