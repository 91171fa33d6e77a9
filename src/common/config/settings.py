"""Application settings and environment variables."""

import os
from typing import Optional

from dotenv import load_dotenv

load_dotenv()  # Load environment variables from .env file


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class Settings:
    # Local store (one JSON array per registry)
    PRODUCTS_FILE_PATH: str = os.getenv("PRODUCTS_FILE_PATH", "products.json")
    SHOPS_FILE_PATH: str = os.getenv("SHOPS_FILE_PATH", "shops.json")

    # Remote store
    REMOTE_API_ENABLED: bool = _env_flag("REMOTE_API_ENABLED", "true")
    REMOTE_API_BASE_URL: str = os.getenv("REMOTE_API_BASE_URL", "https://balandrau.salle.url.edu/dpoo")
    REMOTE_API_GROUP_ID: str = os.getenv("REMOTE_API_GROUP_ID", "P1-G70")
    REMOTE_API_CONNECT_TIMEOUT: float = float(os.getenv("REMOTE_API_CONNECT_TIMEOUT", "10"))
    REMOTE_API_READ_TIMEOUT: float = float(os.getenv("REMOTE_API_READ_TIMEOUT", "10"))
    REMOTE_API_MAX_RETRIES: int = int(os.getenv("REMOTE_API_MAX_RETRIES", "2"))

    # Logging settings
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")  # INFO, DEBUG, WARNING, ERROR, CRITICAL
    LOG_FILE: Optional[str] = os.getenv("LOG_FILE")


settings = Settings()
