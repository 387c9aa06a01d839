"""
Environment configuration for the dashboard.

- STOCK_API_URL (or API_URL): prediction / history / watchlist service
- SENTIMENT_API_URL: news sentiment service
- STOCK_API_TOKEN: bearer token used by the sidebar account tools
- LOG_LEVEL: logging level (default INFO)

Loads .env from the project root when available.
"""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

_ROOT = Path(__file__).resolve().parent
_ENV_PATH = _ROOT / ".env"

DEFAULT_API_URL = "http://localhost:8000"
DEFAULT_SENTIMENT_API_URL = "http://localhost:8001"


@dataclass(frozen=True)
class Settings:
    api_url: str
    sentiment_api_url: str
    api_token: str
    log_level: str


def load_env() -> None:
    """Load .env from project root. Safe to call multiple times; real env vars win."""
    load_dotenv(_ENV_PATH, override=False)


def _base_url(*names: str, default: str) -> str:
    for name in names:
        value = (os.getenv(name) or "").strip()
        if value:
            return value.rstrip("/")
    return default


def get_settings() -> Settings:
    load_env()
    return Settings(
        api_url=_base_url("STOCK_API_URL", "API_URL", default=DEFAULT_API_URL),
        sentiment_api_url=_base_url("SENTIMENT_API_URL", default=DEFAULT_SENTIMENT_API_URL),
        api_token=(os.getenv("STOCK_API_TOKEN") or "").strip(),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").strip().upper(),
    )
