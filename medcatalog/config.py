"""
Application Configuration

Settings are read from environment variables, with a local .env file loaded
first when present.
"""
import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)

FDA_NDC_ENDPOINT = "https://api.fda.gov/drug/ndc.json"


def safe_int(value: Optional[str], default: int) -> int:
    """
    Parse an integer setting, falling back to the default.

    Args:
        value: Raw value from the environment (may be None)
        default: Value to use when the setting is missing or not a number

    Returns:
        Parsed integer
    """
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        logger.warning(f"Invalid integer setting '{value}', using default {default}")
        return default


@dataclass(frozen=True)
class Settings:
    fda_api_key: str
    fda_ndc_url: str
    request_timeout: int
    default_page_size: int
    frontend_url: str
    port: int
    log_level: str


def get_settings() -> Settings:
    """Build the settings object from the current environment."""
    settings = Settings(
        fda_api_key=os.getenv("FDA_API_KEY", ""),
        fda_ndc_url=os.getenv("FDA_NDC_URL", FDA_NDC_ENDPOINT),
        request_timeout=safe_int(os.getenv("REQUEST_TIMEOUT"), 30),
        default_page_size=safe_int(os.getenv("DEFAULT_PAGE_SIZE"), 9),
        frontend_url=os.getenv("FRONTEND_URL", "http://localhost:3000"),
        port=safe_int(os.getenv("PORT"), 8000),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )
    if not settings.fda_api_key:
        logger.warning("No API key found for FDA_API_KEY, will attempt unauthenticated access")
    return settings
