"""Environment-driven settings (loaded from .env when present)."""

import logging
import os
from datetime import datetime, timezone, tzinfo
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

load_dotenv()

DEFAULT_LOG_DIR = "logs"
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_PREFERENCES_PATH = "preferences.json"


def get_log_dir() -> str:
    return os.getenv("MINDSPOT_LOG_DIR", DEFAULT_LOG_DIR)


def get_log_level() -> int:
    level_name = os.getenv("MINDSPOT_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
    return getattr(logging, level_name, logging.INFO)


def get_preferences_path() -> str:
    return os.getenv("MINDSPOT_PREFERENCES", DEFAULT_PREFERENCES_PATH)


def get_timezone(name: Optional[str] = None) -> tzinfo:
    """
    Resolves the zone used for day/hour bucketing.

    Order: explicit name, MINDSPOT_TIMEZONE, then the host's local zone.
    Unknown names fall back to UTC.
    """
    name = name or os.getenv("MINDSPOT_TIMEZONE")
    if not name:
        return datetime.now().astimezone().tzinfo or timezone.utc

    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning(f"Unknown timezone '{name}', falling back to UTC")
        return timezone.utc
