#!/usr/bin/env python3
"""
Helpers for reading environment variables.

Values are stripped of surrounding whitespace and stray CRLF line endings,
which show up when .env files are edited on Windows.
"""

import logging
import os
from typing import Optional

logger = logging.getLogger(__name__)

TRUE_VALUES = ("true", "1", "yes", "on")
FALSE_VALUES = ("false", "0", "no", "off", "")


def getenv_clean(key: str, default: Optional[str] = None) -> Optional[str]:
    """Get an environment variable with whitespace and line endings removed.

    Args:
        key: Environment variable name
        default: Value returned when the variable is not set

    Returns:
        Cleaned value, or default if not set
    """
    raw_value = os.getenv(key, default)
    if raw_value is None:
        return None

    cleaned = raw_value.strip()
    if cleaned != raw_value:
        logger.warning(f"Environment variable {key} had surrounding whitespace: {raw_value!r}")
    return cleaned


def getenv_bool(key: str, default: bool = False) -> bool:
    """Get an environment variable as a boolean.

    Unrecognized values fall back to ``default`` with a warning.
    """
    raw_value = getenv_clean(key)
    if raw_value is None:
        return default

    lowered = raw_value.lower()
    if lowered in TRUE_VALUES:
        return True
    if lowered in FALSE_VALUES:
        return False

    logger.warning(f"Environment variable {key} has unexpected boolean value {raw_value!r}, using {default}")
    return default


def getenv_int(key: str, default: int) -> int:
    """Get an environment variable as an integer, falling back to ``default``."""
    raw_value = getenv_clean(key)
    if raw_value is None:
        return default

    try:
        return int(raw_value)
    except ValueError:
        logger.warning(f"Environment variable {key} is not a valid integer: {raw_value!r}, using {default}")
        return default
