"""
Runtime settings for the parsing and splitting engine.

Values come from the environment (optionally a .env file) and fall back to
sensible defaults. Every component also accepts explicit overrides, so the
settings object only supplies defaults.
"""

import os
from decimal import Decimal, InvalidOperation
from functools import lru_cache
from typing import Callable, TypeVar

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

from receipt_split.utils.logging_config import logger

T = TypeVar("T")

ENV_PREFIX = "RECEIPT_SPLIT_"


class Settings(BaseModel):
    """Engine defaults. Immutable once loaded."""
    model_config = ConfigDict(frozen=True)

    similarity_threshold: float = Field(default=0.85, ge=0.0, le=1.0)
    price_tolerance: float = Field(default=0.05, ge=0.0)
    minor_unit: Decimal = Field(default=Decimal("0.01"), gt=0)
    currency: str = "USD"
    locale: str = "en_US"
    date_format: str = "medium"
    txn_min_length: int = Field(default=4, ge=1)
    txn_max_length: int = Field(default=64, ge=1)
    log_level: str = "INFO"


def _read_env(key: str, default: T, cast: Callable[[str], T]) -> T:
    """Reads RECEIPT_SPLIT_<key>, casting it; bad values fall back to the default."""
    raw = os.getenv(ENV_PREFIX + key)
    if raw is None or not raw.strip():
        return default
    try:
        return cast(raw.strip())
    except (ValueError, InvalidOperation):
        logger.warning(f"Ignoring invalid {ENV_PREFIX}{key}={raw!r}, using {default!r}")
        return default


def load_settings() -> Settings:
    """
    Builds a Settings instance from the environment.

    A .env file (if one is found) is loaded first (without overriding
    variables that are already set).
    """
    load_dotenv()
    defaults = Settings()

    values = {
        "similarity_threshold": _read_env("SIMILARITY_THRESHOLD", defaults.similarity_threshold, float),
        "price_tolerance": _read_env("PRICE_TOLERANCE", defaults.price_tolerance, float),
        "minor_unit": _read_env("MINOR_UNIT", defaults.minor_unit, Decimal),
        "currency": _read_env("CURRENCY", defaults.currency, str.upper),
        "locale": _read_env("LOCALE", defaults.locale, str),
        "date_format": _read_env("DATE_FORMAT", defaults.date_format, str),
        "txn_min_length": _read_env("TXN_MIN_LENGTH", defaults.txn_min_length, int),
        "txn_max_length": _read_env("TXN_MAX_LENGTH", defaults.txn_max_length, int),
        "log_level": _read_env("LOG_LEVEL", defaults.log_level, str.upper),
    }

    try:
        return Settings(**values)
    except ValueError as e:
        # Individually valid values can still break a constraint (e.g. threshold > 1)
        logger.warning(f"Invalid receipt_split settings, using defaults: {e}")
        return defaults


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Returns the process-wide settings, loading them on first use."""
    return load_settings()
