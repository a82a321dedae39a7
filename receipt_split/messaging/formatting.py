"""
Locale-aware rendering of amounts and dates via Babel.
"""

from datetime import date
from decimal import Decimal
from typing import Optional

from babel.core import UnknownLocaleError
from babel.dates import format_date as babel_format_date
from babel.numbers import format_currency

from receipt_split.config import get_settings
from receipt_split.utils.logging_config import logger

FALLBACK_LOCALE = "en_US"


def format_amount(amount: Decimal, currency: Optional[str] = None, locale: Optional[str] = None) -> str:
    """'$1,234.50' for en_US/USD, '1.234,50 €' for de_DE/EUR."""
    settings = get_settings()
    currency = (currency or settings.currency).upper()
    locale = locale or settings.locale
    try:
        return format_currency(amount, currency, locale=locale)
    except (UnknownLocaleError, ValueError) as e:
        logger.warning(f"Cannot format currency for locale {locale!r}: {e}")
        return format_currency(amount, currency, locale=FALLBACK_LOCALE)


def format_date(value: Optional[date], date_format: Optional[str] = None,
                locale: Optional[str] = None) -> str:
    """Locale-aware date; empty string when there is no date."""
    if value is None:
        return ""
    settings = get_settings()
    date_format = date_format or settings.date_format
    locale = locale or settings.locale
    try:
        return babel_format_date(value, format=date_format, locale=locale)
    except (UnknownLocaleError, ValueError) as e:
        logger.warning(f"Cannot format date for locale {locale!r}: {e}")
        return babel_format_date(value, format="medium", locale=FALLBACK_LOCALE)
