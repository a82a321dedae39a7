"""
Centralized normalization utilities for receipt text.
"""

import re
from decimal import Decimal, InvalidOperation
from typing import Optional

from receipt_split.utils.logging_config import logger


def normalize_item_name(name: str) -> str:
    """
    Standardizes item names for fuzzy comparison.

    Transformation pipeline:
    1. Force lowercase
    2. Remove punctuation ('Coca-Cola' -> 'cocacola')
    3. Collapse runs of whitespace and trim
    """
    if not name:
        return ""

    norm = name.lower()
    norm = re.sub(r'[^\w\s]', '', norm)
    norm = re.sub(r'\s+', ' ', norm).strip()

    return norm


def normalize_price(token: str) -> Optional[Decimal]:
    """
    Converts a printed price token into a Decimal.

    Everything except digits and '.'/',' is discarded. The last separator
    followed by one or two trailing digits is the decimal point; every other
    separator is a grouping separator, so '1,234.56' and '1.234,56' both
    become Decimal('1234.56') while '12.000' becomes Decimal('12000').
    """
    if not token:
        return None

    cleaned = re.sub(r'[^\d.,]', '', token).rstrip('.,')
    if not re.search(r'\d', cleaned):
        return None

    decimal_match = re.search(r'[.,](\d{1,2})$', cleaned)
    if decimal_match:
        integer_part = re.sub(r'[.,]', '', cleaned[:decimal_match.start()])
        number = f"{integer_part or '0'}.{decimal_match.group(1)}"
    else:
        number = re.sub(r'[.,]', '', cleaned)

    try:
        return Decimal(number)
    except InvalidOperation:
        logger.debug(f"Could not normalize price token {token!r}")
        return None
