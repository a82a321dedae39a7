"""
Fast-reject stage for lines that must never become line items.
"""

import re

from receipt_split.parsers.patterns import (
    ADDRESS_LINE_RE,
    CITY_STATE_ZIP_RE,
    PHONE_LINE_RE,
    STOP_TOKEN_ALLOWED_WORDS_RE,
    STOP_TOKEN_RE,
)


def contains_stop_token(line: str) -> bool:
    """True when a stop token appears anywhere in the line, even inside a word."""
    return bool(STOP_TOKEN_RE.search(STOP_TOKEN_ALLOWED_WORDS_RE.sub(" ", line)))


def is_noise_line(line: str) -> bool:
    """
    Heuristic filter for totals, tax, tender and store-header lines.

    Rejects a line when it:
    - contains a stop token ('Total: $15.99', 'SALES TAXES', 'GRANDTOTAL')
    - has no digits at all (store names, separators, greetings)
    - is nothing but a street address, city/state/zip or phone number
    """
    stripped = line.strip() if line else ""
    if not stripped:
        return True

    if contains_stop_token(stripped):
        return True

    if not re.search(r'\d', stripped):
        return True

    return bool(
        ADDRESS_LINE_RE.match(stripped)
        or CITY_STATE_ZIP_RE.match(stripped)
        or PHONE_LINE_RE.match(stripped)
    )
