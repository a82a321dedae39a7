"""
Line classification: decides whether a single receipt line is a priced item.

Each matcher is a pure function taking one trimmed line and returning an
ItemMatch or None. classify_line() walks LINE_MATCHERS in order and the first
match wins.
"""

import re
from decimal import Decimal
from typing import Callable, List, NamedTuple, Optional

from pydantic import ValidationError

from receipt_split.models import LineItem
from receipt_split.parsers.patterns import (
    DECIMAL_PART_RE,
    LEADING_NOISE_RE,
    PRICE_TAIL_RE,
    QUANTITY_PREFIX_RE,
    QUANTITY_SUFFIX_PATTERNS,
    TRAILING_NOISE_RE,
)
from receipt_split.utils.logging_config import logger
from receipt_split.utils.normalization import normalize_price

SYMBOL_CONFIDENCE = 1.0
FALLBACK_CONFIDENCE = 0.7


class PriceToken(NamedTuple):
    """The price found at the end of a line, and the text before it."""
    prefix: str
    amount: Decimal
    has_currency: bool
    has_decimal: bool
    negative: bool

    @property
    def acceptable(self) -> bool:
        # A bare integer is not a price; '$12' and '12.00' are
        return not self.negative and (self.has_currency or self.has_decimal)

    @property
    def confidence(self) -> float:
        return SYMBOL_CONFIDENCE if self.has_currency else FALLBACK_CONFIDENCE


class ItemMatch(NamedTuple):
    name: str
    price: Decimal
    quantity: int
    confidence: float


def find_price_token(text: str) -> Optional[PriceToken]:
    """Locates the currency token that ends `text`, if any."""
    match = PRICE_TAIL_RE.search(text)
    if not match:
        return None

    number = match.group('number')
    amount = normalize_price(number)
    if amount is None:
        return None

    return PriceToken(
        prefix=text[:match.start()],
        amount=amount,
        has_currency=bool(match.group('pre') or match.group('post')),
        has_decimal=bool(DECIMAL_PART_RE.search(number)),
        negative=bool(match.group('sign') or match.group('sign2')),
    )


def clean_item_name(raw: str) -> str:
    """Collapses whitespace and strips leftover currency tokens and separators."""
    name = re.sub(r'\s+', ' ', raw).strip()
    name = TRAILING_NOISE_RE.sub('', name)
    name = LEADING_NOISE_RE.sub('', name)
    return name.strip()


def match_quantity_prefixed(line: str) -> Optional[ItemMatch]:
    """'2x Apple $1.25' -> Apple, 1.25, quantity 2 (price as printed)."""
    qty_match = QUANTITY_PREFIX_RE.match(line)
    if not qty_match:
        return None

    token = find_price_token(qty_match.group('rest'))
    if not token or not token.acceptable:
        return None

    return ItemMatch(
        name=token.prefix,
        price=token.amount,
        quantity=int(qty_match.group('qty')),
        confidence=token.confidence,
    )


def match_quantity_suffixed(line: str) -> Optional[ItemMatch]:
    """'Apple (2) $2.50' or 'Apple x2 2.50' -> Apple, 2.50, quantity 2."""
    token = find_price_token(line)
    if not token or not token.acceptable:
        return None

    head = token.prefix.strip()
    for pattern in QUANTITY_SUFFIX_PATTERNS:
        qty_match = pattern.match(head)
        if qty_match:
            return ItemMatch(
                name=qty_match.group('name'),
                price=token.amount,
                quantity=int(qty_match.group('qty')),
                confidence=token.confidence,
            )
    return None


def match_currency_price(line: str) -> Optional[ItemMatch]:
    """'Organic Bananas   $3.99', 'Coffee 12,50 EUR', 'Tea USD 3'."""
    token = find_price_token(line)
    if not token or token.negative or not token.has_currency:
        return None
    return ItemMatch(token.prefix, token.amount, 1, SYMBOL_CONFIDENCE)


def match_bare_price(line: str) -> Optional[ItemMatch]:
    """'Milk 3.50' - no currency marker, so a decimal part is required."""
    token = find_price_token(line)
    if not token or token.negative or not token.has_decimal:
        return None
    # Without a symbol the number must stand apart from the name
    if token.prefix and not token.prefix[-1].isspace():
        return None
    return ItemMatch(token.prefix, token.amount, 1, FALLBACK_CONFIDENCE)


LINE_MATCHERS: List[Callable[[str], Optional[ItemMatch]]] = [
    match_quantity_prefixed,
    match_quantity_suffixed,
    match_currency_price,
    match_bare_price,
]


def classify_line(line: str) -> Optional[LineItem]:
    """
    Turns one receipt line into a LineItem, or None when it is not an item.

    The line is expected to be pre-filtered for noise (totals, headers).
    Names must keep at least one letter once currency tokens and separators
    are stripped.
    """
    line = line.strip() if line else ""
    if not line:
        return None

    for matcher in LINE_MATCHERS:
        match = matcher(line)
        if match is None:
            continue

        name = clean_item_name(match.name)
        if not re.search(r'[^\W\d_]', name) or match.quantity < 1:
            logger.debug(f"Rejected line {line!r}: no usable item name")
            return None

        try:
            return LineItem(
                name=name,
                unit_price=match.price,
                quantity=match.quantity,
                confidence=match.confidence,
            )
        except ValidationError as e:
            logger.debug(f"Rejected line {line!r}: {e}")
            return None

    return None
