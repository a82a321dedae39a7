"""
Duplicate suppression for repeated OCR reads of the same physical line.
"""

from decimal import Decimal
from typing import Iterable, List, Optional, Tuple

from receipt_split.config import get_settings
from receipt_split.models import LineItem
from receipt_split.utils.logging_config import logger
from receipt_split.utils.normalization import normalize_item_name
from receipt_split.utils.similarity import name_similarity


def prices_match(a: Decimal, b: Decimal, tolerance: float) -> bool:
    """True when a and b differ by at most `tolerance` relative to the larger."""
    largest = max(abs(a), abs(b))
    if largest == 0:
        return True
    return abs(a - b) <= largest * Decimal(str(tolerance))


def suppress_duplicates(
    items: Iterable[LineItem],
    threshold: Optional[float] = None,
    price_tolerance: Optional[float] = None,
) -> List[LineItem]:
    """
    Drops items whose name and price nearly match an earlier item.

    Order is preserved and the first occurrence wins. Quantities are not
    summed: a near-duplicate is treated as a misread of the same line.
    """
    settings = get_settings()
    threshold = settings.similarity_threshold if threshold is None else threshold
    price_tolerance = settings.price_tolerance if price_tolerance is None else price_tolerance

    accepted: List[LineItem] = []
    accepted_keys: List[Tuple[str, Decimal]] = []

    for item in items:
        key = normalize_item_name(item.name)
        duplicate_of = None
        for seen_item, (seen_key, seen_price) in zip(accepted, accepted_keys):
            if (name_similarity(key, seen_key) >= threshold
                    and prices_match(item.unit_price, seen_price, price_tolerance)):
                duplicate_of = seen_item
                break

        if duplicate_of is not None:
            logger.debug(f"Dropping '{item.name}' as a duplicate of '{duplicate_of.name}'")
            continue

        accepted.append(item)
        accepted_keys.append((key, item.unit_price))

    return accepted
