"""
Receipt text and scanned payload parsers.
"""

from .deduplicator import suppress_duplicates
from .line_classifier import LINE_MATCHERS, classify_line
from .noise_filter import is_noise_line
from .payload_parser import PayloadParser, parse_payload
from .receipt_parser import ReceiptParser, parse_items

__all__ = [
    "ReceiptParser",
    "PayloadParser",
    "parse_items",
    "parse_payload",
    "classify_line",
    "is_noise_line",
    "suppress_duplicates",
    "LINE_MATCHERS",
]
