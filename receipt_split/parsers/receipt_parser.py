"""
Receipt parsing logic for extracting line items from free text.

This module provides the ReceiptParser class which turns raw OCR or pasted
receipt text into ordered LineItems and a ReceiptRecord.
"""

import re
from decimal import Decimal
from typing import Iterator, List, Optional

from receipt_split.config import get_settings
from receipt_split.models import LineItem, ReceiptRecord, SourceKind
from receipt_split.parsers.deduplicator import suppress_duplicates
from receipt_split.parsers.line_classifier import classify_line, find_price_token
from receipt_split.parsers.noise_filter import contains_stop_token, is_noise_line
from receipt_split.parsers.patterns import (
    SUBTOTAL_LINE_RE,
    TOTAL_LINE_RE,
    TRANSACTION_ID_RE,
)
from receipt_split.utils.logging_config import logger


class ReceiptParser:
    """
    Parser for extracting structured data from raw receipt text.

    Pipeline:
    - Noise Filter: totals, tax, tender and header lines are dropped first.
    - Classification: remaining lines go through the ordered line matchers.
    - Dedup: near-identical names at the same price collapse to the first.
    """

    HEADER_SCAN_LINES = 5

    def __init__(self, similarity_threshold: Optional[float] = None,
                 price_tolerance: Optional[float] = None):
        settings = get_settings()
        self.similarity_threshold = (
            settings.similarity_threshold if similarity_threshold is None else similarity_threshold
        )
        self.price_tolerance = (
            settings.price_tolerance if price_tolerance is None else price_tolerance
        )

    def iter_candidate_items(self, text: str) -> Iterator[LineItem]:
        """Lazily yields classified items in line order, before dedup."""
        for line in self._split_lines(text):
            if is_noise_line(line):
                continue
            item = classify_line(line)
            if item is not None:
                yield item

    def parse_items(self, text: str) -> List[LineItem]:
        """Ordered, de-duplicated line items for a block of receipt text."""
        return suppress_duplicates(
            self.iter_candidate_items(text),
            threshold=self.similarity_threshold,
            price_tolerance=self.price_tolerance,
        )

    def parse_receipt(self, text: str, source_kind: SourceKind = SourceKind.OCR) -> ReceiptRecord:
        """
        Main entry point for parsing a raw receipt string.

        Besides the items, the header is scanned for a vendor name and the
        footer for the declared total and a transaction id.
        """
        lines = self._split_lines(text)
        items = self.parse_items(text)

        record = ReceiptRecord(
            source_kind=source_kind,
            transaction_id=self._extract_transaction_id(lines),
            items=items,
            declared_total=self._extract_declared_total(lines),
            vendor_name=self._extract_vendor_name(lines),
        )
        logger.info(
            f"Parsed {record.item_count} items from {len(lines)} lines"
            f" ({record.vendor_name or 'unknown vendor'})"
        )
        return record

    @staticmethod
    def _split_lines(text: str) -> List[str]:
        if not text:
            return []
        return [line.strip() for line in text.splitlines() if line.strip()]

    def _extract_vendor_name(self, lines: List[str]) -> Optional[str]:
        """First digit-free, non-stop-token line in the header."""
        for line in lines[:self.HEADER_SCAN_LINES]:
            if re.search(r'\d', line) or contains_stop_token(line):
                continue
            if re.search(r'[^\W\d_]{2,}', line):
                return line
        return None

    def _extract_declared_total(self, lines: List[str]) -> Optional[Decimal]:
        """Amount on the last 'total' line that is not a subtotal."""
        total = None
        for line in lines:
            if not TOTAL_LINE_RE.search(line) or SUBTOTAL_LINE_RE.search(line):
                continue
            token = find_price_token(line)
            if token and token.acceptable:
                total = token.amount
        return total

    def _extract_transaction_id(self, lines: List[str]) -> Optional[str]:
        for line in lines:
            match = TRANSACTION_ID_RE.search(line)
            if match:
                return match.group('txn')
        return None


def parse_items(text: str) -> List[LineItem]:
    """Convenience wrapper using default settings."""
    return ReceiptParser().parse_items(text)
