"""
Parsing of scanned QR/barcode payloads into ReceiptRecords.

Decision order:
1. JSON object with an identifier, an items list and a total.
2. Bare alphanumeric transaction id (resolved by the caller).
3. Loose text: 'key: value' header fragments plus priced item fragments.
4. Nothing usable -> None, so the caller can fall back to manual entry.
"""

import json
import re
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional, Sequence

from pydantic import ValidationError

from receipt_split.config import get_settings
from receipt_split.models import LineItem, ReceiptRecord, SourceKind
from receipt_split.parsers.line_classifier import find_price_token
from receipt_split.parsers.patterns import KEY_VALUE_RE, PAYLOAD_FRAGMENT_SPLIT_RE
from receipt_split.parsers.receipt_parser import ReceiptParser
from receipt_split.utils.logging_config import logger
from receipt_split.utils.normalization import normalize_price


class PayloadParser:
    """Turns a raw scanned string into a ReceiptRecord, or None."""

    ID_KEYS = ('id', 'transaction_id', 'transactionId', 'txn', 'receipt_id', 'receiptId')
    ITEMS_KEYS = ('items', 'line_items', 'lineItems', 'products')
    TOTAL_KEYS = ('total', 'total_amount', 'totalAmount', 'amount')
    VENDOR_KEYS = ('vendor', 'merchant', 'store', 'vendor_name', 'merchant_name')

    ITEM_NAME_KEYS = ('name', 'title', 'description', 'item')
    ITEM_PRICE_KEYS = ('price', 'amount', 'unit_price', 'unitPrice', 'cost')
    ITEM_QUANTITY_KEYS = ('quantity', 'qty')

    # Loose 'key: value' headers, compared with separators removed
    LOOSE_HEADER_KEYS = {
        'transaction_id': {'id', 'txn', 'txnid', 'transaction', 'transactionid',
                           'receipt', 'receiptid', 'ref', 'reference'},
        'declared_total': {'total', 'totalamount', 'grandtotal', 'amountdue'},
        'vendor_name': {'vendor', 'merchant', 'store', 'shop', 'vendorname', 'merchantname'},
    }

    def __init__(self, receipt_parser: Optional[ReceiptParser] = None,
                 txn_min_length: Optional[int] = None,
                 txn_max_length: Optional[int] = None):
        settings = get_settings()
        self.receipt_parser = receipt_parser or ReceiptParser()
        min_length = settings.txn_min_length if txn_min_length is None else txn_min_length
        max_length = settings.txn_max_length if txn_max_length is None else txn_max_length
        self.transaction_id_re = re.compile(rf'[A-Za-z0-9]{{{min_length},{max_length}}}')

    def parse(self, payload: str) -> Optional[ReceiptRecord]:
        """Main entry point; never raises for malformed payloads."""
        if not payload or not payload.strip():
            return None
        text = payload.strip()

        record = self._parse_json(text)
        if record is not None:
            logger.debug(f"Payload parsed as JSON receipt {record.transaction_id}")
            return record

        if self.transaction_id_re.fullmatch(text):
            logger.debug(f"Payload is a bare transaction id: {text}")
            return ReceiptRecord(source_kind=SourceKind.BARCODE, transaction_id=text)

        record = self._parse_loose(text)
        if record is None:
            logger.info("Payload not recognized; manual entry required")
        return record

    # --- JSON payloads ---

    def _parse_json(self, text: str) -> Optional[ReceiptRecord]:
        try:
            data = json.loads(text)
        except (ValueError, RecursionError):
            return None
        if not isinstance(data, dict):
            return None

        transaction_id = _first_value(data, self.ID_KEYS)
        raw_items = _first_value(data, self.ITEMS_KEYS)
        total = _to_decimal(_first_value(data, self.TOTAL_KEYS))

        if isinstance(transaction_id, bool) or not isinstance(transaction_id, (str, int)):
            return None
        transaction_id = str(transaction_id).strip()
        if not transaction_id or not isinstance(raw_items, list) or total is None:
            return None

        vendor = _first_value(data, self.VENDOR_KEYS)
        return ReceiptRecord(
            source_kind=SourceKind.QR,
            transaction_id=transaction_id,
            items=self._json_items(raw_items),
            declared_total=total,
            vendor_name=vendor.strip() if isinstance(vendor, str) and vendor.strip() else None,
        )

    def _json_items(self, raw_items: List[Any]) -> List[LineItem]:
        items = []
        for entry in raw_items:
            if not isinstance(entry, dict):
                continue
            name = _first_value(entry, self.ITEM_NAME_KEYS)
            price = _to_decimal(_first_value(entry, self.ITEM_PRICE_KEYS))
            if not isinstance(name, str) or price is None:
                logger.debug(f"Skipping malformed payload item: {entry!r}")
                continue

            quantity = _to_quantity(_first_value(entry, self.ITEM_QUANTITY_KEYS))
            try:
                items.append(LineItem(name=name, unit_price=price, quantity=quantity))
            except ValidationError as e:
                logger.debug(f"Skipping invalid payload item {entry!r}: {e}")
        return items

    # --- Loose text payloads ---

    def _parse_loose(self, text: str) -> Optional[ReceiptRecord]:
        header: Dict[str, Any] = {}
        item_lines = []

        for fragment in PAYLOAD_FRAGMENT_SPLIT_RE.split(text):
            fragment = fragment.strip()
            if not fragment:
                continue

            key_value = KEY_VALUE_RE.match(fragment)
            field = self._loose_header_field(key_value.group('key')) if key_value else None
            if field is None:
                item_lines.append(fragment)
                continue

            value = key_value.group('value')
            if field == 'declared_total':
                token = find_price_token(value)
                if token and token.acceptable:
                    header.setdefault(field, token.amount)
            else:
                header.setdefault(field, value)

        items = self.receipt_parser.parse_items("\n".join(item_lines))
        if not items and not header.get('transaction_id'):
            return None

        return ReceiptRecord(source_kind=SourceKind.QR, items=items, **header)

    def _loose_header_field(self, key: str) -> Optional[str]:
        compact = re.sub(r'[\s_\-]+', '', key.lower())
        for field, aliases in self.LOOSE_HEADER_KEYS.items():
            if compact in aliases:
                return field
        return None


def _first_value(data: Dict[str, Any], keys: Sequence[str]) -> Any:
    """Value of the first key present with a non-null value."""
    for key in keys:
        if data.get(key) is not None:
            return data[key]
    return None


def _to_decimal(value: Any) -> Optional[Decimal]:
    """Numeric JSON values (or price-like strings) as Decimal."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            amount = Decimal(str(value))
        except InvalidOperation:
            return None
        return amount if amount.is_finite() else None
    if isinstance(value, str):
        if value.strip().startswith('-'):
            return None
        return normalize_price(value)
    return None


def _to_quantity(value: Any) -> int:
    if isinstance(value, bool):
        return 1
    try:
        quantity = int(value)
    except (TypeError, ValueError, OverflowError):
        return 1
    return quantity if quantity >= 1 else 1


def parse_payload(payload: str) -> Optional[ReceiptRecord]:
    """Convenience wrapper using default settings."""
    return PayloadParser().parse(payload)
