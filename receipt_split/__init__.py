"""
receipt_split: receipt line-item extraction and expense splitting.

Typical flow:

    >>> from receipt_split import ReceiptParser, split
    >>> items = ReceiptParser().parse_items(ocr_text)
    >>> total = sum(item.line_total for item in items)
    >>> allocations = split(total, ["Alice", "Bob"])
"""

from receipt_split.models import (
    Allocation,
    ByAmount,
    ByPercentage,
    EvenSplit,
    LineItem,
    Participant,
    ReceiptRecord,
    Settlement,
    SourceKind,
)
from receipt_split.parsers import PayloadParser, ReceiptParser, parse_items, parse_payload
from receipt_split.splitting import settle_balances, split, split_difference, total_owed
from receipt_split.messaging import (
    MessageContext,
    MessageTemplate,
    PaymentMethod,
    render_group_message,
    render_message,
)

__version__ = "0.1.0"

__all__ = [
    "LineItem",
    "ReceiptRecord",
    "SourceKind",
    "Participant",
    "Allocation",
    "EvenSplit",
    "ByAmount",
    "ByPercentage",
    "Settlement",
    "ReceiptParser",
    "PayloadParser",
    "parse_items",
    "parse_payload",
    "split",
    "total_owed",
    "split_difference",
    "settle_balances",
    "MessageTemplate",
    "MessageContext",
    "PaymentMethod",
    "render_message",
    "render_group_message",
]
