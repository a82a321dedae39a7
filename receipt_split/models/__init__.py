"""
Data models for receipt parsing and expense splitting.
"""

from .receipt import LineItem, ReceiptRecord, SourceKind
from .split import (
    Allocation,
    ByAmount,
    ByPercentage,
    EvenSplit,
    Participant,
    Settlement,
    SplitStrategy,
)

__all__ = [
    "LineItem",
    "ReceiptRecord",
    "SourceKind",
    "Participant",
    "Allocation",
    "EvenSplit",
    "ByAmount",
    "ByPercentage",
    "SplitStrategy",
    "Settlement",
]
