"""
Data models for parsed receipts.

This module defines the structures produced by the free-text pipeline and
the payload parser, validated via Pydantic.
"""

from decimal import Decimal
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SourceKind(str, Enum):
    """Where a receipt record came from."""
    OCR = "ocr"
    QR = "qr"
    BARCODE = "barcode"
    MANUAL = "manual"


class LineItem(BaseModel):
    """
    A single priced line extracted from a receipt.

    unit_price is the price as printed on the line; quantity is recorded
    separately and never multiplied in by the parser.
    """
    model_config = ConfigDict(frozen=True)

    name: str
    unit_price: Decimal = Field(ge=0)
    quantity: int = Field(default=1, ge=1)
    confidence: float = Field(default=1.0, ge=0.0, le=1.0)

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        """Item names are trimmed and must not be blank."""
        if not v or not v.strip():
            raise ValueError('Item name must not be empty')
        return v.strip()

    @property
    def line_total(self) -> Decimal:
        """unit_price * quantity, for callers that aggregate."""
        return self.unit_price * self.quantity


class ReceiptRecord(BaseModel):
    """
    Normalized receipt produced by either entry point.
    Item order follows the receipt's line order.
    """
    source_kind: SourceKind
    transaction_id: Optional[str] = None
    items: List[LineItem] = Field(default_factory=list)
    declared_total: Optional[Decimal] = None
    vendor_name: Optional[str] = None

    @property
    def item_count(self) -> int:
        return len(self.items)

    @property
    def items_total(self) -> Decimal:
        """Sum of line totals across all items."""
        return sum((item.line_total for item in self.items), Decimal('0'))
