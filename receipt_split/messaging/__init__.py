"""
Payment request messages built from split allocations.
"""

from .composer import (
    MessageContext,
    render_group_message,
    render_message,
    render_messages,
    render_template,
    summarize_items,
)
from .formatting import format_amount, format_date
from .templates import MessageTemplate, PaymentMethod, payment_instructions

__all__ = [
    "MessageTemplate",
    "MessageContext",
    "PaymentMethod",
    "render_message",
    "render_messages",
    "render_group_message",
    "render_template",
    "summarize_items",
    "payment_instructions",
    "format_amount",
    "format_date",
]
