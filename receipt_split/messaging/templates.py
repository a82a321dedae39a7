"""
Message templates and payment instructions for split requests.

Templates are plain strings with {placeholder} tokens; see composer.py for
the substitution rules.
"""

from enum import Enum
from typing import Optional


class MessageTemplate(str, Enum):
    """Tone of a payment request."""
    STANDARD = "standard"
    FRIENDLY = "friendly"
    FORMAL = "formal"
    DETAILED = "detailed"

    @property
    def text(self) -> str:
        return TEMPLATE_TEXT[self]

    @property
    def description(self) -> str:
        return TEMPLATE_DESCRIPTIONS[self]


TEMPLATE_TEXT = {
    MessageTemplate.STANDARD: (
        "Hi {name}! You owe {amount} for {expense} from {date}. "
        "Payment request from {payer}. {payment}"
    ),
    MessageTemplate.FRIENDLY: (
        "Hey {name}! Hope you enjoyed {expense}. I covered the bill ({total}) "
        "and your share comes to {amount}. No rush, whenever is convenient! {payment}\n"
        "Thanks so much!\n"
        "{payer}"
    ),
    MessageTemplate.FORMAL: (
        "Dear {name},\n"
        "\n"
        "I am writing to request payment for your portion of the shared expense "
        "\"{expense}\" from {date}.\n"
        "\n"
        "Total amount paid: {total}\n"
        "Your share: {amount}\n"
        "Due: {dueDate}\n"
        "\n"
        "{payment}\n"
        "\n"
        "Best regards,\n"
        "{payer}"
    ),
    MessageTemplate.DETAILED: (
        "Hi {name}! Your share for {expense} is {amount}. Items: {items}. "
        "Payment requested by {payer} on {date}. Due: {dueDate}. {payment}"
    ),
}

TEMPLATE_DESCRIPTIONS = {
    MessageTemplate.STANDARD: "Simple and direct payment request",
    MessageTemplate.FRIENDLY: "Casual and friendly tone",
    MessageTemplate.FORMAL: "Professional business tone",
    MessageTemplate.DETAILED: "Itemized breakdown with due date",
}

GROUP_HEADER = "Split request for {expense} on {date}\nTotal: {total}\nSplit {count} ways:\n"
GROUP_LINE = "• {name}: {amount}"
GROUP_FOOTER = "Requested by {payer}"


class PaymentMethod(str, Enum):
    """How the payer wants to be paid back."""
    VENMO = "venmo"
    CASH_APP = "cash_app"
    ZELLE = "zelle"
    PAYPAL = "paypal"
    BANK_TRANSFER = "bank_transfer"
    CASH = "cash"
    OTHER = "other"


def payment_instructions(method: Optional[PaymentMethod], handle: Optional[str] = None) -> str:
    """One-line instruction telling the participant how to pay."""
    if method is None:
        return ""

    handle = (handle or "").strip().lstrip("@$") or None

    if method == PaymentMethod.VENMO:
        return f"Send via Venmo to @{handle}." if handle else "Send via Venmo."
    if method == PaymentMethod.CASH_APP:
        return f"Send via Cash App to ${handle}." if handle else "Send via Cash App."
    if method == PaymentMethod.ZELLE:
        return f"Send via Zelle to {handle}." if handle else "Send via Zelle."
    if method == PaymentMethod.PAYPAL:
        return f"Send via PayPal to {handle}." if handle else "Send via PayPal."
    if method == PaymentMethod.BANK_TRANSFER:
        return "Bank transfer details will be provided separately."
    if method == PaymentMethod.CASH:
        return "Cash payment - we can arrange a convenient time to meet."
    return f"Payment via {handle}." if handle else ""
