"""
Fills message templates with allocation data.

Placeholders: {name}, {amount}, {expense}, {date}, {payer}, {items},
{dueDate}, {total}, {payment}. Any placeholder without a value (or unknown
to the renderer) becomes an empty string.
"""

import re
from datetime import date, datetime
from decimal import Decimal
from typing import Dict, List, Mapping, Optional, Sequence, Union

from dateutil import parser as date_parser
from pydantic import BaseModel, Field, field_validator

from receipt_split.models import Allocation, LineItem
from receipt_split.messaging.formatting import format_amount, format_date
from receipt_split.messaging.templates import (
    GROUP_FOOTER,
    GROUP_HEADER,
    GROUP_LINE,
    MessageTemplate,
    PaymentMethod,
    payment_instructions,
)
from receipt_split.splitting.engine import total_owed
from receipt_split.utils.logging_config import logger

PLACEHOLDER_RE = re.compile(r'\{(\w+)\}')
MAX_LISTED_ITEMS = 3


class MessageContext(BaseModel):
    """Everything a template may need besides the allocation itself."""
    expense_name: str = ""
    expense_date: Optional[date] = None
    payer: str = ""
    due_date: Optional[date] = None
    items: List[str] = Field(default_factory=list)
    total: Optional[Decimal] = None
    currency: Optional[str] = None
    locale: Optional[str] = None
    payment_method: Optional[PaymentMethod] = None
    payment_handle: Optional[str] = None

    @field_validator('expense_date', 'due_date', mode='before')
    @classmethod
    def parse_date(cls, v):
        """Accepts date objects, datetimes and free-form date strings."""
        if isinstance(v, datetime):
            return v.date()
        if isinstance(v, str):
            if not v.strip():
                return None
            try:
                return date_parser.parse(v).date()
            except (ValueError, OverflowError):
                logger.debug(f"Unparseable date {v!r}; leaving it blank")
                return None
        return v

    @field_validator('items', mode='before')
    @classmethod
    def item_names(cls, v):
        if v is None:
            return []
        return [item.name if isinstance(item, LineItem) else item for item in v]


def render_template(template_text: str, values: Mapping[str, str]) -> str:
    """
    Substitutes {placeholder} tokens from `values`; missing keys become ''.
    Whitespace left behind by empty placeholders is tidied per line.
    """
    rendered = PLACEHOLDER_RE.sub(lambda match: values.get(match.group(1)) or "", template_text)
    lines = [re.sub(r'[ \t]{2,}', ' ', line).strip() for line in rendered.split('\n')]
    return '\n'.join(lines).strip()


def summarize_items(names: Sequence[str], limit: int = MAX_LISTED_ITEMS) -> str:
    """'Milk, Bread, Eggs & 2 more'"""
    if not names:
        return ""
    listed = ", ".join(names[:limit])
    remaining = len(names) - limit
    return f"{listed} & {remaining} more" if remaining > 0 else listed


def _context_values(context: MessageContext) -> Dict[str, str]:
    return {
        "expense": context.expense_name,
        "date": format_date(context.expense_date, locale=context.locale),
        "payer": context.payer,
        "items": summarize_items(context.items),
        "dueDate": format_date(context.due_date, locale=context.locale),
        "payment": payment_instructions(context.payment_method, context.payment_handle),
    }


def render_message(template: Union[MessageTemplate, str], allocation: Allocation,
                   context: Optional[MessageContext] = None) -> str:
    """Renders a payment request for one participant."""
    context = context or MessageContext()
    template = MessageTemplate(template)

    total = context.total if context.total is not None else allocation.amount_owed
    values = _context_values(context)
    values.update({
        "name": allocation.participant.name,
        "amount": format_amount(allocation.amount_owed, context.currency, context.locale),
        "total": format_amount(total, context.currency, context.locale),
    })
    return render_template(template.text, values)


def render_messages(template: Union[MessageTemplate, str], allocations: Sequence[Allocation],
                    context: Optional[MessageContext] = None) -> List[str]:
    """One rendered message per allocation, in allocation order."""
    return [render_message(template, allocation, context) for allocation in allocations]


def render_group_message(allocations: Sequence[Allocation],
                         context: Optional[MessageContext] = None) -> str:
    """Single summary listing every participant's share."""
    context = context or MessageContext()
    total = context.total if context.total is not None else total_owed(allocations)

    values = _context_values(context)
    values.update({
        "total": format_amount(total, context.currency, context.locale),
        "count": str(len(allocations)),
    })

    lines = [render_template(GROUP_HEADER, values), ""]
    for allocation in allocations:
        lines.append(render_template(GROUP_LINE, {
            "name": allocation.participant.name,
            "amount": format_amount(allocation.amount_owed, context.currency, context.locale),
        }))
    lines.append("")
    lines.append(render_template(GROUP_FOOTER, values))

    return "\n".join(lines).strip()
