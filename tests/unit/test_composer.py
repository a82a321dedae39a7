"""
Unit tests for message templates, placeholder substitution and formatting.
"""
import pytest
from datetime import date, datetime
from decimal import Decimal

from receipt_split.messaging.composer import (
    MessageContext,
    render_group_message,
    render_message,
    render_messages,
    render_template,
    summarize_items,
)
from receipt_split.messaging.formatting import format_amount, format_date
from receipt_split.messaging.templates import MessageTemplate, PaymentMethod, payment_instructions
from receipt_split.models import Allocation, LineItem, Participant


def allocation(name, amount):
    return Allocation(participant=Participant(name=name), amount_owed=Decimal(amount))


@pytest.fixture
def dinner():
    return MessageContext(expense_name="Dinner", expense_date="2024-03-14", payer="Bob")


class TestRenderMessage:

    def test_standard_template(self, dinner):
        message = render_message(MessageTemplate.STANDARD, allocation("Alice", "10"), dinner)
        assert message == (
            "Hi Alice! You owe $10.00 for Dinner from Mar 14, 2024. "
            "Payment request from Bob."
        )

    def test_template_by_name(self, dinner):
        message = render_message("formal", allocation("Alice", "10"), dinner)
        assert message.startswith("Dear Alice,")
        assert "Your share: $10.00" in message
        assert message.endswith("Best regards,\nBob")

    def test_unknown_template_name(self, dinner):
        with pytest.raises(ValueError):
            render_message("sarcastic", allocation("Alice", "10"), dinner)

    def test_missing_values_render_empty(self):
        message = render_message(MessageTemplate.DETAILED, allocation("Alice", "5"))
        assert "{" not in message and "}" not in message
        assert "$5.00" in message
        assert "Due: ." in message

    def test_friendly_uses_context_total(self, dinner):
        context = dinner.model_copy(update={"total": Decimal("30")})
        message = render_message(MessageTemplate.FRIENDLY, allocation("Alice", "10"), context)
        assert "I covered the bill ($30.00)" in message
        assert "your share comes to $10.00" in message

    def test_total_defaults_to_amount_owed(self):
        message = render_message(MessageTemplate.FRIENDLY, allocation("Alice", "12.5"))
        assert "($12.50)" in message

    def test_due_date_from_datetime(self):
        context = MessageContext(expense_name="Dinner", payer="Bob", due_date=datetime(2024, 4, 1, 18, 30))
        assert "Due: Apr 1, 2024" in render_message(MessageTemplate.FORMAL, allocation("Alice", "10"), context)

    def test_detailed_lists_items(self):
        context = MessageContext(
            expense_name="Groceries",
            items=["Milk", "Bread", "Eggs", "Apples", "Jam"],
            due_date=date(2024, 3, 20),
        )
        message = render_message(MessageTemplate.DETAILED, allocation("Alice", "8"), context)
        assert "Items: Milk, Bread, Eggs & 2 more." in message
        assert "Due: Mar 20, 2024." in message

    def test_payment_instructions_in_message(self, dinner):
        context = dinner.model_copy(update={
            "payment_method": PaymentMethod.VENMO,
            "payment_handle": "@bob-k",
        })
        message = render_message(MessageTemplate.STANDARD, allocation("Alice", "10"), context)
        assert message.endswith("Payment request from Bob. Send via Venmo to @bob-k.")

    def test_render_messages_keeps_order(self, dinner):
        messages = render_messages("standard", [allocation("Alice", "1"), allocation("Bob", "2")], dinner)
        assert [m.split("!")[0] for m in messages] == ["Hi Alice", "Hi Bob"]

    def test_locale_and_currency(self, dinner):
        context = dinner.model_copy(update={"currency": "EUR", "locale": "de_DE"})
        message = render_message(MessageTemplate.STANDARD, allocation("Alice", "1234.5"), context)
        assert "1.234,50" in message
        assert "€" in message


class TestGroupMessage:

    def test_group_summary(self):
        context = MessageContext(expense_name="Dinner", expense_date=date(2024, 3, 14), payer="Carol")
        message = render_group_message([allocation("Alice", "15"), allocation("Bob", "15")], context)
        assert message == (
            "Split request for Dinner on Mar 14, 2024\n"
            "Total: $30.00\n"
            "Split 2 ways:\n"
            "\n"
            "• Alice: $15.00\n"
            "• Bob: $15.00\n"
            "\n"
            "Requested by Carol"
        )

    def test_group_summary_without_context(self):
        message = render_group_message([allocation("Alice", "3.33")])
        assert "Total: $3.33" in message
        assert "• Alice: $3.33" in message


class TestContext:

    def test_line_items_become_names(self):
        context = MessageContext(items=[LineItem(name="Milk", unit_price=Decimal("3.50")), "Bread"])
        assert context.items == ["Milk", "Bread"]

    @pytest.mark.parametrize("value", ["not a date", "", None])
    def test_unusable_dates_are_blank(self, value):
        assert MessageContext(expense_date=value).expense_date is None

    def test_payment_method_from_string(self):
        assert MessageContext(payment_method="zelle").payment_method == PaymentMethod.ZELLE


class TestHelpers:

    def test_render_template_unknown_placeholders(self):
        assert render_template("Hi {name}, {unknown}!", {"name": "Alice"}) == "Hi Alice, !"

    def test_render_template_collapses_gaps(self):
        assert render_template("Pay {who}  {amount} now", {"amount": "$1.00"}) == "Pay $1.00 now"

    @pytest.mark.parametrize("names,expected", [
        ([], ""),
        (["Milk"], "Milk"),
        (["Milk", "Bread", "Eggs"], "Milk, Bread, Eggs"),
        (["Milk", "Bread", "Eggs", "Jam"], "Milk, Bread, Eggs & 1 more"),
    ])
    def test_summarize_items(self, names, expected):
        assert summarize_items(names) == expected

    @pytest.mark.parametrize("method,handle,expected", [
        (None, "bob", ""),
        (PaymentMethod.VENMO, "@bob", "Send via Venmo to @bob."),
        (PaymentMethod.VENMO, None, "Send via Venmo."),
        (PaymentMethod.CASH_APP, "$bob", "Send via Cash App to $bob."),
        (PaymentMethod.ZELLE, "bob@example.com", "Send via Zelle to bob@example.com."),
        (PaymentMethod.OTHER, None, ""),
    ])
    def test_payment_instructions(self, method, handle, expected):
        assert payment_instructions(method, handle) == expected

    def test_format_amount_default(self):
        assert format_amount(Decimal("10")) == "$10.00"

    def test_format_amount_unknown_locale_falls_back(self):
        assert format_amount(Decimal("10"), locale="xx_YY") == "$10.00"

    def test_format_date(self):
        assert format_date(date(2024, 3, 14)) == "Mar 14, 2024"
        assert format_date(None) == ""

    def test_template_metadata(self):
        assert MessageTemplate.STANDARD.description == "Simple and direct payment request"
        assert "{dueDate}" in MessageTemplate.FORMAL.text
