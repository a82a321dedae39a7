"""
Unit tests for the split engine: even, by-amount and by-percentage allocation.
"""
import pytest
from decimal import Decimal

from pydantic import TypeAdapter

from receipt_split.models import ByAmount, ByPercentage, EvenSplit, Participant, SplitStrategy
from receipt_split.splitting.engine import (
    effective_participants,
    split,
    split_difference,
    to_money,
    total_owed,
)


def owed(allocations):
    return [(a.participant.name, a.amount_owed) for a in allocations]


class TestEvenSplit:

    def test_divides_evenly(self):
        allocations = split(Decimal("30"), ["Alice", "Bob", "Carol"])
        assert owed(allocations) == [
            ("Alice", Decimal("10.00")),
            ("Bob", Decimal("10.00")),
            ("Carol", Decimal("10.00")),
        ]
        assert all(a.percentage == pytest.approx(100 / 3) for a in allocations)

    def test_blank_names_are_excluded(self):
        allocations = split(30, ["Alice", "  ", "Bob"])
        assert owed(allocations) == [("Alice", Decimal("15.00")), ("Bob", Decimal("15.00"))]

    def test_names_are_trimmed(self):
        assert [a.participant.name for a in split(10, ["  Alice ", "Bob"])] == ["Alice", "Bob"]

    def test_residual_goes_to_last_participant(self):
        allocations = split(10, ["A", "B", "C"])
        assert [a.amount_owed for a in allocations] == [
            Decimal("3.33"), Decimal("3.33"), Decimal("3.34"),
        ]
        assert total_owed(allocations) == Decimal("10.00")

    def test_duplicate_names_are_kept(self):
        assert len(split(20, ["Sam", "Sam"])) == 2

    def test_accepts_participant_models_and_strings(self):
        allocations = split("12.50", [Participant(name="Alice"), "Bob"])
        assert owed(allocations) == [("Alice", Decimal("6.25")), ("Bob", Decimal("6.25"))]

    def test_total_is_rounded_to_minor_unit(self):
        allocations = split(Decimal("10.005"), ["A"])
        assert allocations[0].amount_owed == Decimal("10.01")

    @pytest.mark.parametrize("total", [0, Decimal("0.00"), -5, Decimal("0.001"), None, "abc", "NaN"])
    def test_non_positive_or_invalid_total_yields_nothing(self, total):
        assert split(total, ["Alice", "Bob"]) == []

    @pytest.mark.parametrize("participants", [[], ["", "   "], None])
    def test_no_participants_yields_nothing(self, participants):
        assert split(30, participants) == []

    def test_explicit_minor_unit(self):
        allocations = split(10, ["A", "B", "C"], minor_unit=Decimal("1"))
        assert [a.amount_owed for a in allocations] == [Decimal("3"), Decimal("3"), Decimal("4")]

    def test_unknown_strategy_raises(self):
        with pytest.raises(TypeError):
            split(10, ["A"], strategy="even")


class TestByAmount:

    def test_uses_given_amounts(self):
        strategy = ByAmount(amounts={"Alice": Decimal("20"), "Bob": Decimal("30")})
        allocations = split(50, ["Alice", "Bob"], strategy)
        assert owed(allocations) == [("Alice", Decimal("20")), ("Bob", Decimal("30"))]
        assert allocations[0].percentage == pytest.approx(40.0)
        assert split_difference(50, allocations) == Decimal("0")

    def test_participants_without_amount_are_skipped(self):
        strategy = ByAmount(amounts={"Bob": Decimal("12")})
        assert owed(split(50, ["Alice", "Bob", "Carol"], strategy)) == [("Bob", Decimal("12"))]

    def test_shortfall_is_reported_not_fixed(self):
        strategy = ByAmount(amounts={"Alice": Decimal("20"), "Bob": Decimal("25")})
        allocations = split(50, ["Alice", "Bob"], strategy)
        assert total_owed(allocations) == Decimal("45")
        assert split_difference(50, allocations) == Decimal("5")

    def test_over_allocation_is_negative_difference(self):
        strategy = ByAmount(amounts={"Alice": Decimal("40"), "Bob": Decimal("20")})
        assert split_difference(50, split(50, ["Alice", "Bob"], strategy)) == Decimal("-10")

    def test_negative_amount_is_ignored(self, caplog):
        strategy = ByAmount(amounts={"Alice": Decimal("-5"), "Bob": Decimal("5")})
        assert owed(split(10, ["Alice", "Bob"], strategy)) == [("Bob", Decimal("5"))]
        assert "negative amount" in caplog.text

    def test_amount_keys_are_trimmed(self):
        strategy = ByAmount(amounts={" Alice ": Decimal("7")})
        assert owed(split(7, ["Alice"], strategy)) == [("Alice", Decimal("7"))]


class TestByPercentage:

    def test_percentages_of_total(self):
        strategy = ByPercentage(percentages={"Alice": 60, "Bob": 40})
        allocations = split(100, ["Alice", "Bob"], strategy)
        assert owed(allocations) == [("Alice", Decimal("60.00")), ("Bob", Decimal("40.00"))]
        assert [a.percentage for a in allocations] == [60.0, 40.0]

    def test_rounding_residual_goes_to_last(self):
        strategy = ByPercentage(percentages={"A": 33.33, "B": 33.33, "C": 33.34})
        allocations = split(10, ["A", "B", "C"], strategy)
        assert [a.amount_owed for a in allocations] == [
            Decimal("3.33"), Decimal("3.33"), Decimal("3.34"),
        ]

    def test_partial_percentages_cover_part_of_total(self, caplog):
        strategy = ByPercentage(percentages={"Alice": 50})
        allocations = split(80, ["Alice", "Bob"], strategy)
        assert owed(allocations) == [("Alice", Decimal("40.00"))]
        assert split_difference(80, allocations) == Decimal("40.00")
        assert "not 100" in caplog.text

    def test_no_matching_names(self):
        assert split(10, ["Alice"], ByPercentage(percentages={"Zed": 100})) == []


class TestHelpers:

    def test_strategy_from_raw_data(self):
        adapter = TypeAdapter(SplitStrategy)
        assert isinstance(adapter.validate_python({"kind": "even"}), EvenSplit)
        strategy = adapter.validate_python({"kind": "by_amount", "amounts": {"Alice": "12.5"}})
        assert isinstance(strategy, ByAmount)
        assert strategy.amounts["Alice"] == Decimal("12.5")

    def test_total_owed_of_nothing(self):
        assert total_owed([]) == Decimal("0")

    def test_effective_participants(self):
        people = effective_participants(["Alice", "", " Bob ", 42, Participant(name="Carol")])
        assert [p.name for p in people] == ["Alice", "Bob", "Carol"]

    @pytest.mark.parametrize("value,expected", [
        (5, Decimal("5")),
        (2.5, Decimal("2.5")),
        (" 3.10 ", Decimal("3.10")),
        (True, None),
        ("Infinity", None),
        ("ten", None),
    ])
    def test_to_money(self, value, expected):
        assert to_money(value) == expected


class TestOutOfRangeInput:
    """Inputs the Decimal context cannot quantize yield no allocations."""

    def test_total_beyond_decimal_precision(self):
        assert split(Decimal("1e30"), ["A", "B"]) == []

    def test_largest_representable_total(self):
        allocations = split(Decimal("1e25"), ["A", "B"])
        assert total_owed(allocations) == Decimal("1e25")

    @pytest.mark.parametrize("bad", [float("inf"), float("-inf"), float("nan")])
    def test_non_finite_percentage_is_skipped(self, bad, caplog):
        strategy = ByPercentage(percentages={"A": bad, "B": 50})
        allocations = split(Decimal("10"), ["A", "B"], strategy)
        assert owed(allocations) == [("B", Decimal("5.00"))]
        assert "non-finite percentage" in caplog.text

    def test_huge_percentage_yields_nothing(self):
        strategy = ByPercentage(percentages={"A": 1e300})
        assert split(Decimal("10"), ["A"], strategy) == []

    def test_non_finite_amount_is_skipped(self):
        strategy = ByAmount.model_construct(amounts={"A": Decimal("Infinity"), "B": Decimal("4")})
        assert owed(split(10, ["A", "B"], strategy)) == [("B", Decimal("4"))]
