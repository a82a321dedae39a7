"""
Allocation of an expense total across participants.

All arithmetic is Decimal. Shares are rounded down to the currency's minor
unit and the last allocated participant absorbs the residual, so allocations
always sum to the intended amount and never go negative.
"""

import math
from decimal import ROUND_DOWN, ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Dict, Iterable, List, Optional, Sequence, Union

from receipt_split.config import get_settings
from receipt_split.models import (
    Allocation,
    ByAmount,
    ByPercentage,
    EvenSplit,
    Participant,
    SplitStrategy,
)
from receipt_split.utils.logging_config import logger

ParticipantLike = Union[str, Participant]


def to_money(value: Any) -> Optional[Decimal]:
    """Decimal for int/float/str/Decimal input; None when not a finite number."""
    if value is None or isinstance(value, bool):
        return None
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except InvalidOperation:
        return None
    return amount if amount.is_finite() else None


def effective_participants(participants: Iterable[ParticipantLike]) -> List[Participant]:
    """Trimmed participants in input order; blank names are dropped, duplicates kept."""
    result = []
    for participant in participants or []:
        if isinstance(participant, Participant):
            result.append(participant)
        elif isinstance(participant, str) and participant.strip():
            result.append(Participant(name=participant))
    return result


def split(
    total: Any,
    participants: Sequence[ParticipantLike],
    strategy: Optional[SplitStrategy] = None,
    minor_unit: Optional[Decimal] = None,
) -> List[Allocation]:
    """
    Allocates `total` across `participants` under `strategy` (even by default).

    Returns an empty list when the total is not positive or no participant
    name survives trimming.
    """
    strategy = strategy if strategy is not None else EvenSplit()
    unit = minor_unit if minor_unit is not None else get_settings().minor_unit

    amount = to_money(total)
    if amount is None or amount <= 0:
        return []
    try:
        amount = amount.quantize(unit, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        logger.debug(f"Total {amount} cannot be expressed in units of {unit}")
        return []
    if amount <= 0:
        return []

    people = effective_participants(participants)
    if not people:
        return []

    if isinstance(strategy, EvenSplit):
        allocations = _split_even(amount, people, unit)
    elif isinstance(strategy, ByAmount):
        allocations = _split_by_amount(amount, people, strategy.amounts)
    elif isinstance(strategy, ByPercentage):
        allocations = _split_by_percentage(amount, people, strategy.percentages, unit)
    else:
        raise TypeError(f"Unsupported split strategy: {strategy!r}")

    logger.debug(f"Split {amount} across {len(allocations)} of {len(people)} participants")
    return allocations


def _split_even(total: Decimal, people: List[Participant], unit: Decimal) -> List[Allocation]:
    count = len(people)
    share = (total / count).quantize(unit, rounding=ROUND_DOWN)
    amounts = [share] * count
    amounts[-1] = total - share * (count - 1)

    percentage = 100.0 / count
    return [
        Allocation(participant=person, amount_owed=owed, percentage=percentage)
        for person, owed in zip(people, amounts)
    ]


def _split_by_amount(total: Decimal, people: List[Participant],
                     amounts: Dict[str, Decimal]) -> List[Allocation]:
    by_name = {name.strip(): value for name, value in amounts.items()}
    allocations = []

    for person in people:
        owed = by_name.get(person.name)
        if owed is None:
            continue
        if not owed.is_finite():
            logger.warning(f"Ignoring non-finite amount {owed} for {person.name}")
            continue
        if owed < 0:
            logger.warning(f"Ignoring negative amount {owed} for {person.name}")
            continue
        allocations.append(Allocation(
            participant=person,
            amount_owed=owed,
            percentage=float(owed / total * 100),
        ))

    # Sum-vs-total is the caller's check (see split_difference)
    logger.debug(f"Custom amounts cover {total_owed(allocations)} of {total}")
    return allocations


def _split_by_percentage(total: Decimal, people: List[Participant],
                         percentages: Dict[str, float], unit: Decimal) -> List[Allocation]:
    by_name = {name.strip(): value for name, value in percentages.items()}
    entries = []

    for person in people:
        percent = by_name.get(person.name)
        if percent is None:
            continue
        if not math.isfinite(percent):
            logger.warning(f"Ignoring non-finite percentage {percent} for {person.name}")
            continue
        if percent < 0:
            logger.warning(f"Ignoring negative percentage {percent} for {person.name}")
            continue
        entries.append((person, percent))

    if not entries:
        return []

    hundred = Decimal(100)
    raw_percents = [Decimal(str(percent)) for _, percent in entries]
    if sum(raw_percents) != hundred:
        logger.warning(f"Percentages sum to {sum(raw_percents)}, not 100")

    try:
        amounts = [(total * pct / hundred).quantize(unit, rounding=ROUND_DOWN) for pct in raw_percents]
        expected = (total * sum(raw_percents) / hundred).quantize(unit, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        logger.warning(f"Percentages {by_name} are out of range for a total of {total}")
        return []
    amounts[-1] += expected - sum(amounts)

    return [
        Allocation(participant=person, amount_owed=owed, percentage=percent)
        for (person, percent), owed in zip(entries, amounts)
    ]


def total_owed(allocations: Iterable[Allocation]) -> Decimal:
    """Sum of amount_owed across allocations."""
    return sum((allocation.amount_owed for allocation in allocations), Decimal('0'))


def split_difference(total: Any, allocations: Iterable[Allocation]) -> Decimal:
    """
    total - sum(allocations). Positive means the split is short of the total,
    negative means it over-allocates. Used to validate custom amount splits.
    """
    amount = to_money(total) or Decimal('0')
    return amount - total_owed(allocations)
