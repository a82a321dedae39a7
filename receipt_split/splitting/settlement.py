"""
Settlement suggestions: who pays whom to square up a shared expense.
"""

from collections import defaultdict
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, Iterable, List, Mapping, Optional

from receipt_split.config import get_settings
from receipt_split.models import Allocation, Settlement
from receipt_split.splitting.engine import to_money
from receipt_split.utils.logging_config import logger


def net_balances(paid: Mapping[str, Any], owed: Iterable[Allocation],
                 minor_unit: Optional[Decimal] = None) -> Dict[str, Decimal]:
    """
    paid - owed per person, quantized to the minor unit.
    Positive balances are owed money, negative balances owe money.
    """
    unit = minor_unit if minor_unit is not None else get_settings().minor_unit
    balances: Dict[str, Decimal] = defaultdict(Decimal)

    for name, amount in paid.items():
        value = to_money(amount)
        if value is None or not isinstance(name, str) or not name.strip():
            continue
        balances[name.strip()] += value
    for allocation in owed:
        balances[allocation.participant.name] -= allocation.amount_owed

    return {name: value.quantize(unit, rounding=ROUND_HALF_UP) for name, value in balances.items()}


def settle_balances(paid: Mapping[str, Any], owed: Iterable[Allocation],
                    minor_unit: Optional[Decimal] = None) -> List[Settlement]:
    """
    Greedy settlement plan: the largest debtor pays the largest creditor until
    one of them reaches zero, then move on. Produces at most
    (debtors + creditors - 1) transfers.
    """
    balances = net_balances(paid, owed, minor_unit)

    creditors = sorted(
        ([name, value] for name, value in balances.items() if value > 0),
        key=lambda entry: entry[1], reverse=True,
    )
    debtors = sorted(
        ([name, -value] for name, value in balances.items() if value < 0),
        key=lambda entry: entry[1], reverse=True,
    )

    settlements = []
    i, j = 0, 0
    while i < len(debtors) and j < len(creditors):
        amount = min(debtors[i][1], creditors[j][1])
        settlements.append(Settlement(debtor=debtors[i][0], creditor=creditors[j][0], amount=amount))

        debtors[i][1] -= amount
        creditors[j][1] -= amount
        if debtors[i][1] == 0:
            i += 1
        if creditors[j][1] == 0:
            j += 1

    if i < len(debtors) or j < len(creditors):
        logger.warning("Balances do not net to zero; some amounts remain unsettled")

    return settlements
