"""
Expense splitting: allocations per participant and settlement plans.
"""

from .engine import split, split_difference, total_owed
from .settlement import net_balances, settle_balances

__all__ = ["split", "total_owed", "split_difference", "net_balances", "settle_balances"]
