# payoff/calculations.py
"""
Stand-alone debt metrics used by dashboards and summaries.

These are closed-form estimates per debt. The month-by-month schedule lives in
optimization.build_plan.
"""
import math
from typing import List, Optional

from .schemas import Debt


def total_debt(debts: List[Debt]) -> float:
    return sum(d.balance for d in debts)


def monthly_minimum(debts: List[Debt]) -> float:
    return sum(d.minimum for d in debts if d.balance > 0)


def weighted_apr(debts: List[Debt]) -> float:
    total = total_debt(debts)
    if total <= 0:
        return 0.0
    return sum(d.interest_apr * d.balance for d in debts) / total


def payoff_time(balance: float, payment: float, apr: float) -> Optional[int]:
    """
    Months needed to clear `balance` with a fixed monthly `payment`.

    Returns 0 when there is nothing to pay (or no payment), and None when the
    payment never covers the monthly interest.
    """
    if payment <= 0 or balance <= 0:
        return 0
    r = max(0.0, apr) / 12.0
    if r == 0:
        return math.ceil(balance / payment)
    if payment <= balance * r:
        return None
    months = -math.log(1 - (balance * r) / payment) / math.log(1 + r)
    return math.ceil(months)


def interest_saved(balance: float, minimum: float, extra: float, apr: float) -> Optional[float]:
    """
    Approximate interest saved by paying `extra` on top of `minimum` each month.
    None when the minimum alone never clears the debt.
    """
    base_months = payoff_time(balance, minimum, apr)
    if base_months is None:
        return None
    faster_months = payoff_time(balance, minimum + max(0.0, extra), apr)
    faster_interest = (minimum + max(0.0, extra)) * faster_months - balance
    base_interest = minimum * base_months - balance
    return max(0.0, base_interest - faster_interest)


def sort_by_snowball(debts: List[Debt]) -> List[Debt]:
    return sorted(debts, key=lambda d: d.balance)


def sort_by_avalanche(debts: List[Debt]) -> List[Debt]:
    return sorted(debts, key=lambda d: -d.interest_apr)
