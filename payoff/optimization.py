# payoff/optimization.py
import logging
from typing import Dict, List, Optional, Tuple

from .schemas import Allocation, Debt, MonthlyPayment, PlanInput, PlanResult, Strategy

logger = logging.getLogger(__name__)

EPS = 1e-6
DECIMALS = 10
INTEREST_TIE_TOLERANCE = 0.01


def _r(x: float) -> float:
    """Round a monetary value and snap sub-EPS residue to exactly zero."""
    v = round(float(x), DECIMALS)
    if abs(v) < EPS:
        return 0.0
    return v


def _monthly_rate(apr: float) -> float:
    return max(0.0, apr) / 12.0


def _alive(balance: float) -> bool:
    return balance > EPS


def _clone_debts(debts: List[Debt]) -> List[Debt]:
    return [d.model_copy() for d in debts]


def _pick_target_index(balances: List[float], aprs: List[float], strategy: Strategy) -> Optional[int]:
    alive = [i for i, b in enumerate(balances) if _alive(b)]
    if not alive:
        return None
    # min() keeps the first of equal keys, so ties fall back to input order
    if strategy is Strategy.SNOWBALL:
        return min(alive, key=lambda i: balances[i])
    if strategy is Strategy.AVALANCHE:
        return min(alive, key=lambda i: -aprs[i])
    raise ValueError(f"No target rule for strategy '{strategy.value}'.")


def _minimum_sum(debts: List[Debt]) -> float:
    return _r(sum(min(d.minimum, d.balance) for d in debts))


def _underfunded_warning(budget: float, min_sum: float) -> str:
    return (
        f"Monthly budget ({budget:,.2f}) is below the sum of minimum payments ({min_sum:,.2f}). "
        "Raise the budget or adjust the minimums."
    )


def _horizon_warning(max_months: int) -> str:
    return (
        f"Debts are still outstanding after the {max_months}-month limit. "
        "Raise the budget or try a different strategy."
    )


def _simulate_month(
    month: int,
    ids: List,
    balances: List[float],
    aprs: List[float],
    minimums: List[float],
    budget: float,
    strategy: Strategy,
) -> MonthlyPayment:
    rows: List[Dict] = []

    # 1) accrue interest and pay minimums in input order
    for i, debt_id in enumerate(ids):
        bal = balances[i]
        if not _alive(bal):
            balances[i] = 0.0
            rows.append({"debt_id": debt_id, "pay": 0.0, "interest": 0.0, "principal": 0.0, "remaining": 0.0, "accrued": 0.0})
            continue
        interest = _r(bal * _monthly_rate(aprs[i]))
        owed = _r(min(minimums[i], bal + interest))
        pay = _r(max(0.0, min(owed, budget)))
        budget = _r(budget - pay)
        interest_part = _r(min(interest, pay))
        principal_part = _r(max(0.0, pay - interest_part))
        balances[i] = _r(max(0.0, bal + interest - pay))
        rows.append({
            "debt_id": debt_id,
            "pay": pay,
            "interest": interest_part,
            "principal": principal_part,
            "remaining": balances[i],
            "accrued": interest,
        })

    # 2) surplus goes to one target at a time until spent
    while _alive(budget):
        ti = _pick_target_index(balances, aprs, strategy)
        if ti is None:
            break
        extra = _r(min(balances[ti], budget))
        budget = _r(budget - extra)
        balances[ti] = _r(max(0.0, balances[ti] - extra))
        row = rows[ti]
        row["pay"] = _r(row["pay"] + extra)
        row["principal"] = _r(row["principal"] + extra)
        row["remaining"] = balances[ti]

    allocations = [Allocation(**row) for row in rows]
    return MonthlyPayment(
        month=month,
        allocations=allocations,
        total_interest_this_month=_r(sum(a.interest for a in allocations)),
        total_paid_this_month=_r(sum(a.pay for a in allocations)),
    )


def _run_strategy(plan_input: PlanInput, strategy: Strategy) -> PlanResult:
    ds = _clone_debts(plan_input.debts)
    budget = _r(plan_input.monthly_budget)
    max_months = plan_input.max_months

    ids = [d.id for d in ds]
    balances = [_r(d.balance) for d in ds]
    aprs = [float(d.interest_apr) for d in ds]
    minimums = [_r(d.minimum) for d in ds]

    warnings: List[str] = []
    min_sum = _minimum_sum(ds)
    if budget + EPS < min_sum:
        warnings.append(_underfunded_warning(budget, min_sum))

    schedule: List[MonthlyPayment] = []
    total_interest = 0.0
    mi = 0
    while mi < max_months and any(_alive(b) for b in balances):
        mi += 1
        month = _simulate_month(mi, ids, balances, aprs, minimums, budget, strategy)
        total_interest = _r(total_interest + month.total_interest_this_month)
        schedule.append(month)

    if any(_alive(b) for b in balances):
        warnings.append(_horizon_warning(max_months))

    logger.debug(
        "strategy=%s debts=%d months=%d total_interest=%.2f",
        strategy.value, len(ds), len(schedule), total_interest,
    )
    return PlanResult(
        schedule=schedule,
        total_interest=total_interest,
        months=len(schedule),
        strategy_used=strategy,
        warnings=warnings,
    )


def _merge_warnings(*results: PlanResult) -> List[str]:
    merged: List[str] = []
    for res in results:
        for w in res.warnings:
            if w not in merged:
                merged.append(w)
    return merged


def _pick_better(aval: PlanResult, snow: PlanResult) -> PlanResult:
    if abs(aval.total_interest - snow.total_interest) > INTEREST_TIE_TOLERANCE:
        return aval if aval.total_interest < snow.total_interest else snow
    return aval if aval.months <= snow.months else snow


def run_both(plan_input: PlanInput) -> Tuple[PlanResult, PlanResult]:
    """Avalanche and snowball runs of the same input, in that order."""
    return _run_strategy(plan_input, Strategy.AVALANCHE), _run_strategy(plan_input, Strategy.SNOWBALL)


def resolve_auto(aval: PlanResult, snow: PlanResult) -> PlanResult:
    better = _pick_better(aval, snow)
    return better.model_copy(update={"warnings": _merge_warnings(aval, snow)})


def build_plan(plan_input: PlanInput) -> PlanResult:
    """
    Simulate month-by-month repayment of plan_input.debts under the chosen strategy.

    'auto' runs avalanche and snowball and keeps the lower-interest result
    (fewer months on a near tie). The caller's debts are never mutated.
    """
    strategy = plan_input.strategy
    if strategy is Strategy.AUTO:
        return resolve_auto(*run_both(plan_input))
    if strategy in (Strategy.SNOWBALL, Strategy.AVALANCHE):
        return _run_strategy(plan_input, strategy)
    raise ValueError(f"Unknown strategy '{strategy}'.")
