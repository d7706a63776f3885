# payoff/plan_utils.py
from typing import Any, Dict, List, Optional

import pandas as pd

from .optimization import EPS
from .schemas import Debt, PlanResult
from .utils import money, months_label

SCHEDULE_COLUMNS = [
    "month",
    "debt_id",
    "debt",
    "payment",
    "interest",
    "principal",
    "remaining",
    "total_paid_month",
    "month_interest_total",
]


def plan_to_dataframe(plan: PlanResult, debts: Optional[List[Debt]] = None) -> pd.DataFrame:
    names = {d.id: d.name for d in debts} if debts else {}
    rows = []
    for m in plan.schedule:
        for a in m.allocations:
            rows.append({
                "month": m.month,
                "debt_id": a.debt_id,
                "debt": names.get(a.debt_id, str(a.debt_id)),
                "payment": a.pay,
                "interest": a.interest,
                "principal": a.principal,
                "remaining": a.remaining,
                "total_paid_month": m.total_paid_this_month,
                "month_interest_total": m.total_interest_this_month,
            })
    if not rows:
        return pd.DataFrame(columns=SCHEDULE_COLUMNS)
    return pd.DataFrame(rows, columns=SCHEDULE_COLUMNS)


def total_balance_series(plan: PlanResult, debts: List[Debt]) -> List[float]:
    """Total outstanding balance at the start, then after each simulated month."""
    series = [float(sum(d.balance for d in debts))]
    for m in plan.schedule:
        series.append(float(sum(a.remaining for a in m.allocations)))
    return series


def payoff_months(plan: PlanResult) -> Dict[Any, int]:
    paid: Dict[Any, int] = {}
    for m in plan.schedule:
        for a in m.allocations:
            if a.debt_id in paid:
                continue
            if a.pay > 0 and a.remaining <= EPS:
                paid[a.debt_id] = m.month
    return paid


def summarize_plan(plan: PlanResult, debts: Optional[List[Debt]] = None) -> Dict[str, Any]:
    total_payments = float(sum(m.total_paid_this_month for m in plan.schedule))
    total_interest = float(plan.total_interest)
    last = plan.schedule[-1] if plan.schedule else None
    if last is not None:
        debt_free = all(a.remaining <= EPS for a in last.allocations)
    else:
        debt_free = all(d.balance <= EPS for d in debts or [])
    principal_total = max(0.0, total_payments - total_interest)
    return {
        "months": plan.months,
        "total_interest": total_interest,
        "total_payments": total_payments,
        "principal_total": principal_total,
        "strategy_used": plan.strategy_used.value,
        "debt_free": debt_free,
        "formatted": {
            "months": months_label(plan.months),
            "total_interest": money(total_interest),
            "total_payments": money(total_payments),
            "principal_total": money(principal_total),
        },
    }
