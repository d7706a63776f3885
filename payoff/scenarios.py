# payoff/scenarios.py
from typing import Any, Dict

from .optimization import build_plan, resolve_auto, run_both
from .plan_utils import summarize_plan
from .schemas import PlanInput


def compare_strategies(plan_input: PlanInput) -> Dict[str, Any]:
    aval, snow = run_both(plan_input)
    best = resolve_auto(aval, snow)
    return {
        "avalanche": aval,
        "snowball": snow,
        "recommended": best.strategy_used.value,
        "interest_difference": abs(aval.total_interest - snow.total_interest),
        "months_difference": abs(aval.months - snow.months),
        "warnings": best.warnings,
    }


def what_if_extra(plan_input: PlanInput, extra: float) -> Dict[str, Any]:
    """Baseline plan versus the same plan with `extra` added to the monthly budget."""
    base = build_plan(plan_input)
    boosted_input = plan_input.model_copy(
        update={"monthly_budget": plan_input.monthly_budget + max(0.0, extra)}
    )
    scenario = build_plan(boosted_input)
    return {
        "extra_monthly": max(0.0, extra),
        "baseline": summarize_plan(base, plan_input.debts),
        "scenario": summarize_plan(scenario, plan_input.debts),
        "interest_savings": max(0.0, base.total_interest - scenario.total_interest),
        "months_saved": max(0, base.months - scenario.months),
    }
