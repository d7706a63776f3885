# payoff/__init__.py
from .optimization import build_plan
from .schemas import Allocation, Debt, MonthlyPayment, PlanInput, PlanResult, Strategy

__all__ = [
    "build_plan",
    "Allocation",
    "Debt",
    "MonthlyPayment",
    "PlanInput",
    "PlanResult",
    "Strategy",
]
