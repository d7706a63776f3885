# payoff/schemas.py
from enum import Enum
from typing import Any, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class Strategy(str, Enum):
    SNOWBALL = "snowball"
    AVALANCHE = "avalanche"
    AUTO = "auto"


DebtId = Union[str, int]


class _WireModel(BaseModel):
    # wire format is camelCase, attributes stay snake_case
    model_config = ConfigDict(populate_by_name=True)

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True, mode="json")


class Debt(_WireModel):
    """
    A single debt record as supplied by the caller.
    interest_apr is a decimal fraction (0.159 for 15.9%).
    """
    id: DebtId
    name: str = ""
    balance: float = Field(ge=0.0, allow_inf_nan=False)
    interest_apr: float = Field(alias="interestAPR", ge=0.0, allow_inf_nan=False)
    minimum: float = Field(ge=0.0, allow_inf_nan=False)


class PlanInput(_WireModel):
    debts: List[Debt]
    # strict: numeric strings and booleans are not budgets
    monthly_budget: float = Field(alias="monthlyBudget", strict=True, allow_inf_nan=False)
    strategy: Strategy = Strategy.AUTO
    max_months: int = Field(default=120, alias="maxMonths", ge=0, le=1200)


class Allocation(_WireModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    debt_id: DebtId = Field(alias="debtId")
    pay: float
    interest: float
    principal: float
    remaining: float
    accrued: float = 0.0


class MonthlyPayment(_WireModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    month: int
    allocations: List[Allocation]
    total_interest_this_month: float = Field(alias="totalInterestThisMonth")
    total_paid_this_month: float = Field(alias="totalPaidThisMonth")


class PlanResult(_WireModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    schedule: List[MonthlyPayment]
    total_interest: float = Field(alias="totalInterest")
    months: int
    strategy_used: Strategy = Field(alias="strategyUsed")
    warnings: List[str] = Field(default_factory=list)


class AdviceRequest(BaseModel):
    task: str
    input: Any = None


class CompareRequest(PlanInput):
    extra_monthly: Optional[float] = Field(default=None, alias="extraMonthly", allow_inf_nan=False)
