#tests/test_plan_utils.py
import pytest

from payoff.optimization import build_plan
from payoff.plan_utils import (
    SCHEDULE_COLUMNS,
    payoff_months,
    plan_to_dataframe,
    summarize_plan,
    total_balance_series,
)
from payoff.schemas import Debt, PlanInput


def sample_debts():
    return [
        Debt(id="card", name="Card", balance=1000, interestAPR=0.24, minimum=50),
        Debt(id="car", name="Car", balance=3000, interestAPR=0.06, minimum=100),
    ]


def sample_plan(budget=600, **kw):
    return build_plan(PlanInput(debts=sample_debts(), monthlyBudget=budget, strategy="avalanche", **kw))


def test_plan_to_dataframe_has_one_row_per_debt_and_month():
    res = sample_plan()
    df = plan_to_dataframe(res, sample_debts())
    assert list(df.columns) == SCHEDULE_COLUMNS
    assert len(df) == res.months * 2
    assert set(df["debt"]) == {"Card", "Car"}
    assert df["payment"].sum() == pytest.approx(sum(m.total_paid_this_month for m in res.schedule))


def test_plan_to_dataframe_without_names_uses_ids():
    df = plan_to_dataframe(sample_plan())
    assert set(df["debt"]) == {"card", "car"}


def test_plan_to_dataframe_empty_plan():
    res = build_plan(PlanInput(debts=[], monthlyBudget=100))
    df = plan_to_dataframe(res)
    assert df.empty
    assert list(df.columns) == SCHEDULE_COLUMNS


def test_total_balance_series_starts_at_total_and_ends_at_zero():
    res = sample_plan()
    series = total_balance_series(res, sample_debts())
    assert len(series) == res.months + 1
    assert series[0] == pytest.approx(4000.0)
    assert series[-1] == 0.0
    assert all(b2 <= b1 for b1, b2 in zip(series, series[1:]))


def test_payoff_months_orders_avalanche_target_first():
    res = sample_plan()
    paid = payoff_months(res)
    assert set(paid) == {"card", "car"}
    assert paid["card"] < paid["car"]
    assert paid["car"] == res.months


def test_payoff_months_skips_debts_never_cleared():
    res = sample_plan(budget=150, maxMonths=3)
    assert payoff_months(res) == {}


def test_summarize_plan():
    res = sample_plan()
    summary = summarize_plan(res)
    assert summary["months"] == res.months
    assert summary["strategy_used"] == "avalanche"
    assert summary["debt_free"] is True
    assert summary["principal_total"] == pytest.approx(4000.0)
    assert summary["total_payments"] == pytest.approx(4000.0 + res.total_interest)


def test_summarize_plan_not_debt_free_at_horizon():
    res = sample_plan(budget=150, maxMonths=3)
    assert summarize_plan(res)["debt_free"] is False
    empty = sample_plan(maxMonths=0)
    assert summarize_plan(empty, sample_debts())["debt_free"] is False


def test_summarize_plan_formats_amounts():
    res = build_plan(PlanInput(
        debts=[Debt(id="a", balance=1200, interestAPR=0.0, minimum=100)],
        monthlyBudget=100,
    ))
    formatted = summarize_plan(res)["formatted"]
    assert formatted["months"] == "12 months (1.0 years)"
    assert formatted["total_interest"] == "$0.00"
    assert formatted["total_payments"] == "$1,200.00"
