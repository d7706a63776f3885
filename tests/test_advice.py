#tests/test_advice.py
import json

import pytest

import payoff.advice as advice
from payoff.advice import AdviceError, AdviceUnavailableError, generate_plan_advice, plan_to_json
from payoff.optimization import build_plan
from payoff.prompts import SYSTEM_PROMPT_PLAN_COACH
from payoff.schemas import Debt, PlanInput


class FakeReply:
    def __init__(self, content):
        self.content = content


class FakeLLM:
    def __init__(self, reply="  Keep paying the card first.  "):
        self.reply = reply
        self.calls = []

    def invoke(self, messages):
        self.calls.append(messages)
        return FakeReply(self.reply)


class BrokenLLM:
    def invoke(self, messages):
        raise RuntimeError("service down")


def sample_plan():
    debts = [
        Debt(id="card", balance=2000, interestAPR=0.22, minimum=60),
        Debt(id="loan", balance=5000, interestAPR=0.07, minimum=120),
    ]
    return build_plan(PlanInput(debts=debts, monthlyBudget=500, strategy="auto"))


def test_advice_passes_plan_verbatim():
    plan = sample_plan()
    before = plan.to_wire()
    llm = FakeLLM()
    text = generate_plan_advice(plan, llm=llm)
    assert text == "Keep paying the card first."
    system, human = llm.calls[0]
    assert system.content == SYSTEM_PROMPT_PLAN_COACH
    sent = human.content.split("\n", 1)[1].rsplit("\n\n", 1)[0]
    assert json.loads(sent) == before
    assert plan.to_wire() == before


def test_plan_to_json_accepts_strings_and_dicts():
    assert plan_to_json('{"months": 3}') == '{"months": 3}'
    assert json.loads(plan_to_json({"months": 3, "totalInterest": 1.5})) == {"months": 3, "totalInterest": 1.5}


def test_advice_wraps_model_failures():
    with pytest.raises(AdviceError, match="service down"):
        generate_plan_advice(sample_plan(), llm=BrokenLLM())


def test_advice_unavailable_without_credentials(monkeypatch):
    monkeypatch.delenv("GROQ_API_KEY", raising=False)
    with pytest.raises(AdviceUnavailableError):
        generate_plan_advice(sample_plan())


def test_get_llm_returns_none_without_key(monkeypatch):
    monkeypatch.delenv("GROQ_API_KEY", raising=False)
    assert advice.get_llm() is None
