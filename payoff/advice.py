# payoff/advice.py
import json
import logging
from typing import Any, Optional

from langchain_core.messages import HumanMessage, SystemMessage
from langchain_groq import ChatGroq

from .config import get_settings
from .prompts import PLAN_ADVICE_TEMPLATE, SYSTEM_PROMPT_PLAN_COACH
from .schemas import PlanResult

logger = logging.getLogger(__name__)


class AdviceError(Exception):
    """The text-generation service failed to narrate a plan."""


class AdviceUnavailableError(AdviceError):
    """No text-generation service is configured."""


def get_llm(model: Optional[str] = None):
    """Return a ChatGroq client, or None when GROQ_API_KEY is not set."""
    settings = get_settings()
    if not settings.llm_configured:
        return None
    return ChatGroq(
        model=model or settings.LLM_MODEL,
        groq_api_key=settings.GROQ_API_KEY,
        temperature=settings.LLM_TEMPERATURE,
    )


def plan_to_json(plan: Any) -> str:
    if isinstance(plan, str):
        return plan
    if isinstance(plan, PlanResult):
        return json.dumps(plan.to_wire(), ensure_ascii=False)
    return json.dumps(plan, ensure_ascii=False, default=str)


def build_advice_messages(plan_json: str):
    return [
        SystemMessage(content=SYSTEM_PROMPT_PLAN_COACH),
        HumanMessage(content=PLAN_ADVICE_TEMPLATE.format(plan_json=plan_json)),
    ]


def generate_plan_advice(plan: Any, llm=None) -> str:
    """
    Narrate an already-computed plan.

    The plan is serialized once and only read; amounts and month counts are
    passed to the model verbatim and never recomputed here.
    """
    if llm is None:
        llm = get_llm()
    if llm is None:
        raise AdviceUnavailableError("LLM not configured (set GROQ_API_KEY).")

    messages = build_advice_messages(plan_to_json(plan))
    try:
        resp = llm.invoke(messages)
    except Exception as e:
        logger.warning("plan advice generation failed: %s", e)
        raise AdviceError(f"Advice generation failed: {e}") from e
    text = resp.content if hasattr(resp, "content") else str(resp)
    return (text or "").strip()
