import logging
import time
from typing import Any, Dict

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from payoff.advice import AdviceError, AdviceUnavailableError, generate_plan_advice
from payoff.config import configure_logging, get_settings
from payoff.optimization import build_plan
from payoff.scenarios import compare_strategies, what_if_extra
from payoff.schemas import AdviceRequest, CompareRequest, PlanInput

configure_logging()
logger = logging.getLogger("payoff.api")

# ======================================
# App + CORS
# ======================================
app = FastAPI(
    title="Debt Payoff Planner",
    description="Snowball / avalanche amortization planner",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # tighten in prod
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ======================================
# Defaults
# ======================================
DEFAULT_DEBTS = [
    {"id": "card-a", "name": "Credit Card A", "balance": 5000, "interestAPR": 0.229, "minimum": 150},
    {"id": "car", "name": "Car Loan", "balance": 8000, "interestAPR": 0.069, "minimum": 250},
    {"id": "personal", "name": "Personal Loan", "balance": 3000, "interestAPR": 0.129, "minimum": 100},
]


# ======================================
# Helpers
# ======================================
def ok(result: Any) -> Dict[str, Any]:
    return {"ok": True, "result": result}


def fail(error: str, status_code: int = 400) -> JSONResponse:
    return JSONResponse({"ok": False, "error": error}, status_code=status_code)


def describe_validation_error(e: ValidationError) -> str:
    parts = []
    for err in e.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()))
        parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return "invalid payload: " + "; ".join(parts)


async def read_json_object(request: Request) -> Dict[str, Any]:
    try:
        body = await request.json()
    except ValueError:
        raise ValueError("invalid payload: body is not valid JSON")
    if not isinstance(body, dict):
        raise ValueError("invalid payload: expected a JSON object")
    return body


def check_plan_shape(body: Dict[str, Any]) -> None:
    if not isinstance(body.get("debts"), list):
        raise ValueError("invalid payload: debts must be an array")
    budget = body.get("monthlyBudget")
    if isinstance(budget, bool) or not isinstance(budget, (int, float)):
        raise ValueError("invalid payload: monthlyBudget must be a number")


# ======================================
# Routes
# ======================================
@app.get("/api/health")
async def health_check():
    return {"status": "healthy", "message": "Debt Payoff Planner API is running!", "timestamp": time.time()}


@app.get("/api/defaults/debts")
async def get_default_debts():
    return {"debts": DEFAULT_DEBTS}


@app.post("/api/plan")
async def generate_plan(request: Request):
    try:
        body = await read_json_object(request)
        check_plan_shape(body)
        plan_input = PlanInput.model_validate(body)
    except ValidationError as e:
        return fail(describe_validation_error(e))
    except ValueError as e:
        return fail(str(e))

    try:
        result = build_plan(plan_input)
    except Exception as e:
        logger.exception("plan generation failed")
        return fail(f"Error generating plan: {e}", status_code=500)

    logger.info(
        "plan built: strategy=%s months=%d warnings=%d",
        result.strategy_used.value, result.months, len(result.warnings),
    )
    return ok(result.to_wire())


@app.post("/api/plan/compare")
async def compare_plans(request: Request):
    try:
        body = await read_json_object(request)
        check_plan_shape(body)
        compare_input = CompareRequest.model_validate(body)
    except ValidationError as e:
        return fail(describe_validation_error(e))
    except ValueError as e:
        return fail(str(e))

    try:
        comparison = compare_strategies(compare_input)
        result = {
            "avalanche": comparison["avalanche"].to_wire(),
            "snowball": comparison["snowball"].to_wire(),
            "recommended": comparison["recommended"],
            "interestDifference": comparison["interest_difference"],
            "monthsDifference": comparison["months_difference"],
            "warnings": comparison["warnings"],
        }
        extra = compare_input.extra_monthly or 0.0
        if extra > 0:
            result["whatIf"] = what_if_extra(compare_input, extra)
    except Exception as e:
        logger.exception("plan comparison failed")
        return fail(f"Error comparing plans: {e}", status_code=500)
    return ok(result)


@app.post("/api/ai")
async def plan_advice(request: Request):
    try:
        body = await read_json_object(request)
        advice_request = AdviceRequest.model_validate(body)
    except ValidationError as e:
        return fail(describe_validation_error(e))
    except ValueError as e:
        return fail(str(e))

    if advice_request.task != "advice_plan":
        return fail("unsupported task")

    try:
        advice = generate_plan_advice(advice_request.input)
    except AdviceUnavailableError as e:
        return fail(str(e), status_code=500)
    except AdviceError as e:
        return fail(str(e), status_code=502)
    return {"ok": True, "task": advice_request.task, "result": {"advice": advice}}


@app.get("/api/system/info")
async def get_system_info():
    settings = get_settings()
    return {
        "llm_configured": settings.llm_configured,
        "llm_model": settings.LLM_MODEL,
        "log_level": settings.LOG_LEVEL,
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
