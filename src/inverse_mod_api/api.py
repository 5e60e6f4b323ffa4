from fastapi import FastAPI, APIRouter, HTTPException, Query
import structlog

from inverse_mod.config import Mode
from inverse_mod.inverse import compute_inverse
from inverse_mod.log_config import ensure_logging
from inverse_mod.narration import ALGORITHM_EXPLANATION, format_result, format_steps
from inverse_mod.outcome import Outcome, Reason

from . import models

ensure_logging()
log = structlog.get_logger()

# Create the FastAPI app
app = FastAPI(title="Modular Inverse API")

# Create the router for API endpoints
router = APIRouter()

USAGE = "use /api/inverse-mod?x=<positive integer>&y=<positive integer>"


def solve(x: int, y: int, mode: Mode) -> Outcome:
    """ Compute the outcome, rejecting invalid input with a 400. """
    outcome = compute_inverse(x, y, mode)
    if not outcome.success and outcome.reason is Reason.INVALID_INPUT:
        log.warning("invalid input", x=x, y=y, detail=outcome.message)
        raise HTTPException(status_code=400, detail=f"{outcome.message}; {USAGE}")

    log.info(
        "computed",
        x=x,
        y=y,
        mode=mode.value,
        success=outcome.success,
        inverse=outcome.inverse if outcome.success else None,
        explored_nodes=outcome.explored_nodes,
    )
    return outcome


@router.get("/inverse-mod", response_model=models.StepsResponse)
def inverse_mod_steps(
    x: int = Query(..., description="Base"),
    y: int = Query(..., description="Modulus"),
    mode: Mode = Mode.GUARANTEED,
):
    """ Every step of the calculation, plus the structured outcome. """
    outcome = solve(x, y, mode)
    return models.StepsResponse(
        steps=format_steps(x, y, outcome),
        outcome=models.OutcomeModel.from_outcome(outcome),
    )


@router.get("/inverse-mod-z", response_model=models.ResultResponse)
def inverse_mod_result(
    x: int = Query(..., description="Base"),
    y: int = Query(..., description="Modulus"),
    mode: Mode = Mode.GUARANTEED,
):
    """ Just the inverse. """
    outcome = solve(x, y, mode)
    return models.ResultResponse(
        result=format_result(x, y, outcome),
        inverse=outcome.inverse if outcome.success else None,
        outcome=models.OutcomeModel.from_outcome(outcome),
    )


@router.get("/inverse-mod-explanation", response_model=models.ExplanationResponse)
def inverse_mod_explanation():
    """ How the algorithm works. """
    return models.ExplanationResponse(explanation=ALGORITHM_EXPLANATION)


# Include the router in the app (after all routes are defined)
app.include_router(router, prefix="/api")
