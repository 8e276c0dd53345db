import logging
from fastapi import APIRouter, Depends, HTTPException

from fitlog.api.deps import get_plan_repository, get_user_id
from fitlog.infra.Plan_Repository import PlanRepository
from fitlog.utilities.constants import PLAN_TYPES
from fitlog.utilities.errors import PlanNotFoundError
from fitlog.utilities.validators import PlanInput

router = APIRouter(prefix="/api/plans", tags=["plans"])
logger = logging.getLogger(__name__)


def _check_type(plan_type: str) -> str:
    if plan_type not in PLAN_TYPES:
        raise HTTPException(status_code=404, detail=f"Unknown plan type '{plan_type}'")
    return plan_type


@router.post("/{plan_type}")
def store_plan(plan_type: str, payload: PlanInput, user_id: str = Depends(get_user_id),
               plans: PlanRepository = Depends(get_plan_repository)):
    """Store a generated plan as the active one; the previous plan is kept inactive."""
    _check_type(plan_type)
    plan = plans.save_plan(user_id, plan_type, payload.model_dump())
    return {"status": "success", "plan": plan.to_dict(), "days": len(plan.days)}


@router.get("/{plan_type}")
def active_plan(plan_type: str, user_id: str = Depends(get_user_id),
                plans: PlanRepository = Depends(get_plan_repository)):
    _check_type(plan_type)
    try:
        plan = plans.get_active_plan(user_id, plan_type)
    except PlanNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return plan.to_dict()
