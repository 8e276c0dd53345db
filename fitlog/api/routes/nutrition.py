import logging
from fastapi import APIRouter, Depends, HTTPException

from fitlog.api.deps import get_nutrition_tracker, get_plan_repository, get_user_id
from fitlog.api.serializers import day_payload, log_payload
from fitlog.domain.DailyLog import ItemKey
from fitlog.domain.Plan import NutritionItem
from fitlog.infra.Plan_Repository import PlanRepository
from fitlog.logic.nutrition.tracker import DailyNutritionTracker
from fitlog.utilities.constants import PLAN_NUTRITION
from fitlog.utilities.dates import today_index
from fitlog.utilities.errors import PlanNotFoundError
from fitlog.utilities.validators import NoteInput, ToggleItemInput

router = APIRouter(prefix="/api/nutrition", tags=["nutrition"])
logger = logging.getLogger(__name__)


@router.get("/today")
def nutrition_today(user_id: str = Depends(get_user_id),
                    tracker: DailyNutritionTracker = Depends(get_nutrition_tracker),
                    plans: PlanRepository = Depends(get_plan_repository)):
    """Today's log, today's plan day (if any) and the calorie target."""
    today_idx = today_index(tracker.today)
    plan = plans.find_active_plan(user_id, PLAN_NUTRITION)
    log = tracker.load_day(user_id)
    return {
        "day_index": today_idx,
        "log": log_payload(log),
        "day": day_payload(plan.day(today_idx) if plan else None),
        "target_calories": tracker.day_target(today_idx, plan),
    }


@router.post("/toggle")
def toggle_meal(payload: ToggleItemInput, user_id: str = Depends(get_user_id),
                tracker: DailyNutritionTracker = Depends(get_nutrition_tracker),
                plans: PlanRepository = Depends(get_plan_repository)):
    tracker.check_window(payload.day_index)
    try:
        plan = plans.get_active_plan(user_id, PLAN_NUTRITION)
    except PlanNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    day = plan.day(payload.day_index)
    item = day.item(payload.item_index) if day else None
    if not isinstance(item, NutritionItem):
        raise HTTPException(status_code=404, detail="This item is not planned for today")
    log = tracker.toggle_item(user_id, payload.day_index, payload.item_index, item.calories, item.protein_raw)
    return {"log": log_payload(log), "checked": log.is_checked(ItemKey(payload.day_index, payload.item_index))}


@router.get("/target/{day}")
def nutrition_target(day: int, user_id: str = Depends(get_user_id),
                     tracker: DailyNutritionTracker = Depends(get_nutrition_tracker),
                     plans: PlanRepository = Depends(get_plan_repository)):
    if not 0 <= day <= 6:
        raise HTTPException(status_code=400, detail="Day index must be between 0 and 6")
    plan = plans.find_active_plan(user_id, PLAN_NUTRITION)
    return {"day_index": day, "target_calories": tracker.day_target(day, plan)}


@router.put("/note")
def nutrition_note(payload: NoteInput, user_id: str = Depends(get_user_id),
                   tracker: DailyNutritionTracker = Depends(get_nutrition_tracker)):
    return {"log": log_payload(tracker.set_note(user_id, payload.note))}
