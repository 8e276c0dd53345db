import logging
from fastapi import APIRouter, Depends, HTTPException

from fitlog.api.deps import get_plan_repository, get_user_id, get_workout_tracker
from fitlog.api.serializers import day_payload, log_payload
from fitlog.domain.DailyLog import ItemKey
from fitlog.infra.Plan_Repository import PlanRepository
from fitlog.logic.workout.tracker import DailyWorkoutTracker
from fitlog.utilities.constants import PLAN_WORKOUT
from fitlog.utilities.dates import today_index
from fitlog.utilities.errors import PlanNotFoundError
from fitlog.utilities.validators import FinishSessionInput, NoteInput, ToggleItemInput

router = APIRouter(prefix="/api/workout", tags=["workout"])
logger = logging.getLogger(__name__)


@router.get("/today")
def workout_today(user_id: str = Depends(get_user_id),
                  tracker: DailyWorkoutTracker = Depends(get_workout_tracker),
                  plans: PlanRepository = Depends(get_plan_repository)):
    today_idx = today_index(tracker.today)
    plan = plans.find_active_plan(user_id, PLAN_WORKOUT)
    log = tracker.load_day(user_id)
    return {
        "day_index": today_idx,
        "log": log_payload(log, include_totals=False),
        "day": day_payload(plan.day(today_idx) if plan else None),
        "completed_today": log.completed_count(today_idx),
    }


@router.post("/toggle")
def toggle_exercise(payload: ToggleItemInput, user_id: str = Depends(get_user_id),
                    tracker: DailyWorkoutTracker = Depends(get_workout_tracker)):
    log = tracker.toggle_exercise(user_id, payload.day_index, payload.item_index)
    return {
        "log": log_payload(log, include_totals=False),
        "checked": log.is_checked(ItemKey(payload.day_index, payload.item_index)),
        "completed_count": log.completed_count(payload.day_index),
    }


@router.put("/note")
def workout_note(payload: NoteInput, user_id: str = Depends(get_user_id),
                 tracker: DailyWorkoutTracker = Depends(get_workout_tracker)):
    return {"log": log_payload(tracker.set_note(user_id, payload.note), include_totals=False)}


@router.post("/finish")
def finish_workout(payload: FinishSessionInput, user_id: str = Depends(get_user_id),
                   tracker: DailyWorkoutTracker = Depends(get_workout_tracker),
                   plans: PlanRepository = Depends(get_plan_repository)):
    """Record the session; EmptySession and store failures are reported to the caller."""
    try:
        plan = plans.get_active_plan(user_id, PLAN_WORKOUT)
    except PlanNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    result = tracker.finish_session(user_id, payload.day_index, plan,
                                    duration_seconds=payload.duration_seconds, name=payload.name)
    logger.info("Workout finished for %s: %s", user_id, result)
    return {"status": "success", **result.to_dict()}
