"""Dashboard aggregation: today's intake against target, and recent training."""
import logging
from datetime import date
from typing import Any, Dict, Optional

from fitlog.domain.DailyLog import DailyLog
from fitlog.domain.Plan import WeeklyPlan
from fitlog.infra.Json_Store import JsonStore
from fitlog.logic.nutrition.tracker import day_target
from fitlog.utilities.constants import NUTRITION_LOGS, WORKOUT_LOGS
from fitlog.utilities.dates import day_index, format_date, last_days
from fitlog.utilities.errors import PersistenceError

logger = logging.getLogger(__name__)

WEEK_WINDOW_DAYS = 7


def compute_dashboard(store: JsonStore, user_id: str, meal_plan: Optional[WeeklyPlan], today: date) -> Dict[str, Any]:
    """Summarize the user's day.

    Returns structure:
    {
      'date': 'yyyy-mm-dd',
      'calories_consumed': int, 'protein_consumed': int,
      'target_calories': int,        # planned calories of today, 2000 without a plan
      'weekly_workouts': int,        # days of the last 7 with a workout log
    }
    Store failures degrade to zeros instead of failing the page.
    """
    today_str = format_date(today)
    consumed = DailyLog.from_record(None, user_id, today_str)
    workouts = 0
    try:
        consumed = DailyLog.from_record(
            store.get(NUTRITION_LOGS, {"user_id": user_id, "log_date": today_str}), user_id, today_str
        )
        for d in last_days(today, WEEK_WINDOW_DAYS):
            if store.get(WORKOUT_LOGS, {"user_id": user_id, "log_date": format_date(d)}) is not None:
                workouts += 1
    except PersistenceError as e:
        logger.error("Dashboard stats for %s incomplete: %s", user_id, e)

    return {
        'date': today_str,
        'calories_consumed': consumed.totals.calories,
        'protein_consumed': consumed.totals.protein,
        'target_calories': day_target(meal_plan, day_index(today)),
        'weekly_workouts': workouts,
    }


__all__ = ["compute_dashboard"]
