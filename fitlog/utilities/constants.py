from typing import Final

DATE_FORMAT: Final[str] = "%Y-%m-%d"

WEEKDAYS: Final[tuple[str, ...]] = (
    "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday",
)

PLAN_NUTRITION: Final[str] = "nutrition"
PLAN_WORKOUT: Final[str] = "workout"
PLAN_TYPES: Final[tuple[str, ...]] = (PLAN_NUTRITION, PLAN_WORKOUT)

# Store collections
PLANS: Final[str] = "plans"
NUTRITION_LOGS: Final[str] = "nutrition_logs"
WORKOUT_LOGS: Final[str] = "workout_logs"
EXERCISES: Final[str] = "exercises"
WORKOUT_SESSIONS: Final[str] = "workout_sessions"
WORKOUT_SETS: Final[str] = "workout_sets"
SHOPPING_ITEMS: Final[str] = "shopping_items"

# One DailyLog per (user_id, log_date)
DAILY_LOG_KEY: Final[tuple[str, ...]] = ("user_id", "log_date")

# Set records generated on finish carry no load yet
PLACEHOLDER_WEIGHT: Final[int] = 0
