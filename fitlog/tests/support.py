"""Shared fixtures for the test modules (not collected by pytest)."""
import copy
from datetime import date
from typing import Callable, Dict, List, Tuple

from fitlog.infra.Json_Store import JsonStore
from fitlog.utilities.errors import PersistenceError

# 2024-01-01 was a Monday, so this Wednesday has Monday-first index 2
WEDNESDAY = date(2024, 1, 3)
WEDNESDAY_INDEX = 2


def fixed_clock(d: date = WEDNESDAY) -> Callable[[], date]:
    return lambda: d


class RecordingStore(JsonStore):
    """JsonStore that remembers every gateway call."""

    def __init__(self, data_dir):
        super().__init__(data_dir)
        self.calls: List[Tuple[str, str]] = []

    def upsert(self, collection, record, conflict_key):
        self.calls.append(("upsert", collection))
        return super().upsert(collection, record, conflict_key)

    def get(self, collection, filters):
        self.calls.append(("get", collection))
        return super().get(collection, filters)

    def insert_many(self, collection, records):
        self.calls.append(("insert_many", collection))
        return super().insert_many(collection, records)

    def writes(self):
        return [c for c in self.calls if c[0] != "get"]


class FailingStore(RecordingStore):
    """Reads work; every write fails like a lost connection."""

    def upsert(self, collection, record, conflict_key):
        self.calls.append(("upsert", collection))
        raise PersistenceError("store unreachable")

    def insert_many(self, collection, records):
        self.calls.append(("insert_many", collection))
        raise PersistenceError("store unreachable")


_MEALS = [
    {"type": "Breakfast", "name": "Overnight oats", "calories": 400, "protein": "20g",
     "ingredients": ["80 g oats", "250 ml milk"]},
    {"type": "Lunch", "name": "Chicken rice bowl", "calories": "650 kcal", "protein": 45,
     "ingredients": ["100 g rice", "150 g chicken breast"]},
    {"type": "Dinner", "name": "Egg fried rice", "calories": 550, "protein": "35 g",
     "ingredients": ["100 g rice", "2 eggs", "a pinch of salt"]},
]

DAY_CALORIES = 400 + 650 + 550


def nutrition_plan_dict() -> Dict:
    """Monday..Saturday share the same three meals, Sunday plans nothing."""
    days = [{"day": name, "items": copy.deepcopy(_MEALS)}
            for name in ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")]
    days.append({"day": "Sunday", "items": []})
    return {"title": "Lean week", "days": days}


def workout_plan_dict() -> Dict:
    rest_day = {"day": "Rest", "focus": "Recovery", "exercises": []}
    days = [copy.deepcopy(rest_day) for _ in range(7)]
    days[WEDNESDAY_INDEX] = {
        "day": "Wednesday",
        "focus": "Upper body",
        "exercises": [
            {"name": "Bench Press", "sets": "4", "reps": "8-10", "rest": "90s"},
            {"name": "Pull Up", "sets": 3, "reps": "AMRAP", "rest": 120},
            {"name": "Mystery Move", "sets": 2, "reps": 12, "rest": 60, "notes": "slow"},
        ],
    }
    return {"title": "Push pull", "days": days}


CATALOG = [
    {"name": "bench press", "muscle": "chest"},
    {"name": "PULL UP", "muscle": "back"},
    {"name": "Squat", "muscle": "legs"},
]


def _provide(value):
    def provider():
        return value
    return provider


def install_overrides(app, data_dir, today: date = WEDNESDAY) -> JsonStore:
    """Point every service of ``app`` at a fresh store in ``data_dir`` with a fixed clock."""
    from fitlog.api import deps
    from fitlog.infra.Plan_Repository import PlanRepository
    from fitlog.infra.Session_Recorder import SessionRecorder
    from fitlog.logic.nutrition.tracker import DailyNutritionTracker
    from fitlog.logic.shopping.shopping_list import ShoppingListService
    from fitlog.logic.workout.tracker import DailyWorkoutTracker

    clock = fixed_clock(today)
    store = JsonStore(data_dir)
    recorder = SessionRecorder(store)
    app.dependency_overrides.update({
        deps.get_store: _provide(store),
        deps.get_clock: _provide(clock),
        deps.get_plan_repository: _provide(PlanRepository(store)),
        deps.get_session_recorder: _provide(recorder),
        deps.get_nutrition_tracker: _provide(DailyNutritionTracker(store, today=clock)),
        deps.get_workout_tracker: _provide(DailyWorkoutTracker(store, recorder, today=clock)),
        deps.get_shopping_service: _provide(ShoppingListService(store)),
    })
    return store
