"""Shared service instances for the routers.

Trackers keep the optimistic in-memory state of each user's day, so one
instance per process is handed to every request. Tests replace these
providers through ``app.dependency_overrides``.
"""
from datetime import date
from functools import lru_cache

from fastapi import Header, HTTPException

from fitlog.infra.Json_Store import JsonStore
from fitlog.infra.Plan_Repository import PlanRepository
from fitlog.infra.Session_Recorder import SessionRecorder
from fitlog.logic.nutrition.tracker import DailyNutritionTracker
from fitlog.logic.shopping.shopping_list import ShoppingListService
from fitlog.logic.workout.tracker import DailyWorkoutTracker
from fitlog.utilities.dates import Clock


@lru_cache
def get_store() -> JsonStore:
    return JsonStore()


def get_clock() -> Clock:
    return date.today


@lru_cache
def get_plan_repository() -> PlanRepository:
    return PlanRepository(get_store())


@lru_cache
def get_session_recorder() -> SessionRecorder:
    return SessionRecorder(get_store())


@lru_cache
def get_nutrition_tracker() -> DailyNutritionTracker:
    return DailyNutritionTracker(get_store())


@lru_cache
def get_workout_tracker() -> DailyWorkoutTracker:
    return DailyWorkoutTracker(get_store(), get_session_recorder())


@lru_cache
def get_shopping_service() -> ShoppingListService:
    return ShoppingListService(get_store())


def get_user_id(x_user_id: str = Header(default="", alias="X-User-Id")) -> str:
    user_id = x_user_id.strip()
    if not user_id:
        raise HTTPException(status_code=401, detail="Missing X-User-Id header")
    return user_id
