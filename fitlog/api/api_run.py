from fastapi import FastAPI, Depends, Query, Request
from fastapi.responses import JSONResponse
from typing import Optional
import logging

from fitlog.api.deps import get_clock, get_plan_repository, get_store, get_user_id
from fitlog.api.routes import exercises, nutrition, plans, shopping, workout
from fitlog.events.web_observers import start as start_event_observers, get_events as get_web_events
from fitlog.infra.Json_Store import JsonStore
from fitlog.infra.Plan_Repository import PlanRepository
from fitlog.logic.reporting.dashboard import compute_dashboard
from fitlog.utilities.constants import PLAN_NUTRITION
from fitlog.utilities.dates import Clock
from fitlog.utilities.errors import (
    EmptySessionError, OutOfWindowError, PersistenceError, PlanNotFoundError, ValidationError,
)

# Logging
logger = logging.getLogger("fitlog_app")

# Initialize FastAPI app
app = FastAPI(title="Fitlog Plan Adherence API")

# Include routers
app.include_router(plans.router)
app.include_router(nutrition.router)
app.include_router(workout.router)
app.include_router(shopping.router)
app.include_router(exercises.router)


@app.on_event("startup")
def _startup_web_observers():
    """Register event bus subscribers for the event feed when the app starts."""
    start_event_observers()
    logger.info("Web observers for adherence events started")


# -------------------- Error mapping --------------------
@app.exception_handler(ValidationError)
async def _validation_error(request: Request, exc: ValidationError):
    content = {"error": exc.reason, "detail": exc.message}
    if isinstance(exc, OutOfWindowError):
        content.update(direction=exc.direction, day_index=exc.day_index, today_index=exc.today_index)
        return JSONResponse(status_code=409, content=content)
    if isinstance(exc, EmptySessionError):
        content["day_index"] = exc.day_index
    return JSONResponse(status_code=400, content=content)


@app.exception_handler(PlanNotFoundError)
async def _plan_not_found(request: Request, exc: PlanNotFoundError):
    return JSONResponse(status_code=404, content={"error": "NotFound", "detail": str(exc)})


@app.exception_handler(PersistenceError)
async def _persistence_error(request: Request, exc: PersistenceError):
    logger.error("Store failure on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=503, content={"error": "PersistenceError", "detail": str(exc)})


# -------------------- API --------------------
@app.get("/api/health")
def health():
    return {"status": "ok"}


@app.get("/api/dashboard")
def dashboard(user_id: str = Depends(get_user_id),
              store: JsonStore = Depends(get_store),
              plans_repo: PlanRepository = Depends(get_plan_repository),
              clock: Clock = Depends(get_clock)):
    meal_plan = plans_repo.find_active_plan(user_id, PLAN_NUTRITION)
    return compute_dashboard(store, user_id, meal_plan, clock())


@app.get("/api/events")
def events(since: Optional[int] = Query(default=None), user_id: str = Depends(get_user_id)):
    """Recent adherence events for polling clients (cursor based)."""
    return get_web_events(since=since, user_id=user_id)
