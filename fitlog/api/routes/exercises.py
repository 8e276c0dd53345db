from typing import List
from fastapi import APIRouter, Depends

from fitlog.api.deps import get_session_recorder, get_user_id
from fitlog.infra.Session_Recorder import SessionRecorder
from fitlog.utilities.validators import ExerciseCatalogInput

router = APIRouter(prefix="/api/exercises", tags=["exercises"])


@router.get("")
def list_exercises(recorder: SessionRecorder = Depends(get_session_recorder)):
    return {"items": recorder.catalog()}


@router.post("")
def add_exercises(payload: List[ExerciseCatalogInput], recorder: SessionRecorder = Depends(get_session_recorder)):
    added = recorder.seed_catalog([e.model_dump() for e in payload])
    return {"status": "success", "added": added}


@router.get("/sessions")
def list_sessions(user_id: str = Depends(get_user_id), recorder: SessionRecorder = Depends(get_session_recorder)):
    return {"items": recorder.sessions_for(user_id)}
