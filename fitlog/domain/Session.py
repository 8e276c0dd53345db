"""Workout session entities produced when a day's training is finished."""
from typing import List, Optional

from fitlog.utilities.constants import PLACEHOLDER_WEIGHT


class SetRecord:
    def __init__(self, exercise_name: str, reps: int, weight: float = PLACEHOLDER_WEIGHT, rpe: int = 8):
        self.exercise_name = exercise_name
        self.reps = reps
        self.weight = weight
        self.rpe = rpe

    def __eq__(self, other) -> bool:
        if not isinstance(other, SetRecord):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __str__(self) -> str:
        return f"{self.exercise_name}: {self.reps} reps @ {self.weight} kg (RPE {self.rpe})"

    __repr__ = __str__

    def to_dict(self):
        return {
            "exercise_name": self.exercise_name,
            "reps": self.reps,
            "weight": self.weight,
            "rpe": self.rpe,
        }


class SessionMeta:
    def __init__(self, user_id: str, name: str, log_date: str, duration_seconds: int = 0, notes: str = ""):
        self.user_id = user_id
        self.name = name
        self.log_date = log_date
        self.duration_seconds = duration_seconds
        self.notes = notes

    def to_dict(self):
        return {
            "user_id": self.user_id,
            "name": self.name,
            "log_date": self.log_date,
            "duration_seconds": self.duration_seconds,
            "notes": self.notes,
        }


class SessionResult:
    def __init__(self, session_id: str, sets_recorded: int, dropped: Optional[List[str]] = None):
        self.session_id = session_id
        self.sets_recorded = sets_recorded
        self.dropped = dropped[:] if dropped else []

    def __str__(self) -> str:
        return f"Session {self.session_id}: {self.sets_recorded} sets, {len(self.dropped)} dropped"

    __repr__ = __str__

    def to_dict(self):
        return {
            "session_id": self.session_id,
            "sets_recorded": self.sets_recorded,
            "dropped": self.dropped,
        }
