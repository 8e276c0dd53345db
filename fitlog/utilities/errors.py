"""Error taxonomy for the adherence engine.

Parse failures are deliberately absent: numeric fields and ingredient
strings always resolve to a safe default instead of raising.
"""
from __future__ import annotations

OUT_OF_WINDOW = "OutOfWindow"
EMPTY_SESSION = "EmptySession"


class FitlogError(Exception):
    """Base class for every error raised by fitlog."""


class ValidationError(FitlogError):
    """A user-visible rejection; the requested action did not mutate anything."""

    def __init__(self, reason: str, message: str):
        super().__init__(message)
        self.reason = reason
        self.message = message


class OutOfWindowError(ValidationError):
    def __init__(self, day_index: int, today_index: int):
        self.day_index = day_index
        self.today_index = today_index
        self.direction = "future" if day_index > today_index else "past"
        super().__init__(
            OUT_OF_WINDOW,
            f"Day {day_index} is in the {self.direction}; only today ({today_index}) can be edited.",
        )


class EmptySessionError(ValidationError):
    def __init__(self, day_index: int):
        self.day_index = day_index
        super().__init__(EMPTY_SESSION, f"No exercise of day {day_index} is marked complete.")


class PersistenceError(FitlogError):
    """The backing store could not read or write a record."""


class PlanNotFoundError(FitlogError):
    """No active plan of the requested type exists for the user."""

    def __init__(self, user_id: str, plan_type: str):
        super().__init__(f"No active {plan_type} plan for user {user_id}")
        self.user_id = user_id
        self.plan_type = plan_type
