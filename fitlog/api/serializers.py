"""JSON payloads returned by the routers."""
from typing import Any, Dict, Optional

from fitlog.domain.DailyLog import DailyLog
from fitlog.domain.Plan import DayPlan


def log_payload(log: DailyLog, include_totals: bool = True) -> Dict[str, Any]:
    payload = log.to_record(include_totals=include_totals)
    payload["completed_count"] = log.completed_count()
    return payload


def day_payload(day: Optional[DayPlan]) -> Optional[Dict[str, Any]]:
    return day.to_dict() if day is not None else None
