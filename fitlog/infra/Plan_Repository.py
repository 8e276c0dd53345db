import logging
from datetime import datetime
from typing import Any, Dict, Optional

from fitlog.domain.Plan import WeeklyPlan
from fitlog.infra.Json_Store import JsonStore
from fitlog.utilities.constants import PLANS, PLAN_TYPES
from fitlog.utilities.errors import PlanNotFoundError

logger = logging.getLogger(__name__)


class PlanRepository:
    def __init__(self, store: JsonStore):
        self.store = store

    def save_plan(self, user_id: str, plan_type: str, content: Dict[str, Any]) -> WeeklyPlan:
        """Store a freshly generated plan as the user's active one.

        Rules:
          - Earlier plans of the same type are marked inactive, never deleted.
          - The raw generator JSON is stored as-is, once it parses.
        """
        if plan_type not in PLAN_TYPES:
            raise ValueError(f"Unknown plan type: {plan_type}")
        plan = WeeklyPlan.from_dict(content, plan_type)
        deactivated = self.store.update(
            PLANS, {"user_id": user_id, "type": plan_type, "is_active": True}, {"is_active": False}
        )
        self.store.insert_many(PLANS, [{
            "user_id": user_id,
            "type": plan_type,
            "title": content.get("title") or "",
            "content": content,
            "is_active": True,
            "created_at": datetime.utcnow().isoformat() + 'Z',
        }])
        logger.info("Stored %s plan for %s (%s previous plan(s) deactivated)", plan_type, user_id, deactivated)
        return plan

    def find_active_plan(self, user_id: str, plan_type: str) -> Optional[WeeklyPlan]:
        rows = self.store.select(PLANS, {"user_id": user_id, "type": plan_type, "is_active": True})
        if not rows:
            return None
        # Newest wins if an interrupted save left two active rows
        row = max(rows, key=lambda r: r.get("created_at") or "")
        return WeeklyPlan.from_dict(row.get("content") or {}, plan_type)

    def get_active_plan(self, user_id: str, plan_type: str) -> WeeklyPlan:
        plan = self.find_active_plan(user_id, plan_type)
        if plan is None:
            raise PlanNotFoundError(user_id, plan_type)
        return plan
