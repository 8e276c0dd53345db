"""Daily nutrition tracker.

Keeps, per user and calendar day, which planned meals were eaten and the
running calorie/protein totals. Totals are maintained incrementally: a
check adds the item's contribution, an uncheck subtracts it, and both are
clamped at zero so drift from edits made elsewhere cannot go negative.

Only today's plan day can be edited. Writes are optimistic: the in-memory
log is updated first, then upserted by (user_id, log_date); a failed write
is logged and left for the next reload to reconcile.
"""
from __future__ import annotations

import logging
from datetime import date
from typing import Dict, Optional, Union

from fitlog.domain.DailyLog import DailyLog, ItemKey
from fitlog.domain.Plan import WeeklyPlan
from fitlog.events.Event_Bus import EventBus
from fitlog.events.event_helpers import publish_item_toggled, publish_persistence_failed
from fitlog.infra.Json_Store import JsonStore
from fitlog.utilities.config import DEFAULT_CALORIE_TARGET
from fitlog.utilities.constants import DAILY_LOG_KEY, NUTRITION_LOGS
from fitlog.utilities.dates import Clock, day_index, format_date
from fitlog.utilities.errors import OutOfWindowError, PersistenceError
from fitlog.utilities.parsing import digits_to_int

logger = logging.getLogger(__name__)


def parse_protein(raw: Union[int, float, str, None]) -> int:
    '''Protein grams from a number or a string such as "32g"; unparsable input gives 0.'''
    return digits_to_int(raw, default=0)


def day_target(plan: Optional[WeeklyPlan], index: int, default: int = DEFAULT_CALORIE_TARGET) -> int:
    '''Planned calories for a day, or ``default`` when there is no plan or nothing planned.'''
    day = plan.day(index) if plan is not None else None
    total = sum(item.calories for item in day.nutrition_items) if day is not None else 0
    return total if total > 0 else default


class DailyNutritionTracker:
    def __init__(self, store: JsonStore, today: Clock = date.today, bus: Optional[EventBus] = None):
        self.store = store
        self.today = today
        self.bus = bus
        # Today's log per user; a new day replaces the previous entry
        self._logs: Dict[str, DailyLog] = {}

    def load_day(self, user_id: str, log_date: Optional[date] = None) -> DailyLog:
        """Load (or zero-initialize) the log of ``log_date``; today's becomes the local state."""
        today = self.today()
        log = self._fetch(user_id, log_date or today)
        if log.log_date == format_date(today):
            self._logs[user_id] = log
        return log.copy()

    def _fetch(self, user_id: str, day: date) -> DailyLog:
        date_str = format_date(day)
        try:
            record = self.store.get(NUTRITION_LOGS, {"user_id": user_id, "log_date": date_str})
        except PersistenceError as e:
            logger.error("Loading nutrition log %s/%s failed: %s", user_id, date_str, e)
            record = None
        return DailyLog.from_record(record, user_id, date_str)

    def _local(self, user_id: str, today: Optional[date] = None) -> DailyLog:
        today = today or self.today()
        log = self._logs.get(user_id)
        if log is None or log.log_date != format_date(today):
            log = self._logs[user_id] = self._fetch(user_id, today)
        return log

    def check_window(self, day_idx: int) -> date:
        '''Return today if ``day_idx`` is today's plan day, else raise OutOfWindowError.'''
        today = self.today()
        current = day_index(today)
        if day_idx != current:
            raise OutOfWindowError(day_idx, current)
        return today

    def toggle_item(self, user_id: str, day_idx: int, item_idx: int,
                    calories: Union[int, str, None], protein_raw: Union[int, str, None]) -> DailyLog:
        """Check or uncheck one planned item of today and update the totals.

        Raises OutOfWindowError (nothing mutated, nothing written) when
        ``day_idx`` is not today's Monday-first index.
        """
        today = self.check_window(day_idx)
        log = self._local(user_id, today)
        key = ItemKey(day_idx, item_idx)
        checked = log.flip(key)
        sign = 1 if checked else -1
        log.totals = log.totals.apply(max(0, digits_to_int(calories)), parse_protein(protein_raw), sign)

        self._persist(log)
        publish_item_toggled(log, key, checked, bus=self.bus)
        return log.copy()

    def set_note(self, user_id: str, note: str) -> DailyLog:
        log = self._local(user_id)
        log.note = note
        self._persist(log)
        return log.copy()

    def day_target(self, day_idx: int, plan: Optional[WeeklyPlan]) -> int:
        return day_target(plan, day_idx)

    def _persist(self, log: DailyLog) -> bool:
        try:
            self.store.upsert(NUTRITION_LOGS, log.to_record(), DAILY_LOG_KEY)
            return True
        except PersistenceError as e:
            logger.error("Saving nutrition log %s/%s failed: %s", log.user_id, log.log_date, e)
            publish_persistence_failed(NUTRITION_LOGS, log.user_id, log.log_date, e, bus=self.bus)
            return False


__all__ = ['DailyNutritionTracker', 'parse_protein', 'day_target']
