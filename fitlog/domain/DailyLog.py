"""DailyLog domain entity: one user's adherence record for one calendar day."""
import re
from typing import Dict, List, NamedTuple, Optional

from fitlog.utilities.parsing import first_int

_LEGACY_KEY = re.compile(r'^day_(\d+)_(?:item|ex|meal)_(\d+)$')


class ItemKey(NamedTuple):
    '''Position of an item inside a plan: (day index, item index within the day).'''
    day_index: int
    item_index: int

    @staticmethod
    def parse_legacy(value: str) -> Optional["ItemKey"]:
        '''Read the old "day_{d}_item_{i}" string keys still present in stored logs.'''
        match = _LEGACY_KEY.match(value or '')
        if not match:
            return None
        return ItemKey(int(match.group(1)), int(match.group(2)))


class Totals(NamedTuple):
    calories: int = 0
    protein: int = 0

    def apply(self, calories: int, protein: int, sign: int) -> "Totals":
        '''Add (sign=+1) or remove (sign=-1) a contribution, never going below zero.'''
        return Totals(
            calories=max(0, self.calories + sign * calories),
            protein=max(0, self.protein + sign * protein),
        )


class DailyLog:
    def __init__(self, user_id: str, log_date: str, item_status: Optional[Dict[ItemKey, bool]] = None,
                 totals: Optional[Totals] = None, note: str = ""):
        self.user_id = user_id
        self.log_date = log_date
        self.item_status: Dict[ItemKey, bool] = dict(item_status) if item_status else {}
        self.totals = totals or Totals()
        self.note = note

    def is_checked(self, key: ItemKey) -> bool:
        return self.item_status.get(key, False)

    def flip(self, key: ItemKey) -> bool:
        '''Invert the status at ``key`` and return the new value.'''
        value = not self.is_checked(key)
        self.item_status[key] = value
        return value

    def checked_keys(self, day_index: Optional[int] = None) -> List[ItemKey]:
        return [k for k, done in self.item_status.items()
                if done and (day_index is None or k.day_index == day_index)]

    def completed_count(self, day_index: Optional[int] = None) -> int:
        return len(self.checked_keys(day_index))

    def copy(self) -> "DailyLog":
        return DailyLog(self.user_id, self.log_date, self.item_status, self.totals, self.note)

    def __eq__(self, other) -> bool:
        if not isinstance(other, DailyLog):
            return NotImplemented
        return self.to_record() == other.to_record()

    def __str__(self) -> str:
        return (f"DailyLog {self.user_id} {self.log_date} - done {self.completed_count()} - "
                f"{self.totals.calories} kcal / {self.totals.protein} g protein")

    __repr__ = __str__

    @staticmethod
    def from_record(record, user_id: str = "", log_date: str = ""):
        '''Builds a DailyLog from a stored record; ``None`` gives the zeroed default.'''
        d = dict(record) if isinstance(record, dict) else {}
        status: Dict[ItemKey, bool] = {}
        raw_status = d.get('item_status') or {}
        if isinstance(raw_status, list):
            for entry in raw_status:
                if isinstance(entry, dict) and 'day' in entry and 'item' in entry:
                    key = ItemKey(first_int(entry['day']), first_int(entry['item']))
                    status[key] = bool(entry.get('done'))
        elif isinstance(raw_status, dict):
            for raw_key, done in raw_status.items():
                key = ItemKey.parse_legacy(str(raw_key))
                if key is not None:
                    status[key] = bool(done)
        return DailyLog(
            user_id=d.get('user_id') or user_id,
            log_date=d.get('log_date') or log_date,
            item_status=status,
            totals=Totals(
                calories=max(0, first_int(d.get('total_calories'))),
                protein=max(0, first_int(d.get('total_protein'))),
            ),
            note=d.get('note') or '',
        )

    def to_record(self, include_totals: bool = True):
        '''Converts the DailyLog to a dict for the store.'''
        record = {
            "user_id": self.user_id,
            "log_date": self.log_date,
            "item_status": [
                {"day": k.day_index, "item": k.item_index, "done": done}
                for k, done in self.item_status.items()
            ],
            "note": self.note,
        }
        if include_totals:
            record["total_calories"] = self.totals.calories
            record["total_protein"] = self.totals.protein
        return record
