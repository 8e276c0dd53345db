"""Plan domain entities: a generated week of nutrition or workout days.

Plans arrive as JSON from the generator and are read-only afterwards. The
parsers below tolerate the shapes the generator has produced over time:
day item lists keyed ``items``, ``meals`` or ``exercises``, meals that nest
their own ``items`` list, and numbers sent as strings.
"""
import math
from typing import Any, Dict, List, Optional, Union

from fitlog.utilities.constants import PLAN_NUTRITION, PLAN_WORKOUT, WEEKDAYS
from fitlog.utilities.parsing import digits_to_int, first_int


def _finite(value: Any, default: Any) -> Any:
    '''Raw field value, with NaN and Infinity replaced so the plan stays JSON-safe.'''
    if isinstance(value, float) and not math.isfinite(value):
        return default
    return value


class NutritionItem:
    def __init__(self, name: str = "", type: str = "", calories: int = 0,
                 protein_raw: Union[int, str, None] = 0, ingredients: Optional[List[str]] = None):
        self.name = name
        self.type = type
        self.calories = calories
        self.protein_raw = protein_raw
        self.ingredients = ingredients[:] if ingredients else []

    def __str__(self) -> str:
        return f"{self.name} ({self.type or 'meal'}) - {self.calories} kcal - protein: {self.protein_raw}"

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        '''Creates a NutritionItem from a generator dict. Missing fields get defaults.'''
        d = data if isinstance(data, dict) else {}
        ingredients = d.get('ingredients')
        if not isinstance(ingredients, list):
            ingredients = []
        return NutritionItem(
            name=str(d.get('name') or ''),
            type=str(d.get('type') or ''),
            calories=digits_to_int(d.get('calories')),
            protein_raw=_finite(d.get('protein', d.get('protein_raw', 0)), 0),
            ingredients=[str(i) for i in ingredients
                         if isinstance(i, (str, int, float)) and _finite(i, None) is not None and str(i).strip()],
        )

    def to_dict(self):
        return {
            "type": self.type,
            "name": self.name,
            "calories": self.calories,
            "protein": self.protein_raw,
            "ingredients": self.ingredients,
        }


class ExerciseItem:
    def __init__(self, name: str = "", sets: Union[int, str] = 1, reps: Union[int, str] = 0,
                 rest_seconds: int = 0, notes: Optional[str] = None):
        self.name = name
        self.sets = sets
        self.reps = reps
        self.rest_seconds = rest_seconds
        self.notes = notes

    @property
    def parsed_sets(self) -> int:
        '''Number of sets; at least one so a completed exercise is never lost.'''
        return max(1, first_int(self.sets, default=1))

    @property
    def parsed_reps(self) -> int:
        return max(0, first_int(self.reps, default=0))

    def __str__(self) -> str:
        return f"{self.name} - {self.sets}x{self.reps} - rest {self.rest_seconds}s"

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        d = data if isinstance(data, dict) else {}
        notes = d.get('notes')
        sets, reps = _finite(d.get('sets'), None), _finite(d.get('reps'), None)
        return ExerciseItem(
            name=str(d.get('name') or ''),
            sets=sets if sets not in (None, '') else 1,
            reps=reps if reps not in (None, '') else 0,
            rest_seconds=first_int(d.get('rest', d.get('restSeconds', d.get('rest_seconds'))), default=0),
            notes=str(notes) if notes else None,
        )

    def to_dict(self):
        return {
            "name": self.name,
            "sets": self.sets,
            "reps": self.reps,
            "rest": self.rest_seconds,
            "notes": self.notes,
        }


PlanItem = Union[NutritionItem, ExerciseItem]


def _raw_items(day: Dict[str, Any]) -> List[Any]:
    for key in ('items', 'meals', 'exercises'):
        value = day.get(key)
        if isinstance(value, list):
            return value
    return []


def _flatten(raw_items: List[Any]) -> List[Dict[str, Any]]:
    # A meal may group several foods: {"name": "Lunch", "items": [...]}
    flat: List[Dict[str, Any]] = []
    for entry in raw_items:
        if not isinstance(entry, dict):
            continue
        nested = entry.get('items')
        if isinstance(nested, list):
            group_type = entry.get('type') or entry.get('name') or ''
            for sub in nested:
                if isinstance(sub, dict):
                    flat.append({'type': group_type, **sub})
        else:
            flat.append(entry)
    return flat


class DayPlan:
    def __init__(self, label: str = "", items: Optional[List[PlanItem]] = None, focus: Optional[str] = None):
        self.label = label
        self.items = items[:] if items else []
        self.focus = focus

    @property
    def nutrition_items(self) -> List[NutritionItem]:
        return [i for i in self.items if isinstance(i, NutritionItem)]

    @property
    def exercise_items(self) -> List[ExerciseItem]:
        return [i for i in self.items if isinstance(i, ExerciseItem)]

    def item(self, index: int) -> Optional[PlanItem]:
        if 0 <= index < len(self.items):
            return self.items[index]
        return None

    def __str__(self) -> str:
        focus = f" ({self.focus})" if self.focus else ""
        return f"{self.label}{focus}: {len(self.items)} items"

    __repr__ = __str__

    @staticmethod
    def from_dict(data, plan_type: str = PLAN_NUTRITION, index: int = 0):
        d = data if isinstance(data, dict) else {}
        item_cls = ExerciseItem if plan_type == PLAN_WORKOUT else NutritionItem
        label = d.get('day') or d.get('label') or (WEEKDAYS[index] if index < len(WEEKDAYS) else f"Day {index + 1}")
        return DayPlan(
            label=str(label),
            items=[item_cls.from_dict(raw) for raw in _flatten(_raw_items(d))],
            focus=_finite(d.get('focus'), None) or None,
        )

    def to_dict(self):
        return {
            "day": self.label,
            "focus": self.focus,
            "items": [i.to_dict() for i in self.items],
        }


class WeeklyPlan:
    '''Seven Monday-first days of one plan type. Never mutated after parsing.'''

    def __init__(self, title: str = "", days: Optional[List[DayPlan]] = None, plan_type: str = PLAN_NUTRITION):
        self.title = title
        self.days = days[:] if days else []
        self.plan_type = plan_type

    def day(self, index: int) -> Optional[DayPlan]:
        if 0 <= index < len(self.days):
            return self.days[index]
        return None

    def __str__(self) -> str:
        return f"{self.title or 'Plan'} [{self.plan_type}] - {len(self.days)} days"

    __repr__ = __str__

    @staticmethod
    def from_dict(data, plan_type: str = PLAN_NUTRITION):
        d = data if isinstance(data, dict) else {}
        raw_days = d.get('days') if isinstance(d.get('days'), list) else []
        return WeeklyPlan(
            title=str(d.get('title') or ''),
            days=[DayPlan.from_dict(day, plan_type, i) for i, day in enumerate(raw_days)],
            plan_type=plan_type,
        )

    def to_dict(self):
        return {
            "title": self.title,
            "days": [day.to_dict() for day in self.days],
        }
