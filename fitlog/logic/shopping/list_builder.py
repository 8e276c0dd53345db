"""Shopping list builder.

Merges the free-text ingredient lines of the rest of the week's meals:
"100 g rice" + "100 g rice" -> "200 g rice". Lines that do not start with
a number ("a pinch of salt") are passed through unmerged after the merged
groups. Units are not interpreted: "100 g rice" and "1 kg rice" stay apart.

Provides aggregate(raw), collect_remaining_ingredients(plan, from_day) and
build_shopping_list(plan, today_idx).
"""
import re
from typing import Dict, List, Optional, Tuple

from fitlog.domain.Plan import WeeklyPlan
from fitlog.domain.ShoppingList import ShoppingItem

# Leading quantity: integer, decimal ("1.5" or "1,5") or simple fraction ("1/2")
_QUANTITY = re.compile(r'^\s*(\d+(?:[.,]\d+)?)(?:\s*/\s*(\d+))?\s*(.*?)\s*$', re.DOTALL)


def _normalize(text: str) -> str:
    return ' '.join((text or '').split()).casefold()


def parse_quantity(raw: str) -> Optional[Tuple[float, str]]:
    '''Split "100 g rice" into (100.0, "g rice"); None when there is no leading number.'''
    match = _QUANTITY.match(raw or '')
    if not match:
        return None
    number, denominator, rest = match.groups()
    if not rest:
        return None
    quantity = float(number.replace(',', '.'))
    if denominator is not None:
        if int(denominator) == 0:
            return None
        quantity /= int(denominator)
    return quantity, rest


def aggregate_items(raw_ingredients: List[str]) -> List[ShoppingItem]:
    """Merge quantities per normalized name; unparsed lines follow in input order.

    Returns ShoppingItem objects: merged groups first (in order of first
    appearance), then passthrough entries. Identical passthrough lines
    (ignoring case and spacing) are listed once.
    """
    groups: Dict[str, ShoppingItem] = {}
    others: Dict[str, ShoppingItem] = {}
    for raw in raw_ingredients or []:
        if not isinstance(raw, str) or not raw.strip():
            continue
        parsed = parse_quantity(raw)
        if parsed is None:
            key = _normalize(raw)
            if key not in others:
                others[key] = ShoppingItem(key, None, raw)
            continue
        quantity, text = parsed
        key = _normalize(text)
        if key not in groups:
            groups[key] = ShoppingItem(key, 0.0, text)
        groups[key].add(quantity)
    for item in groups.values():
        # Repeated float addition leaves artifacts like 0.30000000000000004
        item.quantity = round(item.quantity, 2)
    return list(groups.values()) + list(others.values())


def aggregate(raw_ingredients: List[str]) -> List[str]:
    return [str(item) for item in aggregate_items(raw_ingredients)]


def collect_remaining_ingredients(plan: Optional[WeeklyPlan], from_day: int) -> List[str]:
    '''Ingredient lines of every day from ``from_day`` to the end of the week.

    Items listing no ingredients contribute their own name.
    '''
    if plan is None:
        return []
    lines: List[str] = []
    for index, day in enumerate(plan.days):
        if index < from_day:
            continue
        for item in day.nutrition_items:
            if item.ingredients:
                lines.extend(item.ingredients)
            elif item.name:
                lines.append(item.name)
    return lines


def build_shopping_list(plan: Optional[WeeklyPlan], today_idx: int) -> List[str]:
    """Forward-looking shopping list: today and the days after it, merged."""
    return aggregate(collect_remaining_ingredients(plan, today_idx))


__all__ = ['aggregate', 'aggregate_items', 'parse_quantity', 'collect_remaining_ingredients', 'build_shopping_list']
