"""Stored shopping list: one checkable entry per line, per user."""
from __future__ import annotations

import logging
from datetime import datetime
from typing import List, Optional

from fitlog.domain.Plan import WeeklyPlan
from fitlog.domain.ShoppingList import ShoppingEntry
from fitlog.infra.Json_Store import JsonStore
from fitlog.logic.shopping.list_builder import build_shopping_list
from fitlog.utilities.constants import SHOPPING_ITEMS

logger = logging.getLogger(__name__)


class ShoppingListService:
    def __init__(self, store: JsonStore):
        self.store = store

    def list_items(self, user_id: str) -> List[ShoppingEntry]:
        '''Unchecked entries first, newest first within each group.'''
        entries = [ShoppingEntry.from_dict(r) for r in self.store.select(SHOPPING_ITEMS, {"user_id": user_id})]
        entries.sort(key=lambda e: e.created_at, reverse=True)
        entries.sort(key=lambda e: e.is_checked)
        return entries

    def add_item(self, user_id: str, name: str) -> ShoppingEntry:
        entry = ShoppingEntry(user_id, name.strip())
        self.store.insert_many(SHOPPING_ITEMS, [entry.to_dict()])
        return entry

    def toggle_item(self, user_id: str, item_id: str) -> Optional[ShoppingEntry]:
        record = self.store.get(SHOPPING_ITEMS, {"user_id": user_id, "id": item_id})
        if record is None:
            return None
        entry = ShoppingEntry.from_dict(record)
        entry.is_checked = not entry.is_checked
        self.store.update(SHOPPING_ITEMS, {"user_id": user_id, "id": item_id}, {"is_checked": entry.is_checked})
        return entry

    def delete_item(self, user_id: str, item_id: str) -> bool:
        return self.store.delete(SHOPPING_ITEMS, {"user_id": user_id, "id": item_id}) > 0

    def clear(self, user_id: str) -> int:
        return self.store.delete(SHOPPING_ITEMS, {"user_id": user_id})

    def generate_from_plan(self, user_id: str, plan: Optional[WeeklyPlan], today_idx: int) -> List[ShoppingEntry]:
        """Replace the user's list with the merged ingredients of the remaining days.

        When nothing remains to buy the existing list is left untouched.
        """
        lines = build_shopping_list(plan, today_idx)
        if not lines:
            logger.info("No ingredients left this week for %s; shopping list kept", user_id)
            return []
        # One timestamp for the batch keeps the merged order when listed
        created_at = datetime.utcnow().isoformat() + 'Z'
        entries = [ShoppingEntry(user_id, line, created_at=created_at) for line in lines]
        self.clear(user_id)
        self.store.insert_many(SHOPPING_ITEMS, [e.to_dict() for e in entries])
        logger.info("Shopping list for %s regenerated with %s item(s)", user_id, len(entries))
        return entries


__all__ = ['ShoppingListService']
