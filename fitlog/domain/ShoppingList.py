"""Shopping list entities: merged ingredient lines and stored list entries."""
from datetime import datetime
from typing import Optional
from uuid import uuid4


def format_quantity(quantity: float) -> str:
    '''Two-decimal rendering without trailing zeros (200.0 -> "200", 0.333 -> "0.33").'''
    text = f"{round(quantity, 2):.2f}".rstrip('0').rstrip('.')
    return text if text not in ('', '-0') else '0'


class ShoppingItem:
    '''One line of an aggregated list. ``quantity`` is None for passthrough entries.'''

    def __init__(self, normalized_name: str, quantity: Optional[float] = None, text: str = ""):
        self.normalized_name = normalized_name
        self.quantity = quantity
        self.text = text

    @property
    def is_passthrough(self) -> bool:
        return self.quantity is None

    def add(self, quantity: float):
        self.quantity = (self.quantity or 0) + quantity

    def __str__(self) -> str:
        if self.is_passthrough:
            return self.text
        return f"{format_quantity(self.quantity)} {self.normalized_name}"

    __repr__ = __str__


class ShoppingEntry:
    '''A stored, checkable line of a user's shopping list.'''

    def __init__(self, user_id: str, item_name: str, is_checked: bool = False,
                 id: Optional[str] = None, created_at: Optional[str] = None):
        self.id = id or uuid4().hex
        self.user_id = user_id
        self.item_name = item_name
        self.is_checked = is_checked
        self.created_at = created_at or datetime.utcnow().isoformat() + 'Z'

    def __str__(self) -> str:
        mark = "x" if self.is_checked else " "
        return f"[{mark}] {self.item_name}"

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        d = dict(data) if isinstance(data, dict) else {}
        return ShoppingEntry(
            user_id=d.get('user_id', ''),
            item_name=d.get('item_name', ''),
            is_checked=bool(d.get('is_checked')),
            id=d.get('id'),
            created_at=d.get('created_at'),
        )

    def to_dict(self):
        return {
            "id": self.id,
            "user_id": self.user_id,
            "item_name": self.item_name,
            "is_checked": self.is_checked,
            "created_at": self.created_at,
        }
