"""
Input validation schemas using Pydantic for the HTTP layer.
"""
from pydantic import BaseModel, Field, field_validator
from typing import Any, Dict, List, Optional


class PlanInput(BaseModel):
    """Schema for a generated weekly plan handed over for storage."""
    title: str = ""
    days: List[Dict[str, Any]] = Field(..., min_length=1)

    @field_validator('title')
    @classmethod
    def strip_title(cls, v):
        """Remove leading/trailing whitespace."""
        return v.strip() if isinstance(v, str) else v


class ToggleItemInput(BaseModel):
    """Schema for checking/unchecking one item of a plan day."""
    day_index: int = Field(..., ge=0, le=6)
    item_index: int = Field(..., ge=0)


class NoteInput(BaseModel):
    """Schema for a free-text day note."""
    note: str = Field("", max_length=2000)

    @field_validator('note')
    @classmethod
    def strip_note(cls, v):
        return v.strip()


class FinishSessionInput(BaseModel):
    """Schema for closing today's workout session."""
    day_index: int = Field(..., ge=0, le=6)
    duration_seconds: int = Field(0, ge=0)
    name: Optional[str] = None


class ShoppingItemInput(BaseModel):
    """Schema for a manually added shopping list entry."""
    name: str = Field(..., min_length=1, max_length=200)

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        if not v.strip():
            raise ValueError('Item name cannot be empty')
        return v.strip()


class ExerciseCatalogInput(BaseModel):
    """Schema for one canonical exercise."""
    name: str = Field(..., min_length=1, max_length=200)
    muscle: str = ""
    equipment: str = ""
