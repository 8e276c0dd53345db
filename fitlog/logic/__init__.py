"""Core business logic layer.

Subpackages:
- nutrition: daily meal adherence and calorie/protein totals
- workout: daily exercise adherence and session recording
- shopping: merging ingredients into a shopping list
- reporting: dashboard aggregation
"""
__all__ = ["nutrition", "workout", "shopping", "reporting"]
