import unittest

from fitlog.domain.Plan import DayPlan, ExerciseItem, NutritionItem, WeeklyPlan
from fitlog.tests.support import nutrition_plan_dict, workout_plan_dict


class TestPlanParsing(unittest.TestCase):

    def test_nutrition_plan(self):
        plan = WeeklyPlan.from_dict(nutrition_plan_dict(), "nutrition")
        self.assertEqual(plan.title, "Lean week")
        self.assertEqual(len(plan.days), 7)
        lunch = plan.day(0).item(1)
        self.assertIsInstance(lunch, NutritionItem)
        self.assertEqual(lunch.calories, 650)
        self.assertEqual(lunch.protein_raw, 45)
        self.assertEqual(lunch.ingredients, ["100 g rice", "150 g chicken breast"])
        self.assertEqual(plan.day(6).items, [])

    def test_workout_plan_parses_sets_and_reps_defensively(self):
        plan = WeeklyPlan.from_dict(workout_plan_dict(), "workout")
        day = plan.day(2)
        self.assertEqual(day.focus, "Upper body")
        bench, pull_up, mystery = day.items
        self.assertIsInstance(bench, ExerciseItem)
        self.assertEqual((bench.parsed_sets, bench.parsed_reps, bench.rest_seconds), (4, 8, 90))
        self.assertEqual((pull_up.parsed_sets, pull_up.parsed_reps), (3, 0))
        self.assertEqual(mystery.notes, "slow")

    def test_missing_fields_get_defaults(self):
        plan = WeeklyPlan.from_dict({"days": [{"items": [{"name": "Apple"}]}, {}]})
        self.assertEqual(plan.title, "")
        self.assertEqual(plan.day(0).label, "Monday")
        self.assertEqual(plan.day(1).label, "Tuesday")
        apple = plan.day(0).item(0)
        self.assertEqual((apple.calories, apple.protein_raw, apple.ingredients), (0, 0, []))
        self.assertIsNone(plan.day(1).item(0))
        self.assertIsNone(plan.day(9))

    def test_nested_meal_items_are_flattened(self):
        day = DayPlan.from_dict({
            "day": "Jour 1",
            "meals": [
                {"name": "Breakfast", "items": [{"name": "Eggs", "calories": 150}, {"name": "Toast", "calories": 90}]},
                {"name": "Snack", "calories": 120},
            ],
        })
        self.assertEqual([i.name for i in day.items], ["Eggs", "Toast", "Snack"])
        self.assertEqual(day.items[0].type, "Breakfast")

    def test_exercise_defaults(self):
        ex = ExerciseItem.from_dict({"name": "Plank", "sets": "", "restSeconds": "45"})
        self.assertEqual(ex.parsed_sets, 1)
        self.assertEqual(ex.parsed_reps, 0)
        self.assertEqual(ex.rest_seconds, 45)

    def test_garbage_input(self):
        plan = WeeklyPlan.from_dict("not a plan")
        self.assertEqual(plan.days, [])

    def test_non_finite_numbers_are_replaced(self):
        nan, inf = float("nan"), float("inf")
        plan = WeeklyPlan.from_dict({"days": [{"focus": nan, "items": [
            {"name": "Toast", "calories": nan, "protein": inf, "ingredients": ["1 slice bread", nan]},
        ]}]})
        item = plan.day(0).item(0)
        self.assertEqual(item.calories, 0)
        self.assertEqual(item.protein_raw, 0)
        self.assertEqual(item.ingredients, ["1 slice bread"])
        self.assertIsNone(plan.day(0).focus)

        ex = ExerciseItem.from_dict({"name": "Row", "sets": inf, "reps": nan, "rest": nan})
        self.assertEqual((ex.parsed_sets, ex.parsed_reps, ex.rest_seconds), (1, 0, 0))
