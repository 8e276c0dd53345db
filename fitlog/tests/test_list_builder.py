import unittest

from fitlog.domain.Plan import WeeklyPlan
from fitlog.domain.ShoppingList import format_quantity
from fitlog.logic.shopping.list_builder import (
    aggregate, aggregate_items, build_shopping_list, collect_remaining_ingredients, parse_quantity,
)
from fitlog.tests.support import WEDNESDAY_INDEX, nutrition_plan_dict


class TestParseQuantity(unittest.TestCase):

    def test_integer_and_decimals(self):
        self.assertEqual(parse_quantity("100 g rice"), (100.0, "g rice"))
        self.assertEqual(parse_quantity("1.5 l water"), (1.5, "l water"))
        self.assertEqual(parse_quantity("1,5 l water"), (1.5, "l water"))

    def test_fraction(self):
        self.assertEqual(parse_quantity("1/2 cup oats"), (0.5, "cup oats"))

    def test_not_a_quantity(self):
        self.assertIsNone(parse_quantity("a pinch of salt"))
        self.assertIsNone(parse_quantity("200"))
        self.assertIsNone(parse_quantity("1/0 cup sugar"))
        self.assertIsNone(parse_quantity(""))


class TestAggregate(unittest.TestCase):

    def test_merges_same_name(self):
        self.assertEqual(aggregate(["100 g rice", "100 g rice"]), ["200 g rice"])

    def test_names_compare_ignoring_case_and_spacing(self):
        self.assertEqual(aggregate(["100 g  Rice", "50 G rice "]), ["150 g rice"])

    def test_units_are_not_converted(self):
        self.assertEqual(aggregate(["100 g rice", "1 kg rice"]), ["100 g rice", "1 kg rice"])

    def test_passthrough_kept_verbatim_after_groups(self):
        result = aggregate(["Salt to taste", "2 eggs", "salt to taste", "1 egg"])
        self.assertEqual(result, ["2 eggs", "1 egg", "Salt to taste"])

    def test_rounding_to_two_decimals(self):
        self.assertEqual(aggregate(["0.1 l oil", "0.2 l oil"]), ["0.3 l oil"])
        self.assertEqual(aggregate(["1/3 cup flour"]), ["0.33 cup flour"])

    def test_fractions_add_up(self):
        self.assertEqual(aggregate(["1/2 cup oats", "1/2 cup oats", "1 cup oats"]), ["2 cup oats"])

    def test_blank_and_non_string_lines_ignored(self):
        self.assertEqual(aggregate(["", "   ", None, 3, "1 apple"]), ["1 apple"])
        self.assertEqual(aggregate([]), [])

    def test_items_expose_quantity(self):
        items = aggregate_items(["100 g rice", "a pinch of salt"])
        self.assertEqual(items[0].quantity, 100.0)
        self.assertFalse(items[0].is_passthrough)
        self.assertTrue(items[1].is_passthrough)
        self.assertEqual(items[1].text, "a pinch of salt")

    def test_format_quantity(self):
        self.assertEqual(format_quantity(200.0), "200")
        self.assertEqual(format_quantity(2.5), "2.5")
        self.assertEqual(format_quantity(0.333), "0.33")


class TestBuildShoppingList(unittest.TestCase):

    def setUp(self):
        self.plan = WeeklyPlan.from_dict(nutrition_plan_dict(), "nutrition")

    def test_only_today_and_later_days(self):
        lines = collect_remaining_ingredients(self.plan, 5)
        # Saturday's meals only; Sunday plans nothing
        self.assertEqual(len(lines), 7)

    def test_wednesday_through_sunday(self):
        self.assertEqual(build_shopping_list(self.plan, WEDNESDAY_INDEX), [
            "320 g oats",
            "1000 ml milk",
            "800 g rice",
            "600 g chicken breast",
            "8 eggs",
            "a pinch of salt",
        ])

    def test_sunday_has_nothing_left(self):
        self.assertEqual(build_shopping_list(self.plan, 6), [])

    def test_no_plan(self):
        self.assertEqual(build_shopping_list(None, 0), [])

    def test_meal_without_ingredients_uses_its_name(self):
        plan = WeeklyPlan.from_dict({"days": [{"items": [{"name": "Protein bar"}, {"name": "Protein bar"}]}]})
        self.assertEqual(build_shopping_list(plan, 0), ["Protein bar"])
