import unittest

from fitlog.logic.nutrition.tracker import parse_protein
from fitlog.utilities.parsing import digits_to_int, first_int


class TestParsing(unittest.TestCase):

    def test_protein_accepts_numbers_and_strings(self):
        self.assertEqual(parse_protein(32), 32)
        self.assertEqual(parse_protein("32g"), 32)
        self.assertEqual(parse_protein(" 45 g protein"), 45)

    def test_protein_unparsable_is_zero(self):
        self.assertEqual(parse_protein("lots"), 0)
        self.assertEqual(parse_protein(None), 0)
        self.assertEqual(parse_protein(""), 0)
        self.assertEqual(parse_protein(["20"]), 0)

    def test_digits_to_int_strips_every_non_digit(self):
        self.assertEqual(digits_to_int("650 kcal"), 650)
        self.assertEqual(digits_to_int("1,200"), 1200)
        self.assertEqual(digits_to_int(True, default=7), 7)

    def test_first_int(self):
        self.assertEqual(first_int("8-12"), 8)
        self.assertEqual(first_int("AMRAP", default=0), 0)
        self.assertEqual(first_int(4.0), 4)
        self.assertEqual(first_int("90s"), 90)

    def test_non_finite_numbers_give_default(self):
        for value in (float("inf"), float("-inf"), float("nan")):
            self.assertEqual(digits_to_int(value), 0)
            self.assertEqual(first_int(value, default=1), 1)
            self.assertEqual(parse_protein(value), 0)
