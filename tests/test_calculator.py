"""
End-to-end tests for the unitcalc entry points.

Each test runs text through lexer, parser, evaluator and formatter.

Author: xwest
"""

import unittest
from decimal import Decimal
import sys
import os

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from unitcalc import CalcConfig, evaluate, evaluate_to_string
from unitcalc.diagnostics import CalcError
from unitcalc.lexer import LexerError
from unitcalc.parser import ParseError
from unitcalc.evaluator import IncompatibleUnitsError
from unitcalc.units import Unit


class TestEvaluate(unittest.TestCase):
    """Test cases for evaluate()."""

    def assertResult(self, source, value, unit=None):
        result = evaluate(source)
        self.assertEqual(result.value, Decimal(value), source)
        self.assertIs(result.unit, unit, source)

    def test_operator_rules(self):
        self.assertResult("-3^2", -9)
        self.assertResult("2^3^2", 512)
        self.assertResult("1 + 2 * 3", 7)
        self.assertResult("(1 + 2) * 3", 9)

    def test_unit_arithmetic(self):
        self.assertResult("1 km - 1 m", 999, Unit.METER)
        self.assertResult("2\" + 6'4\"", 78, Unit.INCH)
        self.assertResult("10 m / 2 m", 5)
        self.assertResult("3 m + 20 cm", 320, Unit.CENTIMETER)

    def test_conversions(self):
        self.assertResult("6'4\" to cm", "193.04", Unit.CENTIMETER)
        self.assertResult("100 °C to °F", 212, Unit.FAHRENHEIT)
        self.assertResult("1 mile in feet", 5280, Unit.FOOT)

    def test_words(self):
        self.assertResult("3 plus 4 times 2", 11)
        self.assertResult("2 thousand meters to km", 2, Unit.KILOMETER)

    def test_lexer_failures(self):
        for source in ["", "   ", "1 million thousand", "(6)'4\"", "5%%"]:
            with self.assertRaises(LexerError, msg=source):
                evaluate(source)

    def test_evaluation_failures(self):
        with self.assertRaises(IncompatibleUnitsError):
            evaluate("1 m + 1 kg")

    def test_all_failures_share_a_base(self):
        for source in ["5 meterz", "3 *", "1 / 0"]:
            with self.assertRaises(CalcError, msg=source):
                evaluate(source)

    def test_trailing_operators(self):
        self.assertEqual(evaluate("3 +", allow_trailing_operators=True).value, 3)
        with self.assertRaises(ParseError):
            evaluate("3 +", allow_trailing_operators=False)

    def test_trailing_operators_follow_config(self):
        with self.assertRaises(ParseError):
            evaluate("3 +")
        lenient = CalcConfig(allow_trailing_operators=True)
        self.assertEqual(evaluate("3 +", config=lenient).value, 3)
        with self.assertRaises(ParseError):
            evaluate("3 +", allow_trailing_operators=False, config=lenient)

    def test_debug_logging(self):
        with self.assertLogs("unitcalc.calculator", level="DEBUG") as logs:
            evaluate("1 + 2")
        self.assertTrue(any("tokens:" in line for line in logs.output))
        self.assertTrue(any("ast: (+ 1 2)" in line for line in logs.output))


class TestEvaluateToString(unittest.TestCase):
    """Test cases for formatted results."""

    def test_formatting(self):
        self.assertEqual(evaluate_to_string("3 m + 20 cm"), "320 centimeters")
        self.assertEqual(evaluate_to_string("1 km - 1 m"), "999 meters")
        self.assertEqual(evaluate_to_string("2^3^2"), "512")
        self.assertEqual(evaluate_to_string("0.5 m + 0.5 m"), "1 meter")
        self.assertEqual(evaluate_to_string("3 km + 200 m to km"), "3.2 kilometers")

    def test_scientific_notation_output(self):
        self.assertEqual(evaluate_to_string("100000000000000000000000 s"), "1E+23 seconds")
        self.assertEqual(evaluate_to_string("0.00000001 kg"), "1E-8 kilograms")
        self.assertEqual(evaluate_to_string("1 googol"), "1E+100")

    def test_explicit_conversion_disables_auto_scale(self):
        self.assertEqual(evaluate_to_string("2 light years to m"), "18921460945161600 meters")
        self.assertEqual(evaluate_to_string("2 light years + 0 m"), "2 light years")

    def test_output_parses_back_to_the_same_value(self):
        for source in ["5 km", "6'4\" to cm", "2 light years to m", "1 km - 1 m", "7 / 2", "100 °C to K",
                       "100000000000000000000000 s", "0.00000001 kg", "1 googol", "-0.000000025 m"]:
            first = evaluate(source)
            text = evaluate_to_string(source)
            again = evaluate(text)
            self.assertEqual(again.value, first.value, text)
            self.assertIs(again.unit, first.unit, text)


if __name__ == "__main__":
    unittest.main()
