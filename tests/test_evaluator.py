"""
Test suite for the unitcalc evaluator.

Tests cover:
- Plain arithmetic at decimal precision
- Unit rules of every operator
- Functions, factorial, percent and "of"
- Conversions, including temperatures and feet and inches
- Every evaluation error class

Author: xwest
"""

import unittest
from decimal import Decimal
from typing import Optional
import sys
import os

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from unitcalc.config import CalcConfig
from unitcalc.parser import parse_string
from unitcalc.evaluator import (
    Evaluator, Number, evaluate_ast, EvalError, IncompatibleUnitsError, DivisionByZeroError,
    InvalidExponentError, InvalidFactorialError, DomainError, ConversionError
)
from unitcalc.units import Unit


class EvaluatorTestCase(unittest.TestCase):
    """Shared helpers for evaluator tests."""

    def setUp(self):
        self.evaluator = Evaluator()

    def _eval(self, source: str) -> Number:
        return self.evaluator.evaluate(parse_string(source))

    def assertEvaluates(self, source: str, value, unit: Optional[Unit] = None):
        result = self._eval(source)
        self.assertEqual(result.value, Decimal(value), source)
        self.assertIs(result.unit, unit, source)
        self.assertEqual(result.is_dimensionless, unit is None, source)

    def assertFails(self, source: str, error_class, code: str) -> EvalError:
        with self.assertRaises(error_class) as context:
            self._eval(source)
        self.assertEqual(context.exception.code, code, source)
        return context.exception


class TestArithmetic(EvaluatorTestCase):
    """Test cases for plain numbers."""

    def test_basic_operations(self):
        self.assertEvaluates("1 + 2 * 3", 7)
        self.assertEvaluates("(1 + 2) * 3", 9)
        self.assertEvaluates("10 / 4", "2.5")
        self.assertEvaluates("0.1 + 0.2", "0.3")
        self.assertEvaluates("2 - 5", -3)

    def test_precedence(self):
        self.assertEvaluates("-3^2", -9)
        self.assertEvaluates("2^3^2", 512)
        self.assertEvaluates("(-3)^2", 9)

    def test_precision(self):
        self.assertEvaluates("1 / 3", "0.3333333333333333333333333333333333")
        self.assertEvaluates("2 / 3", "0.6666666666666666666666666666666667")

    def test_configured_precision(self):
        evaluator = Evaluator(CalcConfig(precision=5))
        result = evaluator.evaluate(parse_string("1 / 3"))
        self.assertEqual(result.value, Decimal("0.33333"))

    def test_modulo_is_floored(self):
        self.assertEvaluates("7 mod 3", 1)
        self.assertEvaluates("-7 mod 3", 2)
        self.assertEvaluates("7 mod -3", -2)
        self.assertEvaluates("7.5 mod 2", "1.5")

    def test_percent_sign_as_modulo(self):
        self.assertEvaluates("10 % 3", 1)
        self.assertEvaluates("10%(3)", 1)
        self.assertEvaluates("-7 % 3", 2)
        self.assertEvaluates("50 % sqrt(9)", 2)
        self.assertEvaluates("7 m % 3 m", 1, Unit.METER)
        self.assertEvaluates("10% * 2", "0.2")

    def test_powers(self):
        self.assertEvaluates("2^10", 1024)
        self.assertEvaluates("2^-2", "0.25")
        self.assertEvaluates("0^0", 1)
        self.assertEvaluates("(-2)^3", -8)

    def test_named_numbers(self):
        self.assertEvaluates("3 million + 1", 3000001)
        self.assertEvaluates("1.5 thousand", 1500)

    def test_constants(self):
        self.assertEqual(str(self._eval("pi").value), "3.141592653589793238462643383279503")
        self.assertEqual(str(self._eval("e").value), "2.718281828459045235360287471352662")
        self.assertEvaluates("2pi / pi", 2)

    def test_evaluate_ast(self):
        self.assertEqual(evaluate_ast(parse_string("2 + 2")), Number(Decimal(4)))


class TestUnitArithmetic(EvaluatorTestCase):
    """Test cases for operators on quantities."""

    def test_addition_uses_finer_unit(self):
        self.assertEvaluates("1 km - 1 m", 999, Unit.METER)
        self.assertEvaluates("1 m - 1 km", -999, Unit.METER)
        self.assertEvaluates("3 m + 20 cm", 320, Unit.CENTIMETER)
        self.assertEvaluates("1 h + 30 min", 90, Unit.MINUTE)
        self.assertEvaluates("2 kg + 2 kg", 4, Unit.KILOGRAM)

    def test_addition_of_temperatures_keeps_left_unit(self):
        self.assertEvaluates("10 °C + 50 °F", 20, Unit.CELSIUS)

    def test_scaling_keeps_unit(self):
        self.assertEvaluates("3 m * 2", 6, Unit.METER)
        self.assertEvaluates("2 * 3 m", 6, Unit.METER)
        self.assertEvaluates("6 m / 2", 3, Unit.METER)
        self.assertEvaluates("-(5 kg)", -5, Unit.KILOGRAM)

    def test_same_dimension_division(self):
        self.assertEvaluates("10 m / 2 m", 5)
        self.assertEvaluates("1 km / 1 m", 1000)
        self.assertEvaluates("1 h / 30 min", 2)

    def test_compound_dimensions(self):
        self.assertEvaluates("3 m * 4 m", 12, Unit.SQUARE_METER)
        self.assertEvaluates("2 m * 3 m * 4 m", 24, Unit.CUBIC_METER)
        self.assertEvaluates("12 m2 / 4 m", 3, Unit.METER)
        self.assertEvaluates("100 m / 20 s", 5, Unit.METERS_PER_SECOND)
        self.assertEvaluates("5 V * 2 A", 10, Unit.WATT)
        self.assertEvaluates("10 V / 2 ohm", 5, Unit.AMPERE)
        self.assertEvaluates("1 kWh / 1 h", 1000, Unit.WATT)
        self.assertEvaluates("2 kW * 1 h", 7200000, Unit.JOULE)
        self.assertEvaluates("8 bit / 2 s", 4, Unit.BITS_PER_SECOND)
        self.assertEvaluates("10 m/s * 3 s", 30, Unit.METER)

    def test_length_powers(self):
        self.assertEvaluates("(3 m)^2", 9, Unit.SQUARE_METER)
        self.assertEvaluates("(2 km)^3", "8E+9", Unit.CUBIC_METER)
        self.assertEvaluates("(3 s)^1", 3, Unit.SECOND)

    def test_modulo_with_units(self):
        self.assertEvaluates("7 m mod 3 m", 1, Unit.METER)
        self.assertEvaluates("7 m mod 3", 1, Unit.METER)
        self.assertEvaluates("1 km mod 300 m", 100, Unit.METER)

    def test_percent_and_of(self):
        self.assertEvaluates("50%", "0.5")
        self.assertEvaluates("10% of 50 m", 5, Unit.METER)
        self.assertEvaluates("20% of 30", 6)
        self.assertEvaluates("2 m of 3 km", 6000, Unit.METER)
        self.assertEvaluates("5 km%", "0.05", Unit.KILOMETER)


class TestFunctions(EvaluatorTestCase):
    """Test cases for built-in functions."""

    def test_roots(self):
        self.assertEvaluates("sqrt(16)", 4)
        self.assertEvaluates("sqrt 2.25", "1.5")
        self.assertEvaluates("cbrt(27)", 3)
        self.assertEvaluates("cbrt(-8)", -2)

    def test_logarithms(self):
        self.assertEvaluates("log(1000)", 3)
        self.assertEvaluates("ln(1)", 0)
        self.assertEvaluates("ln(e)", 1)
        self.assertEvaluates("exp(0)", 1)

    def test_rounding_keeps_unit(self):
        self.assertEvaluates("round(2.5)", 3)
        self.assertEvaluates("round(-2.5)", -3)
        self.assertEvaluates("round(2.4 m)", 2, Unit.METER)
        self.assertEvaluates("ceil(1.2)", 2)
        self.assertEvaluates("floor(-1.2)", -2)
        self.assertEvaluates("abs(-3 kg)", 3, Unit.KILOGRAM)

    def test_trigonometry(self):
        self.assertEvaluates("sin(0)", 0)
        self.assertEvaluates("cos(0)", 1)
        self.assertEvaluates("sin(pi)", 0)
        self.assertEvaluates("cos(pi)", -1)
        self.assertEvaluates("sin(pi / 2)", 1)
        self.assertEvaluates("cos(pi / 2)", 0)
        self.assertEvaluates("tan(0)", 0)
        self.assertEvaluates("sin(2pi)", 0)

    def test_factorial(self):
        self.assertEvaluates("5!", 120)
        self.assertEvaluates("0!", 1)
        self.assertEvaluates("3!!", 720)
        self.assertEqual(self._eval("1000!").value.adjusted(), 2567)


class TestConversions(EvaluatorTestCase):
    """Test cases for explicit conversions."""

    def test_linear(self):
        self.assertEvaluates("5 km to m", 5000, Unit.METER)
        self.assertEvaluates("1 mile in feet", 5280, Unit.FOOT)
        self.assertEvaluates("2 GiB to MB", "2147.483648", Unit.MEGABYTE)
        self.assertEvaluates("1 knot to km/h", "1.852", Unit.KILOMETERS_PER_HOUR)
        self.assertEvaluates("1 hour to seconds", 3600, Unit.SECOND)

    def test_temperature(self):
        self.assertEvaluates("100 °C to °F", 212, Unit.FAHRENHEIT)
        self.assertEvaluates("0 °C to K", "273.15", Unit.KELVIN)
        self.assertEvaluates("-40 °F to °C", -40, Unit.CELSIUS)

    def test_unitless_value_takes_target_unit(self):
        self.assertEvaluates("5 to m", 5, Unit.METER)

    def test_conversion_applies_to_whole_expression(self):
        self.assertEvaluates("1 km + 500 m to km", "1.5", Unit.KILOMETER)

    def test_foot_inch(self):
        self.assertEvaluates("6'4\"", 76, Unit.INCH)
        self.assertEvaluates("2\" + 6'4\"", 78, Unit.INCH)
        self.assertEvaluates("6'4\" to cm", "193.04", Unit.CENTIMETER)
        self.assertEvaluates("5' + 1 ft", 6, Unit.FOOT)
        self.assertEvaluates("5.5'", "5.5", Unit.FOOT)


class TestEvaluationErrors(EvaluatorTestCase):
    """Test cases for evaluation failures."""

    def test_incompatible_units(self):
        error = self.assertFails("1 m + 1 kg", IncompatibleUnitsError, "E001")
        self.assertIn("kilograms (mass)", error.message)
        self.assertIn("meters (length)", error.message)
        self.assertEqual(error.location.column, 1)

        self.assertFails("1 m - 1 s", IncompatibleUnitsError, "E001")
        self.assertFails("1 m * 1 kg", IncompatibleUnitsError, "E001")
        self.assertFails("1 °C * 2 °C", IncompatibleUnitsError, "E001")
        self.assertFails("1 / 2 m", IncompatibleUnitsError, "E001")
        self.assertFails("5 m mod 2 s", IncompatibleUnitsError, "E001")
        self.assertFails("2 m of 3 kg", IncompatibleUnitsError, "E001")
        self.assertFails("sqrt(4 m)", IncompatibleUnitsError, "E001")

    def test_division_by_zero(self):
        self.assertFails("1 / 0", DivisionByZeroError, "E002")
        self.assertFails("1 m / 0 m", DivisionByZeroError, "E002")
        self.assertFails("5 mod 0", DivisionByZeroError, "E002")
        self.assertFails("0^-1", DivisionByZeroError, "E002")

    def test_invalid_exponent(self):
        self.assertFails("2^0.5", InvalidExponentError, "E003")
        self.assertFails("2^(1 m)", InvalidExponentError, "E003")
        self.assertFails("(3 s)^2", InvalidExponentError, "E003")
        self.assertFails("(3 m)^4", InvalidExponentError, "E003")

    def test_invalid_factorial(self):
        self.assertFails("3.5!", InvalidFactorialError, "E004")
        self.assertFails("(-1)!", InvalidFactorialError, "E004")
        self.assertFails("1001!", InvalidFactorialError, "E004")
        self.assertFails("(5 m)!", InvalidFactorialError, "E004")

    def test_factorial_limit_is_configurable(self):
        evaluator = Evaluator(CalcConfig(factorial_limit=10))
        with self.assertRaises(InvalidFactorialError):
            evaluator.evaluate(parse_string("11!"))

    def test_domain_errors(self):
        self.assertFails("sqrt(-1)", DomainError, "E005")
        self.assertFails("ln(0)", DomainError, "E005")
        self.assertFails("log(-10)", DomainError, "E005")
        self.assertFails("tan(pi / 2)", DomainError, "E005")
        self.assertFails("10^(10^20)", DomainError, "E005")

    def test_invalid_conversion(self):
        error = self.assertFails("5 kg to m", ConversionError, "E006")
        self.assertIn("mass", error.message)
        self.assertFails("1 °C to seconds", ConversionError, "E006")

    def test_errors_share_a_base_class(self):
        for source in ("1 m + 1 s", "1 / 0", "sqrt(-1)"):
            with self.assertRaises(EvalError):
                self._eval(source)


if __name__ == "__main__":
    unittest.main()
