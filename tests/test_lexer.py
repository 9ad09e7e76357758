"""
Test suite for the unitcalc lexer.

Tests cover:
- Numbers, named numbers and units
- Keywords, functions, constants and word operators
- Foot and inch marks
- Implicit multiplication markers
- Error codes and suggestions

Author: xwest
"""

import unittest
from decimal import Decimal
from typing import List
import sys
import os

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from unitcalc.lexer import Lexer, LexerError, Token, TokenType, OpKind, FunctionKind, lex
from unitcalc.units import Unit


class TestLexer(unittest.TestCase):
    """Test cases for successful tokenization."""

    def _types(self, source: str) -> List[TokenType]:
        return [token.type for token in lex(source)]

    def test_simple_expression(self):
        tokens = lex("3 km + 2")
        self.assertEqual(
            [token.type for token in tokens],
            [TokenType.NUMBER, TokenType.UNIT, TokenType.OPERATOR, TokenType.NUMBER, TokenType.EOF]
        )
        self.assertEqual(tokens[0].value, Decimal(3))
        self.assertIs(tokens[1].value, Unit.KILOMETER)
        self.assertEqual(tokens[2].value, OpKind.ADD)

    def test_decimal_numbers(self):
        self.assertEqual(lex(".5")[0].value, Decimal("0.5"))
        self.assertEqual(lex("5.")[0].value, Decimal(5))
        self.assertEqual(lex("3.25")[0].value, Decimal("3.25"))

    def test_scientific_numbers(self):
        tokens = lex("1.5E+3 m")
        self.assertEqual(tokens[0].value, Decimal(1500))
        self.assertEqual(tokens[0].lexeme, "1.5E+3")
        self.assertIs(tokens[1].value, Unit.METER)
        self.assertEqual(lex("1e-8")[0].value, Decimal("1E-8"))
        self.assertEqual(lex("2E3")[0].value, Decimal(2000))

    def test_e_without_exponent_digits_is_the_constant(self):
        self.assertEqual(
            self._types("2e"),
            [TokenType.NUMBER, TokenType.OPERATOR, TokenType.CONSTANT, TokenType.EOF]
        )
        self.assertEqual(
            self._types("2e+3"),
            [TokenType.NUMBER, TokenType.OPERATOR, TokenType.CONSTANT,
             TokenType.OPERATOR, TokenType.NUMBER, TokenType.EOF]
        )

    def test_commas_separate_tokens(self):
        tokens = lex("1,000")
        self.assertEqual(
            [token.type for token in tokens],
            [TokenType.NUMBER, TokenType.NUMBER, TokenType.EOF]
        )

    def test_named_numbers_fold_into_number(self):
        tokens = lex("3 million")
        self.assertEqual(len(tokens), 2)
        self.assertEqual(tokens[0].value, Decimal(3000000))
        self.assertEqual(tokens[0].lexeme, "3 million")

        self.assertEqual(lex("2 thousand million")[0].value, Decimal("2E+9"))
        self.assertEqual(lex("1.5 bil")[0].value, Decimal("1.5E+9"))
        self.assertEqual(lex("1 googol")[0].value, Decimal("1E+100"))

    def test_multi_word_units(self):
        tokens = lex("2 light years")
        self.assertEqual(tokens[1].type, TokenType.UNIT)
        self.assertIs(tokens[1].value, Unit.LIGHT_YEAR)
        self.assertEqual(tokens[1].lexeme, "light years")

        self.assertIs(lex("5 pounds-force per square inch")[1].value, Unit.POUNDS_PER_SQUARE_INCH)
        self.assertIs(lex("7 fl oz")[1].value, Unit.FLUID_OUNCE)

    def test_slash_inside_unit(self):
        tokens = lex("100 km/h")
        self.assertEqual(len(tokens), 3)
        self.assertIs(tokens[1].value, Unit.KILOMETERS_PER_HOUR)

    def test_slash_as_division(self):
        self.assertEqual(
            self._types("10 m / 2 s"),
            [TokenType.NUMBER, TokenType.UNIT, TokenType.OPERATOR,
             TokenType.NUMBER, TokenType.UNIT, TokenType.EOF]
        )

    def test_power_suffix(self):
        self.assertIs(lex("4 m2")[1].value, Unit.SQUARE_METER)
        self.assertIs(lex("4 m²")[1].value, Unit.SQUARE_METER)
        self.assertIs(lex("4 feet³")[1].value, Unit.CUBIC_FOOT)

    def test_case_sensitive_units(self):
        self.assertIs(lex("5 mW")[1].value, Unit.MILLIWATT)
        self.assertIs(lex("5 MW")[1].value, Unit.MEGAWATT)
        self.assertIs(lex("5 Mb")[1].value, Unit.MEGABIT)
        self.assertIs(lex("5 MB")[1].value, Unit.MEGABYTE)

    def test_word_operators(self):
        tokens = lex("3 plus 4 divided by 2 times 5 minus 1 mod 2")
        operators = [token.value for token in tokens if token.type == TokenType.OPERATOR]
        self.assertEqual(operators, [OpKind.ADD, OpKind.DIVIDE, OpKind.MULTIPLY, OpKind.SUBTRACT, OpKind.MODULO])

    def test_functions_and_constants(self):
        tokens = lex("sqrt(pi)")
        self.assertEqual(tokens[0].type, TokenType.FUNCTION)
        self.assertEqual(tokens[0].value, FunctionKind.SQRT)
        self.assertEqual(tokens[2].type, TokenType.CONSTANT)
        self.assertEqual(tokens[2].value, "pi")

        self.assertEqual(lex("π")[0].value, "pi")
        self.assertEqual(lex("e")[0].value, "e")

    def test_conversion_keywords(self):
        self.assertEqual(self._types("5 km to m")[2], TokenType.CONVERSION)
        self.assertEqual(self._types("5 km in m")[2], TokenType.CONVERSION)

    def test_in_without_unit_is_inches(self):
        tokens = lex("5 in")
        self.assertEqual(tokens[1].type, TokenType.UNIT)
        self.assertIs(tokens[1].value, Unit.INCH)

        tokens = lex("5 in to cm")
        self.assertEqual(tokens[1].type, TokenType.UNIT)
        self.assertEqual(tokens[2].type, TokenType.CONVERSION)

    def test_percent_and_of(self):
        self.assertEqual(
            self._types("10% of 50"),
            [TokenType.NUMBER, TokenType.PERCENT, TokenType.OF, TokenType.NUMBER, TokenType.EOF]
        )

    def test_percent_before_operand_is_modulo(self):
        for source in ["10 % 3", "10%(3)", "10 % pi", "10 % sqrt 4", "10 % m"]:
            token = lex(source)[1]
            self.assertEqual(token.type, TokenType.OPERATOR, source)
            self.assertEqual(token.value, OpKind.MODULO, source)
            self.assertEqual(token.lexeme, "%", source)

    def test_percent_elsewhere_stays_percent(self):
        for source in ["10%", "10% of 5", "10% * 2", "10%!", "(10%)"]:
            types = self._types(source)
            self.assertIn(TokenType.PERCENT, types, source)
            self.assertNotIn(OpKind.MODULO, [token.value for token in lex(source)], source)

    def test_foot_inch_marks(self):
        self.assertEqual(
            self._types("6'4\""),
            [TokenType.NUMBER, TokenType.FOOT_MARK, TokenType.NUMBER, TokenType.INCH_MARK, TokenType.EOF]
        )
        self.assertEqual(self._types("6′4″")[1], TokenType.FOOT_MARK)
        self.assertEqual(self._types("6′4″")[3], TokenType.INCH_MARK)

    def test_implicit_multiplication(self):
        tokens = lex("2(3)")
        self.assertEqual(tokens[1].type, TokenType.OPERATOR)
        self.assertTrue(tokens[1].is_implicit)
        self.assertEqual(tokens[1].value, OpKind.MULTIPLY)

        self.assertTrue(lex("2pi")[1].is_implicit)
        self.assertTrue(lex("(1)(2)")[3].is_implicit)
        self.assertTrue(lex("(2) m")[3].is_implicit)
        self.assertTrue(lex("2 sqrt 4")[1].is_implicit)

    def test_number_followed_by_unit_is_not_multiplication(self):
        tokens = lex("2 m")
        self.assertFalse(any(token.is_implicit for token in tokens))

    def test_locations(self):
        tokens = lex("1 +\n 22")
        self.assertEqual(tokens[0].location.column, 1)
        self.assertEqual(tokens[1].location.column, 3)
        self.assertEqual(tokens[2].location.line, 2)
        self.assertEqual(tokens[2].location.column, 2)
        self.assertEqual(tokens[2].location.offset, 5)

    def test_tokenize_is_repeatable(self):
        lexer = Lexer("1 + 2")
        first = lexer.tokenize()
        second = lexer.tokenize()
        self.assertEqual([str(token) for token in first], [str(token) for token in second])

    def test_token_repr(self):
        token = lex("km")[0]
        self.assertIsInstance(token, Token)
        self.assertIn("UNIT", repr(token))
        self.assertIn("'km'", str(token))


class TestLexerErrors(unittest.TestCase):
    """Test cases for lexer error reporting."""

    def _error(self, source: str) -> LexerError:
        with self.assertRaises(LexerError) as context:
            lex(source)
        return context.exception

    def test_empty_input(self):
        self.assertEqual(self._error("").code, "L002")
        self.assertEqual(self._error("   ").code, "L002")
        self.assertEqual(self._error(" , ,").code, "L002")

    def test_invalid_numbers(self):
        self.assertEqual(self._error("1.2.3").code, "L003")
        self.assertEqual(self._error("1 + .").code, "L003")
        self.assertEqual(self._error("1E+9999999999999999999").code, "L003")

    def test_invalid_character(self):
        error = self._error("2 × 3")
        self.assertEqual(error.code, "L001")
        self.assertEqual(error.diagnostic.suggestions, ["*"])
        self.assertEqual(error.location.column, 3)

    def test_unknown_word(self):
        error = self._error("5 meterz")
        self.assertEqual(error.code, "L004")
        self.assertIn("meters", error.diagnostic.suggestions)
        self.assertIn("meterz", str(error))

    def test_misplaced_marks(self):
        self.assertEqual(self._error("(6)'4\"").code, "L005")
        self.assertEqual(self._error("6'4!\"").code, "L005")
        self.assertEqual(self._error("6 '").code, "L005")
        self.assertEqual(self._error("4\"6'").code, "L005")

    def test_repeated_percent(self):
        self.assertEqual(self._error("5%%").code, "L006")
        self.assertEqual(self._error("5% %").code, "L006")

    def test_named_number_order(self):
        error = self._error("1 million thousand")
        self.assertEqual(error.code, "L007")
        self.assertEqual(error.location.column, 11)

    def test_named_number_without_number(self):
        self.assertEqual(self._error("million").code, "L008")
        self.assertEqual(self._error("5 m thousand").code, "L008")

    def test_error_rendering(self):
        rendered = str(self._error("5 meterz"))
        self.assertTrue(rendered.startswith("ERROR[L004]: Unrecognized word 'meterz'"))
        self.assertIn("--> line 1, column 3", rendered)


if __name__ == "__main__":
    unittest.main()
