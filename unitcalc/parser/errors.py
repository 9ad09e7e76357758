"""
Error handling for the unitcalc parser.

Author: xwest
"""

from typing import Optional, List

from ..diagnostics import CalcError, SourceLocation
from ..lexer.tokens import Token, TokenType


class ParseError(CalcError):
    """
    Exception raised when the token stream is not a valid expression.

    Keeps the offending token, when there is one, next to the diagnostic.
    """

    stage = "parsing"

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation],
        token: Optional[Token] = None,
        code: Optional[str] = None,
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None
    ):
        super().__init__(message, location, code, help_text, suggestions)
        self.token = token


# Error codes for categorization
PARSER_ERROR_CODES = {
    "P001": "Unexpected token",
    "P004": "Unbalanced parentheses",
    "P005": "Missing operand",
    "P010": "Unexpected end of input",
    "P013": "Trailing operator",
    "P014": "Invalid conversion target",
}


def describe_token(token: Token) -> str:
    if token.type == TokenType.EOF:
        return "end of input"
    if token.is_implicit:
        return "implicit multiplication"
    return f"'{token.lexeme}'"


def create_unexpected_token_error(token: Token, expected: Optional[str] = None) -> ParseError:
    """Create an error for a token that cannot appear where it was found."""
    message = f"Unexpected {describe_token(token)}"
    if expected:
        message += f", expected {expected}"

    return ParseError(
        message=message,
        location=token.location,
        token=token,
        code="P001"
    )


def create_empty_group_error(token: Token) -> ParseError:
    return ParseError(
        message="Parentheses with nothing inside",
        location=token.location,
        token=token,
        code="P004",
        help_text="Check that every '(' has a matching ')' around an expression."
    )


def create_missing_operand_error(token: Token) -> ParseError:
    """Create an error for a place where an operand was required."""
    return ParseError(
        message=f"Expected a number or expression, found {describe_token(token)}",
        location=token.location,
        token=token,
        code="P005"
    )


def create_unexpected_eof_error(token: Token, context: str) -> ParseError:
    return ParseError(
        message=f"Unexpected end of input {context}",
        location=token.location,
        token=token,
        code="P010"
    )


def create_trailing_operator_error(operator: Token) -> ParseError:
    """Create an error for an operator with nothing after it."""
    return ParseError(
        message=f"Operator {describe_token(operator)} is missing its right operand",
        location=operator.location,
        token=operator,
        code="P013",
        help_text="Complete the expression, or allow trailing operators."
    )


def create_invalid_conversion_error(keyword: Token, found: Token) -> ParseError:
    return ParseError(
        message=f"'{keyword.lexeme}' must be followed by a unit, found {describe_token(found)}",
        location=found.location,
        token=found,
        code="P014",
        help_text="Write the target unit after the keyword, as in '5 km to miles'."
    )
