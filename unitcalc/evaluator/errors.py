"""
Evaluation error handling for unitcalc.

Each failure class of the evaluator has its own exception type so callers
can tell a unit mismatch from a domain error without parsing messages.

Author: xwest
"""

from typing import Optional, List

from ..diagnostics import CalcError, SourceLocation
from ..parser.ast_nodes import ASTNode


class EvalError(CalcError):
    """
    Exception raised when a well-formed expression cannot be evaluated.

    Keeps the node being evaluated when the error was raised.
    """

    stage = "evaluation"
    default_code: Optional[str] = None

    def __init__(
        self,
        message: str,
        node: Optional[ASTNode] = None,
        code: Optional[str] = None,
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None,
        location: Optional[SourceLocation] = None
    ):
        if location is None and node is not None:
            location = node.span.start
        super().__init__(message, location, code or self.default_code, help_text, suggestions)
        self.node = node


class IncompatibleUnitsError(EvalError):
    """Operands or function arguments whose dimensions cannot be combined."""
    default_code = "E001"


class DivisionByZeroError(EvalError):
    default_code = "E002"


class InvalidExponentError(EvalError):
    """Exponent with a unit or a fractional part, or a base that cannot be raised."""
    default_code = "E003"


class InvalidFactorialError(EvalError):
    default_code = "E004"


class DomainError(EvalError):
    """Argument outside a function's domain, or a result beyond the decimal range."""
    default_code = "E005"


class ConversionError(EvalError):
    """Conversion to a unit of another dimension."""
    default_code = "E006"


# Error codes for categorization
EVAL_ERROR_CODES = {
    "E001": "Incompatible units",
    "E002": "Division by zero",
    "E003": "Invalid exponent",
    "E004": "Invalid factorial",
    "E005": "Domain error",
    "E006": "Invalid conversion",
}
