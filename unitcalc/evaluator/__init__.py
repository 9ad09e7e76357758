"""
Evaluator for unitcalc expression trees.
"""

from .number import Number
from .evaluator import Evaluator, evaluate_ast, describe
from .errors import (
    EvalError, IncompatibleUnitsError, DivisionByZeroError, InvalidExponentError,
    InvalidFactorialError, DomainError, ConversionError, EVAL_ERROR_CODES
)

__all__ = [
    "Number",
    "Evaluator",
    "evaluate_ast",
    "describe",
    "EvalError",
    "IncompatibleUnitsError",
    "DivisionByZeroError",
    "InvalidExponentError",
    "InvalidFactorialError",
    "DomainError",
    "ConversionError",
    "EVAL_ERROR_CODES",
]
