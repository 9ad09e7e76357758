"""
unitcalc Package

A calculator for free-form expressions with physical units: unit-aware
arithmetic, explicit conversion and exact decimal results.

Architecture:
    unitcalc/
    ├── units/           # Dimensions, unit registry and conversions
    ├── lexer/           # Tokenization of expression text
    ├── parser/          # Pratt parser and expression tree
    ├── evaluator/       # Tree-walking evaluation with unit rules
    ├── formatter.py     # Result rendering
    ├── calculator.py    # evaluate() / evaluate_to_string()
    └── cli.py           # Command line and interactive prompt

Author: xwest
License: MIT
"""

__version__ = "0.1.0"
__author__ = "xwest"
__license__ = "MIT"

from .config import CalcConfig, DEFAULT_CONFIG
from .diagnostics import CalcError, Diagnostic, SourceLocation
from .lexer import Lexer, LexerError, lex
from .parser import Parser, ParseError, parse
from .evaluator import (
    Evaluator, Number, EvalError, IncompatibleUnitsError, DivisionByZeroError,
    InvalidExponentError, InvalidFactorialError, DomainError, ConversionError
)
from .units import Dimension, Unit
from .formatter import format_decimal, format_number
from .calculator import evaluate, evaluate_to_string

__all__ = [
    # Entry points
    "evaluate",
    "evaluate_to_string",
    "format_number",
    "format_decimal",

    # Core classes
    "Lexer",
    "Parser",
    "Evaluator",
    "Number",
    "Unit",
    "Dimension",
    "CalcConfig",
    "DEFAULT_CONFIG",
    "lex",
    "parse",

    # Errors
    "CalcError",
    "Diagnostic",
    "SourceLocation",
    "LexerError",
    "ParseError",
    "EvalError",
    "IncompatibleUnitsError",
    "DivisionByZeroError",
    "InvalidExponentError",
    "InvalidFactorialError",
    "DomainError",
    "ConversionError",

    # Version info
    "__version__",
    "__author__",
    "__license__",
]
