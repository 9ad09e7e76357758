"""
Token definitions for the unitcalc lexer.

Defines the token categories produced by the lexer together with the
closed operator, postfix and function enumerations the parser and
evaluator match on.

Author: xwest
"""

from enum import Enum, auto
from typing import Any
from dataclasses import dataclass

from ..diagnostics import SourceLocation


class TokenType(Enum):
    """Every kind of token the lexer can emit."""

    NUMBER = auto()          # 42, 3.14, .5 (value is a Decimal)
    UNIT = auto()            # km, light years, °C (value is a Unit)
    OPERATOR = auto()        # + - * / ^ mod, and the implicit multiplication marker
    FUNCTION = auto()        # sqrt, sin, round, ...
    CONSTANT = auto()        # pi, π, e

    LEFT_PAREN = auto()      # (
    RIGHT_PAREN = auto()     # )

    CONVERSION = auto()      # to, in
    PERCENT = auto()         # %
    OF = auto()              # of
    BANG = auto()            # !
    FOOT_MARK = auto()       # ' ′
    INCH_MARK = auto()       # " ″ “ ”

    EOF = auto()


class OpKind(str, Enum):
    """Binary and prefix operators. Values are the canonical spelling."""
    ADD = "+"
    SUBTRACT = "-"
    MULTIPLY = "*"
    DIVIDE = "/"
    MODULO = "mod"
    POWER = "^"
    OF = "of"


class PostfixKind(str, Enum):
    FACTORIAL = "!"
    PERCENT = "%"


class FunctionKind(str, Enum):
    """Built-in single-argument functions."""
    SQRT = "sqrt"
    CBRT = "cbrt"
    LOG = "log"
    LN = "ln"
    EXP = "exp"
    ROUND = "round"
    CEIL = "ceil"
    FLOOR = "floor"
    ABS = "abs"
    SIN = "sin"
    COS = "cos"
    TAN = "tan"


@dataclass(frozen=True)
class Token:
    """
    A lexical token.

    Holds the token type, the raw text it was read from, its semantic
    value and where it starts in the input.
    """
    type: TokenType
    lexeme: str                     # Raw text from the input, empty for synthesized tokens
    value: Any                      # Decimal, Unit, OpKind, FunctionKind or None
    location: SourceLocation

    def __str__(self) -> str:
        if self.value is not None and self.value != self.lexeme:
            return f"{self.type.name}({self.lexeme!r} -> {self.value!r})"
        return f"{self.type.name}({self.lexeme!r})"

    def __repr__(self) -> str:
        return (f"Token({self.type.name}, {self.lexeme!r}, "
                f"{self.value!r}, {self.location!r})")

    @property
    def is_implicit(self) -> bool:
        """True for tokens the lexer or parser inserted on its own."""
        return self.lexeme == "" and self.type != TokenType.EOF


# Single-character operator lookup
OPERATORS = {
    '+': OpKind.ADD,
    '-': OpKind.SUBTRACT,
    '*': OpKind.MULTIPLY,
    '/': OpKind.DIVIDE,
    '÷': OpKind.DIVIDE,
    '^': OpKind.POWER,
}

FOOT_MARKS = {"'", '′'}
INCH_MARKS = {'"', '″', '“', '”'}

# Characters that are insignificant between tokens
SEPARATORS = {' ', '\t', '\n', '\r', ','}

# Word and phrase keywords, keyed by lower-cased word tuples
KEYWORDS = {
    ('to',): (TokenType.CONVERSION, None),
    ('of',): (TokenType.OF, OpKind.OF),
    ('plus',): (TokenType.OPERATOR, OpKind.ADD),
    ('minus',): (TokenType.OPERATOR, OpKind.SUBTRACT),
    ('times',): (TokenType.OPERATOR, OpKind.MULTIPLY),
    ('multiplied', 'by'): (TokenType.OPERATOR, OpKind.MULTIPLY),
    ('divided', 'by'): (TokenType.OPERATOR, OpKind.DIVIDE),
    ('mod',): (TokenType.OPERATOR, OpKind.MODULO),
    ('per',): (TokenType.OPERATOR, OpKind.DIVIDE),
    ('pi',): (TokenType.CONSTANT, 'pi'),
    ('π',): (TokenType.CONSTANT, 'pi'),
    ('e',): (TokenType.CONSTANT, 'e'),
    ('sqrt',): (TokenType.FUNCTION, FunctionKind.SQRT),
    ('cbrt',): (TokenType.FUNCTION, FunctionKind.CBRT),
    ('log',): (TokenType.FUNCTION, FunctionKind.LOG),
    ('ln',): (TokenType.FUNCTION, FunctionKind.LN),
    ('exp',): (TokenType.FUNCTION, FunctionKind.EXP),
    ('round',): (TokenType.FUNCTION, FunctionKind.ROUND),
    ('rint',): (TokenType.FUNCTION, FunctionKind.ROUND),
    ('ceil',): (TokenType.FUNCTION, FunctionKind.CEIL),
    ('floor',): (TokenType.FUNCTION, FunctionKind.FLOOR),
    ('abs',): (TokenType.FUNCTION, FunctionKind.ABS),
    ('sin',): (TokenType.FUNCTION, FunctionKind.SIN),
    ('cos',): (TokenType.FUNCTION, FunctionKind.COS),
    ('tan',): (TokenType.FUNCTION, FunctionKind.TAN),
}

# "in" is either a conversion or the inch unit; the lexer decides from the next token
IN_KEYWORD = ('in',)

# Named numbers scale the number literal in front of them
NAMED_NUMBERS = {
    'hundred': 2,
    'thousand': 3,
    'million': 6, 'mil': 6, 'mill': 6,
    'billion': 9, 'bil': 9, 'bill': 9,
    'trillion': 12, 'tri': 12, 'tril': 12,
    'quadrillion': 15,
    'quintillion': 18,
    'sextillion': 21,
    'septillion': 24,
    'octillion': 27,
    'nonillion': 30,
    'decillion': 33,
    'undecillion': 36,
    'duodecillion': 39,
    'tredecillion': 42,
    'quattuordecillion': 45,
    'quindecillion': 48,
    'sexdecillion': 51,
    'septendecillion': 54,
    'octodecillion': 57,
    'novemdecillion': 60,
    'vigintillion': 63,
    'googol': 100,
    'centillion': 303,
}
