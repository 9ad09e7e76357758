"""
Lexer package for unitcalc.
"""

from .tokens import Token, TokenType, OpKind, PostfixKind, FunctionKind
from .lexer import Lexer, lex
from .errors import LexerError, LEXER_ERROR_CODES

__all__ = [
    "Token",
    "TokenType",
    "OpKind",
    "PostfixKind",
    "FunctionKind",
    "Lexer",
    "lex",
    "LexerError",
    "LEXER_ERROR_CODES",
]
