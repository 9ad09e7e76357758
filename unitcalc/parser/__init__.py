"""
Parser package for unitcalc.
"""

from .ast_nodes import (
    ASTNode, ASTNodeType, ASTVisitor, Expression, SourceSpan,
    Literal, Constant, BinaryOp, UnaryOp, Postfix, FunctionCall, Conversion, FootInch
)
from .parser import Parser, Precedence, parse, parse_string
from .errors import ParseError, PARSER_ERROR_CODES

__all__ = [
    "ASTNode",
    "ASTNodeType",
    "ASTVisitor",
    "Expression",
    "SourceSpan",
    "Literal",
    "Constant",
    "BinaryOp",
    "UnaryOp",
    "Postfix",
    "FunctionCall",
    "Conversion",
    "FootInch",
    "Parser",
    "Precedence",
    "parse",
    "parse_string",
    "ParseError",
    "PARSER_ERROR_CODES",
]
