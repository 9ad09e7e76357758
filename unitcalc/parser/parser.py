"""
unitcalc Pratt Parser Implementation

Implements a top-down operator precedence (Pratt) parser for calculator
expressions: arithmetic with units, postfix factorial and percent,
function calls, the 6'4" foot-inch form, "of" phrases and unit
conversions.

Author: xwest
"""

from decimal import Decimal
from typing import List, Dict, Callable
from enum import IntEnum

from ..diagnostics import SourceLocation
from ..lexer.tokens import Token, TokenType, OpKind, PostfixKind
from ..lexer.lexer import lex
from ..units import Unit
from .ast_nodes import (
    Expression, Literal, Constant, BinaryOp, UnaryOp, Postfix,
    FunctionCall, Conversion, FootInch, SourceSpan
)
from .errors import (
    ParseError, create_unexpected_token_error, create_empty_group_error,
    create_missing_operand_error, create_unexpected_eof_error,
    create_trailing_operator_error, create_invalid_conversion_error
)


class Precedence(IntEnum):
    """Operator precedence levels for Pratt parsing."""
    NONE = 0
    CONVERSION = 1      # to, in
    OF = 2              # of
    TERM = 3            # +, -
    FACTOR = 4          # *, /, mod, implicit multiplication
    UNARY = 5           # prefix -, +
    POWER = 6           # ^ (right associative)
    POSTFIX = 7         # !, %
    PRIMARY = 8         # literals, constants, calls, parentheses


_OPERATOR_PRECEDENCE = {
    OpKind.ADD: Precedence.TERM,
    OpKind.SUBTRACT: Precedence.TERM,
    OpKind.MULTIPLY: Precedence.FACTOR,
    OpKind.DIVIDE: Precedence.FACTOR,
    OpKind.MODULO: Precedence.FACTOR,
    OpKind.POWER: Precedence.POWER,
}

# tokens a trailing-operator tolerant parse drops from the end of the input
_TRAILING_DROPPABLE = {TokenType.OPERATOR, TokenType.OF, TokenType.LEFT_PAREN}


class Parser:
    """
    unitcalc Pratt parser.

    Builds one expression tree from the lexer's tokens or raises
    ``ParseError``; there is no recovery or partial result.
    """

    def __init__(self, tokens: List[Token], allow_trailing_operators: bool = False):
        """
        Initialize parser with a list of tokens.

        Args:
            tokens: List of tokens from the lexer, ending with EOF
            allow_trailing_operators: Drop operators left dangling at the end of
                the input instead of failing, for use while the input is still
                being typed
        """
        self.allow_trailing_operators = allow_trailing_operators
        self.tokens = self._prepare(tokens)
        self.current = 0

        self._init_parsing_tables()

    def _init_parsing_tables(self):
        """Initialize Pratt parsing tables."""
        self.prefix_parsers: Dict[TokenType, Callable[[Token], Expression]] = {
            TokenType.NUMBER: self._parse_number,
            TokenType.UNIT: self._parse_unit,
            TokenType.CONSTANT: self._parse_constant,
            TokenType.FUNCTION: self._parse_function_call,
            TokenType.LEFT_PAREN: self._parse_grouping,
            TokenType.OPERATOR: self._parse_unary,
        }

        self.infix_parsers: Dict[TokenType, Callable[[Expression, Token], Expression]] = {
            TokenType.OPERATOR: self._parse_binary,
            TokenType.OF: self._parse_binary,
            TokenType.CONVERSION: self._parse_conversion,
            TokenType.BANG: self._parse_postfix,
            TokenType.PERCENT: self._parse_postfix,
        }

        self.precedences: Dict[TokenType, Precedence] = {
            TokenType.OF: Precedence.OF,
            TokenType.CONVERSION: Precedence.CONVERSION,
            TokenType.BANG: Precedence.POSTFIX,
            TokenType.PERCENT: Precedence.POSTFIX,
        }

    # ========================================================================
    # Token stream preparation
    # ========================================================================

    def _prepare(self, tokens: List[Token]) -> List[Token]:
        """Apply trailing-operator handling and implicit parenthesis completion."""
        if not tokens or tokens[-1].type != TokenType.EOF:
            raise ValueError("token list must end with an EOF token")

        eof = tokens[-1]
        body = list(tokens[:-1])

        if self.allow_trailing_operators:
            while body and body[-1].type in _TRAILING_DROPPABLE:
                body.pop()
        elif body and body[-1].type in (TokenType.OPERATOR, TokenType.OF):
            raise create_trailing_operator_error(body[-1])

        return self._complete_parentheses(body) + [eof]

    @staticmethod
    def _complete_parentheses(body: List[Token]) -> List[Token]:
        """
        Balance parentheses the way a user most likely meant them.

        A ')' without a partner gets a '(' at the very start, a '(' without
        a partner gets a ')' at the very end: "1+2)*3" reads as "(1+2)*3".
        """
        depth = 0
        missing_open = 0
        for token in body:
            if token.type == TokenType.LEFT_PAREN:
                depth += 1
            elif token.type == TokenType.RIGHT_PAREN:
                if depth == 0:
                    missing_open += 1
                else:
                    depth -= 1

        if not missing_open and not depth:
            return body

        start = body[0].location
        end = body[-1].location
        opening = [Token(TokenType.LEFT_PAREN, "", None, start) for _ in range(missing_open)]
        closing = [Token(TokenType.RIGHT_PAREN, "", None, end) for _ in range(depth)]
        return opening + body + closing

    # ========================================================================
    # Entry point
    # ========================================================================

    def parse(self) -> Expression:
        """
        Parse the token stream into a single expression.

        Returns:
            Root expression node

        Raises:
            ParseError: If the tokens do not form exactly one expression
        """
        if self._is_at_end():
            raise create_missing_operand_error(self._peek())

        expression = self._parse_precedence(Precedence.CONVERSION)

        if not self._is_at_end():
            raise create_unexpected_token_error(self._peek(), "an operator or end of input")

        return expression

    def _parse_precedence(self, precedence: Precedence) -> Expression:
        """Parse an expression whose operators bind at least as tightly as ``precedence``."""
        token = self._advance()
        prefix_parser = self.prefix_parsers.get(token.type)

        if prefix_parser is None:
            if token.type == TokenType.EOF:
                raise create_unexpected_eof_error(token, "where an operand was expected")
            raise create_missing_operand_error(token)

        left = prefix_parser(token)

        while precedence <= self._get_precedence(self._peek()):
            token = self._advance()
            left = self.infix_parsers[token.type](left, token)

        return left

    def _get_precedence(self, token: Token) -> Precedence:
        if token.type == TokenType.OPERATOR:
            return _OPERATOR_PRECEDENCE[token.value]
        return self.precedences.get(token.type, Precedence.NONE)

    # ========================================================================
    # Prefix parsers
    # ========================================================================

    def _parse_number(self, token: Token) -> Expression:
        """Number literal, with an attached unit or foot/inch marks."""
        if self._check(TokenType.UNIT):
            unit_token = self._advance()
            return Literal(token.value, unit_token.value, self._span_from(token.location))

        if self._check(TokenType.FOOT_MARK):
            self._advance()
            if self._check(TokenType.NUMBER) and self._check_next(TokenType.INCH_MARK):
                feet = Literal(token.value, None, self._span_from(token.location))
                inch_token = self._advance()
                self._advance()
                inches = Literal(inch_token.value, None, self._span_from(inch_token.location))
                return FootInch(feet, inches, self._span_from(token.location))
            return Literal(token.value, Unit.FOOT, self._span_from(token.location))

        if self._check(TokenType.INCH_MARK):
            self._advance()
            return Literal(token.value, Unit.INCH, self._span_from(token.location))

        return Literal(token.value, None, self._span_from(token.location))

    def _parse_unit(self, token: Token) -> Expression:
        """A bare unit means one of it: "km to m" is "1 km to m"."""
        return Literal(Decimal(1), token.value, self._span_from(token.location))

    def _parse_constant(self, token: Token) -> Expression:
        return Constant(token.value, self._span_from(token.location))

    def _parse_function_call(self, token: Token) -> Expression:
        """Function name followed by a parenthesised group or a tightly bound operand."""
        if self._check(TokenType.LEFT_PAREN):
            argument = self._parse_grouping(self._advance())
        else:
            argument = self._parse_precedence(Precedence.POWER)
        return FunctionCall(token.value, argument, self._span_from(token.location))

    def _parse_grouping(self, token: Token) -> Expression:
        if self._check(TokenType.RIGHT_PAREN):
            raise create_empty_group_error(self._peek())

        expression = self._parse_precedence(Precedence.CONVERSION)
        self._consume(TokenType.RIGHT_PAREN, "')'")
        return expression

    def _parse_unary(self, token: Token) -> Expression:
        if token.value not in (OpKind.ADD, OpKind.SUBTRACT):
            raise create_missing_operand_error(token)

        # operand excludes * and / but includes ^, so -3^2 is -(3^2)
        operand = self._parse_precedence(Precedence.UNARY)
        return UnaryOp(token.value, operand, self._span_from(token.location))

    # ========================================================================
    # Infix and postfix parsers
    # ========================================================================

    def _parse_binary(self, left: Expression, operator: Token) -> Expression:
        precedence = self._get_precedence(operator)
        if self._is_at_end():
            raise create_trailing_operator_error(operator)

        if operator.value == OpKind.POWER:
            right = self._parse_precedence(precedence)
        else:
            right = self._parse_precedence(Precedence(precedence + 1))

        return BinaryOp(left, operator.value, right, self._span_from(left.span.start))

    def _parse_conversion(self, left: Expression, keyword: Token) -> Expression:
        if not self._check(TokenType.UNIT):
            raise create_invalid_conversion_error(keyword, self._peek())

        target = self._advance()
        return Conversion(left, target.value, self._span_from(left.span.start))

    def _parse_postfix(self, left: Expression, token: Token) -> Expression:
        kind = PostfixKind.FACTORIAL if token.type == TokenType.BANG else PostfixKind.PERCENT
        return Postfix(kind, left, self._span_from(left.span.start))

    # ========================================================================
    # Helper methods
    # ========================================================================

    def _span_from(self, start: SourceLocation) -> SourceSpan:
        return SourceSpan(start, self._previous().location)

    def _check(self, token_type: TokenType) -> bool:
        """Check if current token is of given type."""
        return self._peek().type == token_type

    def _check_next(self, token_type: TokenType) -> bool:
        if self.current + 1 >= len(self.tokens):
            return False
        return self.tokens[self.current + 1].type == token_type

    def _advance(self) -> Token:
        """Consume and return current token."""
        if not self._is_at_end():
            self.current += 1
            return self._previous()
        return self._peek()

    def _is_at_end(self) -> bool:
        return self._peek().type == TokenType.EOF

    def _peek(self) -> Token:
        return self.tokens[self.current]

    def _previous(self) -> Token:
        return self.tokens[max(self.current - 1, 0)]

    def _consume(self, token_type: TokenType, expected: str) -> Token:
        """Consume token of expected type or raise error."""
        if self._check(token_type):
            return self._advance()
        if self._is_at_end():
            raise create_unexpected_eof_error(self._peek(), f"while looking for {expected}")
        raise create_unexpected_token_error(self._peek(), expected)


def parse(tokens: List[Token], allow_trailing_operators: bool = False) -> Expression:
    """
    Parse a token list into an expression tree.

    Raises:
        ParseError: If the tokens do not form a valid expression
    """
    return Parser(tokens, allow_trailing_operators).parse()


def parse_string(source: str, allow_trailing_operators: bool = False) -> Expression:
    """
    Convenience function to lex and parse an expression string.

    Raises:
        LexerError: If lexing fails
        ParseError: If parsing fails
    """
    return parse(lex(source), allow_trailing_operators)
