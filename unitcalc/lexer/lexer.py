"""
Lexer for unitcalc expressions.

Turns an input line into tokens: numbers (with named-number scaling such
as "3 million"), units matched greedily over multi-word names, operators
in symbol and word form, functions, constants, and the foot/inch marks of
the 6'4" notation. Implicit multiplication markers are inserted once the
whole input has been read.

Author: xwest
"""

import re
from decimal import Decimal, MAX_EMAX, MIN_EMIN
from typing import List, NamedTuple, Optional, Tuple

from ..diagnostics import SourceLocation
from ..units import UNITS, Unit
from .tokens import (
    Token, TokenType, OpKind, KEYWORDS, IN_KEYWORD, NAMED_NUMBERS,
    OPERATORS, FOOT_MARKS, INCH_MARKS, SEPARATORS
)
from .errors import (
    LexerError, create_invalid_character_error, create_empty_input_error,
    create_invalid_number_error, create_unknown_word_error,
    create_misplaced_mark_error, create_repeated_percent_error,
    create_named_number_order_error, create_dangling_named_number_error
)


class _Word(NamedTuple):
    text: str
    end: int
    synthetic: bool  # "per" standing in for a '/'


# token kinds on either side of an implicit multiplication
_MULTIPLY_AFTER = {TokenType.NUMBER, TokenType.RIGHT_PAREN, TokenType.CONSTANT}
_MULTIPLY_BEFORE = {TokenType.LEFT_PAREN, TokenType.FUNCTION, TokenType.CONSTANT}
_MULTIPLY_AFTER_GROUP = {TokenType.RIGHT_PAREN, TokenType.CONSTANT}
_MULTIPLY_BEFORE_GROUP = {TokenType.UNIT, TokenType.NUMBER}

_POWER_SUFFIXES = {'2', '3', '²', '³'}

# a percent sign followed by one of these is the modulo operator
_MODULO_OPERANDS = {
    TokenType.NUMBER, TokenType.CONSTANT, TokenType.FUNCTION, TokenType.UNIT, TokenType.LEFT_PAREN
}


class Lexer:
    """
    Lexical analyzer for calculator input.

    Fails on the first error with a ``LexerError``; it never returns a
    partial token list.
    """

    def __init__(self, source: str):
        """
        Initialize the lexer with the input text.

        Args:
            source: Expression text
        """
        self.source = source
        self.pos = 0
        self.line = 1
        self.column = 1
        self.tokens: List[Token] = []

        self._token_end = -1
        self._last_named: Optional[Tuple[str, int]] = None
        self._in_indices: List[int] = []
        self._percent_indices: List[int] = []

        self._compile_patterns()

    def _compile_patterns(self):
        self.number_pattern = re.compile(r'(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?')

    def tokenize(self) -> List[Token]:
        """
        Tokenize the whole input.

        Returns:
            List of tokens ending with an EOF token

        Raises:
            LexerError: on the first character sequence that cannot be tokenized
        """
        self.pos = 0
        self.line = 1
        self.column = 1
        self.tokens = []
        self._token_end = -1
        self._last_named = None
        self._in_indices = []
        self._percent_indices = []

        if all(char in SEPARATORS for char in self.source):
            raise create_empty_input_error(self._location())

        while True:
            self._skip_separators()
            if self.pos >= len(self.source):
                break
            self._next_token()

        self._resolve_in_keywords()
        self._resolve_percent_signs()
        tokens = self._insert_implicit_multiplication(self.tokens)
        tokens.append(Token(TokenType.EOF, "", None, self._location()))
        self.tokens = tokens
        return tokens

    def _next_token(self):
        char = self.source[self.pos]

        if char.isdecimal() or (char == '.' and self._peek().isdecimal()):
            self._tokenize_number()
        elif char == '.':
            raise create_invalid_number_error('.', self._location(), "a decimal point needs digits")
        elif char == '%':
            self._tokenize_percent()
        elif char in FOOT_MARKS or char in INCH_MARKS:
            self._tokenize_mark(char)
        elif char in OPERATORS:
            self._emit_simple(TokenType.OPERATOR, char, OPERATORS[char])
        elif char == '!':
            self._emit_simple(TokenType.BANG, char, None)
        elif char == '(':
            self._emit_simple(TokenType.LEFT_PAREN, char, None)
        elif char == ')':
            self._emit_simple(TokenType.RIGHT_PAREN, char, None)
        elif self._is_word_char(char):
            self._tokenize_phrase()
        else:
            raise create_invalid_character_error(char, self._location())

    def _tokenize_number(self):
        location = self._location()
        match = self.number_pattern.match(self.source, self.pos)
        lexeme = match.group(0)
        end = match.end()

        if end < len(self.source) and self.source[end] == '.':
            bad = self.source[self.pos:end + 1]
            raise create_invalid_number_error(bad, location, "more than one decimal point")

        value = Decimal(lexeme)
        if not value.is_zero() and not MIN_EMIN <= value.adjusted() <= MAX_EMAX:
            raise create_invalid_number_error(lexeme, location, "exponent out of range")

        self._advance_to(end)
        self._emit(Token(TokenType.NUMBER, lexeme, value, location))

    def _tokenize_percent(self):
        location = self._location()
        if self.tokens and self.tokens[-1].type == TokenType.PERCENT:
            raise create_repeated_percent_error(location)
        self._percent_indices.append(len(self.tokens))
        self._emit_simple(TokenType.PERCENT, '%', None)

    def _tokenize_mark(self, mark: str):
        location = self._location()
        is_foot = mark in FOOT_MARKS
        previous = self.tokens[-1] if self.tokens else None

        directly_after_digit = self.pos > 0 and (self.source[self.pos - 1].isdecimal()
                                                 or self.source[self.pos - 1] == '.')
        if (previous is None or previous.type != TokenType.NUMBER
                or self._token_end != self.pos or not directly_after_digit):
            raise create_misplaced_mark_error(mark, location, "it must directly follow a number")

        if is_foot and len(self.tokens) >= 2 and self.tokens[-2].type == TokenType.INCH_MARK:
            raise create_misplaced_mark_error(mark, location, "feet must come before inches")

        token_type = TokenType.FOOT_MARK if is_foot else TokenType.INCH_MARK
        self._emit_simple(token_type, mark, Unit.FOOT if is_foot else Unit.INCH)

    def _tokenize_phrase(self):
        location = self._location()
        start = self.pos
        words = self._read_phrase_words(start)

        for count in range(len(words), 0, -1):
            if words[count - 1].synthetic:
                continue
            key = tuple(word.text for word in words[:count])
            if self._emit_phrase(key, start, words[count - 1].end, location):
                return

        raise create_unknown_word_error(words[0].text, location)

    def _emit_phrase(self, key: Tuple[str, ...], start: int, end: int, location: SourceLocation) -> bool:
        """Emit the token spelled by ``key`` if it is a known phrase."""
        lowered = tuple(word.lower() for word in key)
        lexeme = self.source[start:end]

        if lowered in KEYWORDS:
            token_type, value = KEYWORDS[lowered]
            self._advance_to(end)
            self._emit(Token(token_type, lexeme, value, location))
            return True

        if lowered == IN_KEYWORD:
            # conversion or inch, settled once the following token is known
            self._advance_to(end)
            self._in_indices.append(len(self.tokens))
            self._emit(Token(TokenType.CONVERSION, lexeme, None, location))
            return True

        if len(lowered) == 1 and lowered[0] in NAMED_NUMBERS:
            self._fold_named_number(lowered[0], location)
            self._advance_to(end)
            self._token_end = end
            return True

        unit = UNITS.lookup(key)
        if unit is not None:
            self._advance_to(end)
            self._emit(Token(TokenType.UNIT, lexeme, unit, location))
            return True

        return False

    def _fold_named_number(self, word: str, location: SourceLocation):
        """Scale the preceding number literal by a named number."""
        previous = self.tokens[-1] if self.tokens else None
        if previous is None or previous.type != TokenType.NUMBER:
            raise create_dangling_named_number_error(word, location)

        exponent = NAMED_NUMBERS[word]
        if self._last_named is not None and exponent < self._last_named[1]:
            raise create_named_number_order_error(word, self._last_named[0], location)

        lexeme = self.source[previous.location.offset:self.pos].rstrip() + " " + word
        self.tokens[-1] = Token(TokenType.NUMBER, lexeme, previous.value.scaleb(exponent), previous.location)
        self._last_named = (word, exponent)

    def _read_phrase_words(self, start: int) -> List[_Word]:
        """Read up to the longest alias length of words joined by spaces, '-' or '/'."""
        text, end = self._read_word(start)
        words = [_Word(text, end, False)]

        while len(words) < UNITS.max_alias_words:
            pos = end
            while pos < len(self.source) and self.source[pos] in ' \t':
                pos += 1

            slash = False
            if pos < len(self.source) and self.source[pos] in '-/':
                slash = self.source[pos] == '/'
                pos += 1
                while pos < len(self.source) and self.source[pos] in ' \t':
                    pos += 1
            elif pos == end:
                break

            if pos >= len(self.source) or not self._is_word_char(self.source[pos]):
                break

            if slash:
                words.append(_Word("per", pos, True))
            text, end = self._read_word(pos)
            words.append(_Word(text, end, False))

        return words

    def _read_word(self, start: int) -> Tuple[str, int]:
        end = start
        while end < len(self.source) and self._is_word_char(self.source[end]):
            end += 1

        # m2, ft³: keep the power digit only when it spells a known unit
        if end < len(self.source) and self.source[end] in _POWER_SUFFIXES:
            candidate = self.source[start:end + 1]
            if UNITS.lookup((candidate,)) is not None:
                end += 1

        return self.source[start:end], end

    def _resolve_in_keywords(self):
        """Turn each tentative 'in' into a conversion when a unit follows, else into inches."""
        for index in reversed(self._in_indices):
            token = self.tokens[index]
            following = self.tokens[index + 1] if index + 1 < len(self.tokens) else None
            if following is None or following.type != TokenType.UNIT:
                self.tokens[index] = Token(TokenType.UNIT, token.lexeme, Unit.INCH, token.location)

    def _resolve_percent_signs(self):
        """Turn each '%' that precedes an operand into modulo; the rest stay percent signs."""
        for index in self._percent_indices:
            token = self.tokens[index]
            following = self.tokens[index + 1] if index + 1 < len(self.tokens) else None
            if following is not None and following.type in _MODULO_OPERANDS:
                self.tokens[index] = Token(TokenType.OPERATOR, token.lexeme, OpKind.MODULO, token.location)

    def _insert_implicit_multiplication(self, tokens: List[Token]) -> List[Token]:
        result: List[Token] = []
        for token in tokens:
            if result and self._needs_implicit_multiply(result[-1], token):
                result.append(Token(TokenType.OPERATOR, "", OpKind.MULTIPLY, token.location))
            result.append(token)
        return result

    @staticmethod
    def _needs_implicit_multiply(previous: Token, following: Token) -> bool:
        if previous.type in _MULTIPLY_AFTER and following.type in _MULTIPLY_BEFORE:
            return True
        return previous.type in _MULTIPLY_AFTER_GROUP and following.type in _MULTIPLY_BEFORE_GROUP

    def _emit(self, token: Token):
        self.tokens.append(token)
        self._token_end = self.pos
        self._last_named = None

    def _emit_simple(self, token_type: TokenType, lexeme: str, value):
        location = self._location()
        self._advance()
        self._emit(Token(token_type, lexeme, value, location))

    @staticmethod
    def _is_word_char(char: str) -> bool:
        return char.isalpha() or char == '°'

    def _location(self) -> SourceLocation:
        return SourceLocation(self.line, self.column, self.pos)

    def _skip_separators(self):
        """Skip whitespace and commas."""
        while self.pos < len(self.source) and self.source[self.pos] in SEPARATORS:
            self._advance()

    def _advance(self):
        """Advance position by one character, updating line/column."""
        if self.pos < len(self.source):
            if self.source[self.pos] == '\n':
                self.line += 1
                self.column = 1
            else:
                self.column += 1
            self.pos += 1

    def _advance_to(self, end: int):
        while self.pos < end:
            self._advance()

    def _peek(self, offset: int = 1) -> str:
        """Peek at character ahead without advancing."""
        peek_pos = self.pos + offset
        if peek_pos < len(self.source):
            return self.source[peek_pos]
        return '\0'


def lex(source: str) -> List[Token]:
    """
    Tokenize an expression.

    Args:
        source: Expression text

    Returns:
        List of tokens ending with EOF

    Raises:
        LexerError: If lexing fails
    """
    return Lexer(source).tokenize()
