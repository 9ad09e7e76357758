"""
Error handling for the unitcalc lexer.

Provides error reporting with source location information and
suggestions for misspelled words and look-alike characters.

Author: xwest
"""

from typing import List

from ..diagnostics import CalcError, SourceLocation, edit_distance


class LexerError(CalcError):
    """
    Exception raised when the lexer cannot tokenize the input.

    Lexing stops at the first error; no partial token list is returned.
    """

    stage = "lexing"


class ErrorRecovery:
    """Suggestion helpers used when building lexer errors."""

    @staticmethod
    def suggest_word_corrections(invalid_word: str) -> List[str]:
        """Suggest known units and keywords close to a misspelled word."""
        from .tokens import KEYWORDS, NAMED_NUMBERS
        from ..units import UNITS

        word = invalid_word.lower()
        candidates = set(UNITS.all_aliases())
        candidates.update(" ".join(key) for key in KEYWORDS)
        candidates.update(NAMED_NUMBERS)

        # short words would match half the table
        limit = 1 if len(word) <= 3 else 2
        suggestions = []
        for candidate in candidates:
            distance = edit_distance(word, candidate)
            if 0 < distance <= limit:
                suggestions.append((distance, candidate))

        return [candidate for _, candidate in sorted(suggestions)[:3]]

    @staticmethod
    def suggest_ascii_alternatives(char: str) -> List[str]:
        """Suggest supported characters for common look-alikes."""
        alternatives = {
            '×': ['*'],
            '⋅': ['*'],
            '·': ['*'],
            '∗': ['*'],
            '−': ['-'],
            '–': ['-'],
            '—': ['-'],
            '∕': ['/'],
            '＋': ['+'],
            '√': ['sqrt'],
            '∛': ['cbrt'],
            '[': ['('],
            ']': [')'],
            '{': ['('],
            '}': [')'],
        }

        return alternatives.get(char, [])


# Error codes for categorization
LEXER_ERROR_CODES = {
    "L001": "Invalid character",
    "L002": "Empty input",
    "L003": "Invalid numeric literal",
    "L004": "Unrecognized word",
    "L005": "Misplaced foot or inch mark",
    "L006": "Repeated percent sign",
    "L007": "Named number follows a larger named number",
    "L008": "Named number without a number",
}


def create_invalid_character_error(char: str, location: SourceLocation) -> LexerError:
    """Create an error for a character that cannot start any token."""
    suggestions = ErrorRecovery.suggest_ascii_alternatives(char)
    help_text = None

    if suggestions:
        help_text = f"Did you mean {' or '.join(repr(s) for s in suggestions)}?"
    elif not char.isprintable():
        help_text = f"Non-printable character (Unicode: U+{ord(char):04X}) is not allowed."

    return LexerError(
        message=f"Invalid character: '{char}'",
        location=location,
        code="L001",
        help_text=help_text,
        suggestions=suggestions or None
    )


def create_empty_input_error(location: SourceLocation) -> LexerError:
    return LexerError(
        message="Input is empty",
        location=location,
        code="L002",
        help_text="Enter an expression such as '3 m + 20 cm'."
    )


def create_invalid_number_error(lexeme: str, location: SourceLocation, reason: str) -> LexerError:
    """Create an error for a malformed number literal."""
    return LexerError(
        message=f"Invalid number '{lexeme}': {reason}",
        location=location,
        code="L003"
    )


def create_unknown_word_error(word: str, location: SourceLocation) -> LexerError:
    """Create an error for a word that is neither a unit nor a keyword."""
    suggestions = ErrorRecovery.suggest_word_corrections(word)
    help_text = None
    if suggestions:
        help_text = f"Did you mean {', '.join(repr(s) for s in suggestions)}?"

    return LexerError(
        message=f"Unrecognized word '{word}'",
        location=location,
        code="L004",
        help_text=help_text,
        suggestions=suggestions or None
    )


def create_misplaced_mark_error(mark: str, location: SourceLocation, reason: str) -> LexerError:
    """Create an error for a foot or inch mark outside the 6'4\" form."""
    return LexerError(
        message=f"Misplaced '{mark}': {reason}",
        location=location,
        code="L005",
        help_text="Foot and inch marks must directly follow a number, as in 6'4\"."
    )


def create_repeated_percent_error(location: SourceLocation) -> LexerError:
    return LexerError(
        message="Percent sign cannot follow another percent sign",
        location=location,
        code="L006"
    )


def create_named_number_order_error(word: str, previous: str, location: SourceLocation) -> LexerError:
    """Create an error for a named number smaller than the one before it."""
    return LexerError(
        message=f"'{word}' cannot follow the larger '{previous}'",
        location=location,
        code="L007",
        help_text="Write the number out, or put the larger named number last."
    )


def create_dangling_named_number_error(word: str, location: SourceLocation) -> LexerError:
    return LexerError(
        message=f"'{word}' must follow a number",
        location=location,
        code="L008",
        help_text=f"Write '1 {word}' instead."
    )
