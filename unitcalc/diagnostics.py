"""
Diagnostics shared by every stage of the calculator.

Lexer, parser and evaluator errors all carry a ``Diagnostic`` with the
source location, an error code and optional help text, so callers can
report any failure the same way.

Author: xwest
"""

from typing import Optional, List
from dataclasses import dataclass


@dataclass(frozen=True)
class SourceLocation:
    """
    A position in the input text.

    Lines and columns are 1-based, offset is the 0-based character index.
    """
    line: int
    column: int
    offset: int

    def __str__(self) -> str:
        return f"line {self.line}, column {self.column}"

    def __repr__(self) -> str:
        return f"SourceLocation({self.line}, {self.column}, {self.offset})"


@dataclass
class Diagnostic:
    """A single error report tied to a place in the input."""
    message: str
    location: Optional[SourceLocation]
    severity: str  # "error" or "warning"
    code: Optional[str] = None
    help_text: Optional[str] = None
    suggestions: Optional[List[str]] = None

    def __str__(self) -> str:
        prefix = self.severity.upper()
        if self.code:
            prefix += f"[{self.code}]"
        result = f"{prefix}: {self.message}"

        if self.location is not None:
            result += f"\n  --> {self.location}"

        if self.help_text:
            result += f"\n  help: {self.help_text}"

        if self.suggestions:
            result += "\n  suggestions:"
            for suggestion in self.suggestions:
                result += f"\n    - {suggestion}"

        return result


class CalcError(Exception):
    """
    Base class for every error raised while evaluating an expression.

    Subclasses only differ by the stage that raised them; all of them
    expose ``diagnostic``, ``code`` and ``location``.
    """

    stage = "calculation"

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        code: Optional[str] = None,
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None
    ):
        super().__init__(message)
        self.message = message
        self.diagnostic = Diagnostic(
            message=message,
            location=location,
            severity="error",
            code=code,
            help_text=help_text,
            suggestions=suggestions
        )

    @property
    def code(self) -> Optional[str]:
        return self.diagnostic.code

    @property
    def location(self) -> Optional[SourceLocation]:
        return self.diagnostic.location

    def __str__(self) -> str:
        return str(self.diagnostic)


def edit_distance(s1: str, s2: str) -> int:
    """Calculate Levenshtein distance between two strings."""
    if len(s1) < len(s2):
        return edit_distance(s2, s1)

    if len(s2) == 0:
        return len(s1)

    previous_row = list(range(len(s2) + 1))
    for i, c1 in enumerate(s1):
        current_row = [i + 1]
        for j, c2 in enumerate(s2):
            insertions = previous_row[j + 1] + 1
            deletions = current_row[j] + 1
            substitutions = previous_row[j] + (c1 != c2)
            current_row.append(min(insertions, deletions, substitutions))
        previous_row = current_row

    return previous_row[-1]
