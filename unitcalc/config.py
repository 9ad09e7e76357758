"""
Runtime configuration for unitcalc.

All knobs are plain defaults on a frozen dataclass. Callers that need
different behaviour build their own ``CalcConfig`` and pass it through.

Author: xwest
"""

from dataclasses import dataclass
import decimal


@dataclass(frozen=True)
class CalcConfig:
    """Evaluation and formatting settings."""
    precision: int = 34                  # significant digits of a result, matches a 128-bit decimal
    guard_digits: int = 16               # extra working digits, rounded away at the end
    allow_trailing_operators: bool = False
    scientific_min_exponent: int = -7    # plain notation for adjusted exponents in [min, max)
    scientific_max_exponent: int = 21
    factorial_limit: int = 1000

    def __post_init__(self):
        if self.guard_digits < 0:
            raise ValueError(f"guard_digits must not be negative, got {self.guard_digits}")
        if self.precision < 1:
            raise ValueError(f"precision must be positive, got {self.precision}")
        if self.scientific_min_exponent >= self.scientific_max_exponent:
            raise ValueError("scientific_min_exponent must be below scientific_max_exponent")
        if self.factorial_limit < 0:
            raise ValueError(f"factorial_limit must not be negative, got {self.factorial_limit}")


DEFAULT_CONFIG = CalcConfig()


def decimal_context(config: CalcConfig = DEFAULT_CONFIG, working: bool = False) -> decimal.Context:
    """
    Build a decimal context for ``config``.

    The working context carries the guard digits and is what evaluation
    runs under; the plain one rounds results to ``precision``.
    """
    precision = config.precision + (config.guard_digits if working else 0)
    return decimal.Context(
        prec=precision,
        rounding=decimal.ROUND_HALF_EVEN,
        Emax=decimal.MAX_EMAX,
        Emin=decimal.MIN_EMIN,
        traps=[decimal.InvalidOperation, decimal.DivisionByZero, decimal.Overflow],
    )
