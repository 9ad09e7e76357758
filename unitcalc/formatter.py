"""
Result formatting for unitcalc.

Turns a ``Number`` into the text a user sees: trailing zeros trimmed,
plain notation for everyday magnitudes and scientific notation outside
them, followed by the unit's singular or plural name.

Author: xwest
"""

from decimal import Decimal, localcontext

from .config import CalcConfig, DEFAULT_CONFIG, decimal_context
from .evaluator.number import Number
from .units import Dimension, Unit, convert, definition_of, singular_name, plural_name, to_base

# the only auto-scale target: lengths of at least one light year; every other
# magnitude and dimension keeps the unit it was computed in
_AUTO_SCALE_UNIT = Unit.LIGHT_YEAR


def format_decimal(value: Decimal, config: CalcConfig = DEFAULT_CONFIG) -> str:
    """
    Render a decimal without trailing zeros.

    Args:
        value: Value to render
        config: Supplies the precision and the plain-notation exponent range

    Returns:
        "1234.5", "0.001" or "1.5E+25"; negative zero is "0"
    """
    with localcontext(decimal_context(config)):
        normalized = value.normalize()

    if normalized.is_zero():
        return "0"

    adjusted = normalized.adjusted()
    if config.scientific_min_exponent <= adjusted < config.scientific_max_exponent:
        return format(normalized, "f")
    return format(normalized, "E")


def auto_scale(number: Number, config: CalcConfig = DEFAULT_CONFIG) -> Number:
    """Re-express very long lengths in light years; everything else is returned as is."""
    if number.dimension is not Dimension.LENGTH or number.unit is _AUTO_SCALE_UNIT:
        return number

    with localcontext(decimal_context(config, working=True)):
        meters = abs(to_base(number.unit, number.value))
        if meters < definition_of(_AUTO_SCALE_UNIT).weight:
            return number
        scaled = convert(number.value, number.unit, _AUTO_SCALE_UNIT)

    with localcontext(decimal_context(config)):
        return Number(+scaled, _AUTO_SCALE_UNIT)


def format_number(number: Number, auto_scale_units: bool = True, config: CalcConfig = DEFAULT_CONFIG) -> str:
    """
    Render a number with its unit name.

    Args:
        number: Evaluation result
        auto_scale_units: Allow re-expressing the value in a larger unit;
            off when the user asked for a unit explicitly
        config: Formatting settings

    Returns:
        Text such as "1 meter", "999 meters" or "42"
    """
    if auto_scale_units:
        number = auto_scale(number, config)

    text = format_decimal(number.value, config)
    if number.is_dimensionless:
        return text

    name = singular_name(number.unit) if number.value == 1 else plural_name(number.unit)
    return f"{text} {name}"
