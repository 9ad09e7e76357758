"""
Conversions between units of the same dimension.

Linear units scale by their weight; temperatures go through Celsius
with an affine transform.

Author: xwest
"""

from decimal import Decimal
from typing import Optional

from .dimensions import Dimension
from .registry import UNITS, Unit, UnitDefinition


def definition_of(unit: Unit) -> UnitDefinition:
    return UNITS.definition(unit)


def dimension_of(unit: Optional[Unit]) -> Dimension:
    """Dimension of a unit; a missing unit is dimensionless."""
    if unit is None:
        return Dimension.NO_UNIT
    return UNITS.definition(unit).dimension


def base_unit(dimension: Dimension) -> Optional[Unit]:
    """The unit every other unit of ``dimension`` is weighted against."""
    return UNITS.base_units.get(dimension)


def to_base(unit: Optional[Unit], value: Decimal) -> Decimal:
    """Express ``value`` (given in ``unit``) in the base unit of its dimension."""
    if unit is None:
        return value
    definition = UNITS.definition(unit)
    if definition.is_affine:
        return (value - definition.offset) / definition.weight
    return value * definition.weight


def from_base(unit: Optional[Unit], value: Decimal) -> Decimal:
    """Inverse of ``to_base``."""
    if unit is None:
        return value
    definition = UNITS.definition(unit)
    if definition.is_affine:
        return value * definition.weight + definition.offset
    return value / definition.weight


def convert(value: Decimal, from_unit: Unit, to_unit: Unit) -> Decimal:
    """
    Convert ``value`` between two units of the same dimension.

    Raises:
        ValueError: if the units measure different dimensions
    """
    if from_unit is to_unit:
        return value

    from_dimension = dimension_of(from_unit)
    to_dimension = dimension_of(to_unit)
    if from_dimension is not to_dimension:
        raise ValueError(f"Cannot convert {from_dimension} ({from_unit}) to {to_dimension} ({to_unit})")

    return from_base(to_unit, to_base(from_unit, value))


def finer_unit(a: Unit, b: Unit) -> Unit:
    """
    The unit with the smaller weight, which sums and differences are shown in.

    Ties and temperatures keep ``a``.
    """
    definition_a = UNITS.definition(a)
    definition_b = UNITS.definition(b)
    if definition_a.is_affine or definition_b.weight >= definition_a.weight:
        return a
    return b


def singular_name(unit: Unit) -> str:
    return UNITS.definition(unit).singular


def plural_name(unit: Unit) -> str:
    return UNITS.definition(unit).plural
