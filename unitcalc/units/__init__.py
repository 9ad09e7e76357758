"""
Unit table for unitcalc.

Dimensions, the unit registry with aliases, and conversion helpers.
"""

from .dimensions import Dimension, combine
from .registry import UNITS, Unit, UnitDefinition, UnitRegistry, alias_key
from .conversion import (
    base_unit, convert, definition_of, dimension_of, finer_unit,
    from_base, plural_name, singular_name, to_base
)

__all__ = [
    "Dimension",
    "combine",
    "UNITS",
    "Unit",
    "UnitDefinition",
    "UnitRegistry",
    "alias_key",
    "base_unit",
    "convert",
    "definition_of",
    "dimension_of",
    "finer_unit",
    "from_base",
    "plural_name",
    "singular_name",
    "to_base",
]
