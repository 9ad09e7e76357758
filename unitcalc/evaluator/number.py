"""
The value type every evaluation produces.
"""

from decimal import Decimal
from typing import Optional
from dataclasses import dataclass

from ..units import Dimension, Unit, dimension_of


@dataclass(frozen=True)
class Number:
    """
    A decimal value with an optional unit.

    ``unit`` is None for dimensionless numbers. Equality compares values
    numerically, so ``Number(Decimal("5.0"))`` equals ``Number(Decimal(5))``.
    """
    value: Decimal
    unit: Optional[Unit] = None

    @property
    def dimension(self) -> Dimension:
        return dimension_of(self.unit)

    @property
    def is_dimensionless(self) -> bool:
        return self.unit is None

    def with_value(self, value: Decimal) -> 'Number':
        return Number(value, self.unit)

    def __str__(self) -> str:
        if self.unit is None:
            return str(self.value)
        return f"{self.value} {self.unit}"
