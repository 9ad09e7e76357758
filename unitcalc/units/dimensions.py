"""
Physical dimensions and the algebra between them.

Every unit belongs to exactly one dimension. Multiplying or dividing two
quantities only makes sense for a closed set of dimension pairs, listed
in ``_PRODUCTS``; ``combine`` is the single place that decides.

Author: xwest
"""

from typing import Dict, Optional, Tuple
from enum import Enum


class Dimension(Enum):
    """Physical dimensions a quantity can have."""
    NO_UNIT = "no unit"
    TIME = "time"
    LENGTH = "length"
    AREA = "area"
    VOLUME = "volume"
    MASS = "mass"
    DIGITAL_STORAGE = "digital storage"
    DATA_TRANSFER_RATE = "data transfer rate"
    ENERGY = "energy"
    POWER = "power"
    ELECTRIC_CURRENT = "electric current"
    RESISTANCE = "resistance"
    VOLTAGE = "voltage"
    PRESSURE = "pressure"
    FREQUENCY = "frequency"
    SPEED = "speed"
    TEMPERATURE = "temperature"

    @property
    def is_dimensionless(self) -> bool:
        return self is Dimension.NO_UNIT

    def __str__(self) -> str:
        return self.value


# a * b = c, registered in both operand orders, together with c / a = b and c / b = a
_PRODUCTS = [
    (Dimension.LENGTH, Dimension.LENGTH, Dimension.AREA),
    (Dimension.LENGTH, Dimension.AREA, Dimension.VOLUME),
    (Dimension.SPEED, Dimension.TIME, Dimension.LENGTH),
    (Dimension.VOLTAGE, Dimension.ELECTRIC_CURRENT, Dimension.POWER),
    (Dimension.ELECTRIC_CURRENT, Dimension.RESISTANCE, Dimension.VOLTAGE),
    (Dimension.POWER, Dimension.TIME, Dimension.ENERGY),
    (Dimension.DATA_TRANSFER_RATE, Dimension.TIME, Dimension.DIGITAL_STORAGE),
]


def _build_tables() -> Tuple[Dict[Tuple[Dimension, Dimension], Dimension],
                             Dict[Tuple[Dimension, Dimension], Dimension]]:
    multiply: Dict[Tuple[Dimension, Dimension], Dimension] = {}
    divide: Dict[Tuple[Dimension, Dimension], Dimension] = {}

    for a, b, product in _PRODUCTS:
        multiply[(a, b)] = product
        multiply[(b, a)] = product
        divide[(product, a)] = b
        divide[(product, b)] = a

    return multiply, divide


_MULTIPLY_TABLE, _DIVIDE_TABLE = _build_tables()


def combine(a: Dimension, op: str, b: Dimension) -> Optional[Dimension]:
    """
    Result dimension of ``a op b``, or None when the operation is not defined.

    ``op`` is an operator symbol (``OpKind`` values compare equal to them):
    "+", "-" and "mod" need matching dimensions; "*" and "/" follow the
    compound table, with a dimensionless operand leaving the other side's
    dimension unchanged and same-dimension division giving NO_UNIT.
    """
    if op in ("+", "-", "mod"):
        return a if a is b else None

    if op == "*":
        if b.is_dimensionless:
            return a
        if a.is_dimensionless:
            return b
        return _MULTIPLY_TABLE.get((a, b))

    if op == "/":
        if b.is_dimensionless:
            return a
        if a is b:
            return Dimension.NO_UNIT
        return _DIVIDE_TABLE.get((a, b))

    return None
