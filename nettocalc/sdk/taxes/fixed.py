"""Fixed-point decimal helpers for the wage-tax procedure.

The published procedure states a rounding direction for every rescaling
step: either truncate (toward zero) or round away from zero. Nothing in
the calculation uses floats or banker's rounding.

Plain ``Decimal`` operators cover add/subtract/multiply/compare; this
module only adds the operations that need an explicit scale.
"""

from decimal import Decimal, ROUND_DOWN, ROUND_UP
from enum import Enum
from typing import Optional, Union

from ..errors import InvariantViolation

ZERO = Decimal(0)
ONE = Decimal(1)

Number = Union[Decimal, int]


class Rounding(str, Enum):
    """Rounding directions allowed by the procedure."""

    DOWN = ROUND_DOWN  # toward zero
    UP = ROUND_UP      # away from zero


def set_scale(value: Decimal, places: int, rounding: Rounding) -> Decimal:
    """Rescale ``value`` to ``places`` decimal places.

    Example:
        set_scale(Decimal("394.66596"), 2, Rounding.DOWN)  # -> Decimal("394.66")
        set_scale(Decimal("394.661"), 2, Rounding.UP)      # -> Decimal("394.67")
    """
    return value.quantize(ONE.scaleb(-places), rounding=Rounding(rounding).value)


def divide(
    dividend: Number,
    divisor: Number,
    places: Optional[int] = None,
    rounding: Optional[Rounding] = None,
) -> Decimal:
    """Divide and, when ``places`` is given, rescale in the given direction.

    Raises:
        InvariantViolation: If ``divisor`` is zero
        ValueError: If ``places`` is given without a rounding direction
    """
    divisor = Decimal(divisor)
    if divisor == ZERO:
        raise InvariantViolation(f"division of {dividend} by zero")

    quotient = Decimal(dividend) / divisor
    if places is None:
        return quotient
    if rounding is None:
        raise ValueError("a rounding direction is required when rescaling")
    return set_scale(quotient, places, rounding)


def to_int(value: Decimal) -> int:
    """Integer part of ``value`` (truncated toward zero)."""
    return int(value)
