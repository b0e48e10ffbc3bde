"""Integer grid alignment. Python's ``%`` already yields a non-negative
remainder for a positive modulus, which is what negative coordinates need."""
from __future__ import annotations

import math


def _remainder(value: int, factor: int) -> int:
    if factor <= 0:
        raise ValueError(f"alignment factor must be positive, got {factor}")
    return ((value % factor) + factor) % factor


def align_up(value: int, factor: int) -> int:
    """Least multiple of ``factor`` that is >= ``value``."""
    rem = _remainder(value, factor)
    return value if rem == 0 else value + (factor - rem)


def align_down(value: int, factor: int) -> int:
    """Greatest multiple of ``factor`` that is <= ``value``."""
    return value - _remainder(value, factor)


def snap_down(value: float, factor: int) -> int:
    """Column/row containing ``value``: floor to the grid, as an int."""
    return int(math.floor(value // factor)) * factor
