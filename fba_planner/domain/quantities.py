"""
Unit rounding helpers shared by the planners.

Sales velocities are decimals (2 places) stored as floats, so products like
0.1 x 30 come out as 3.0000000000000004. Rounding to UNIT_PRECISION places
before ceiling keeps such products from being bumped by a whole unit.
"""
import math

UNIT_PRECISION = 6


def ceil_units(value: float) -> int:
    """
    Round a projected quantity up to whole units.

    Examples:
        >>> ceil_units(0.1 * 30)
        3
        >>> ceil_units(300.2)
        301
    """
    return math.ceil(round(value, UNIT_PRECISION))
