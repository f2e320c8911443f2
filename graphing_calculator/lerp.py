"""Linear interpolation helpers shared by the evaluator and the graph renderer."""

import math


def divide(numerator, denominator):
    """Float division with IEEE-754 results instead of ZeroDivisionError"""
    if denominator == 0:
        if numerator == 0 or math.isnan(numerator):
            return math.nan
        # -0.0 flips the sign just like hardware division would
        return math.copysign(math.inf, numerator) * math.copysign(1.0, denominator)
    return numerator / denominator


def lerp(a, b, t):
    """Interpolate from a to b; t outside [0, 1] extrapolates."""
    return a + (b - a) * t


def inv_lerp(value, a, b):
    """Inverse of lerp: where value sits between a and b (nan/inf when a == b)."""
    return divide(float(value - a), float(b - a))


def lerp_map(value, a1, b1, a2, b2):
    """Map value from the range [a1, b1] into [a2, b2]."""
    return lerp(a2, b2, inv_lerp(value, a1, b1))
