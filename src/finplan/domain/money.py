"""Rounding and clamping helpers shared by the calculation modules."""

from decimal import Decimal, ROUND_HALF_UP


def round_to(value: float, places: int = 2) -> float:
    """Round half away from zero on the exact binary value of ``value``.

    ``Decimal(float)`` keeps every bit of the float, so ties are decided the
    same way a fixed-point display of the number would decide them rather
    than by Python's round-half-even.
    """
    exponent = Decimal(1).scaleb(-places)
    return float(Decimal(value).quantize(exponent, rounding=ROUND_HALF_UP))


def clamp_non_negative(value: float) -> float:
    """Clamp a user-entered amount, rate or count to zero from below."""
    return value if value > 0 else 0


def safe_divide(numerator: float, denominator: float) -> float:
    """Divide, returning 0 when the denominator is exactly zero."""
    if denominator == 0:
        return 0.0
    return numerator / denominator
