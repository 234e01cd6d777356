from __future__ import annotations


def _trunc_div(numerator: float, denominator: float) -> int:
    """Integer division rounding toward zero, unlike ``//`` which floors."""
    quotient = abs(numerator) // abs(denominator)
    if (numerator < 0) != (denominator < 0):
        quotient = -quotient
    return int(quotient)


def _divide(numerator: float, denominator: float, integer_math: bool) -> float:
    if integer_math:
        return _trunc_div(numerator, denominator)
    return numerator / denominator

