"""Euclidean helpers used by the coprimality gate and the guaranteed fallback."""

from typing import Tuple

from inverse_mod.errors import NotCoprimeError


def gcd(a: int, b: int) -> int:
    """Return the non-negative greatest common divisor, gcd(0, 0) == 0."""
    a, b = abs(a), abs(b)
    while b != 0:
        a, b = b, a % b
    return a


def extended_gcd(a: int, b: int) -> Tuple[int, int, int]:
    """Return (coef_x, coef_y, g) such that coef_x*a + coef_y*b == g."""
    x0, x1, y0, y1 = 1, 0, 0, 1
    while b != 0:
        q, (a, b) = a // b, (b, a % b)
        x0, x1 = x1, x0 - q * x1
        y0, y1 = y1, y0 - q * y1
    if a < 0:
        return -x0, -y0, -a
    return x0, y0, a


def inverse_by_extended_gcd(base: int, modulus: int) -> int:
    """Return the inverse of base mod modulus, normalised into [0, modulus)."""
    coef_x, _, g = extended_gcd(base, modulus)
    if g != 1:
        raise NotCoprimeError(base, modulus, g)
    return coef_x % modulus
