"""The Extended Euclidean Algorithm, the arithmetic leaf of the remainder solver.

Provides the Bezout coefficients every congruence combination is built on, as well as a small self-check used to
eyeball the identity for large operands.

Typical usage example:

    u, v, c = bezout(828342, 423512344114231524)
    print(describe_bezout(828342, 423512344114231524))
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0


def bezout(x: int, y: int) -> tuple[int, int, int]:
    """Implements the Extended Euclidean Algorithm.

    Such that u*x + v*y = c, with abs(c) = gcd(x, y). Runs iteratively, keeping s11*x + s21*y = x1 and
    s12*x + s22*y = x2 true on every pass until the second remainder vanishes.

    Args:
        x: The first integer.
        y: The second integer. Must not be zero together with `x`.

    Returns:
        The Bezout coefficients and the greatest common divisor, as (u, v, c).
        The sign of `c` is left to the algorithm, it is non-negative for non-negative operands.

    Raises:
        ValueError: If both `x` and `y` are zero.
    """
    if x == 0 and y == 0:
        raise ValueError("Bezout coefficients are undefined for x = y = 0")
    x1, x2 = x, y
    s11, s21, s12, s22 = 1, 0, 0, 1
    while x2 != 0:
        k = x1 // x2
        x1, x2 = x2, x1 - k * x2
        s11, s12 = s12, s11 - k * s12
        s21, s22 = s22, s21 - k * s22
    return s11, s21, x1


def describe_bezout(x: int, y: int) -> str:
    """Renders the Bezout identity of `x` and `y` for manual verification.

    Args:
        x: The first integer.
        y: The second integer.

    Returns:
        A single line of the form "u * x + v * y = c == (gcd: c)".
    """
    u, v, c = bezout(x, y)
    return f"{u} * {x} + {v} * {y} = {u * x + v * y} == (gcd: {c})"
