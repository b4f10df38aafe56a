import math


def sign(x: float) -> float:
    """Returns 1.0 for positive `x`, -1.0 for negative `x`, and 0.0 for zero."""
    if x > 0.0:
        return 1.0
    if x < 0.0:
        return -1.0
    return 0.0


def normalize_angle(x: float) -> float:
    """
    Maps angle `x` (radians) onto the interval [-pi, pi).

    Python's modulo takes the sign of the divisor, so no correction is
    needed for negative angles.
    """
    return (x + math.pi) % (2 * math.pi) - math.pi


def solve_quadratic(a: float, b: float, c: float) -> tuple[float, ...]:
    """
    Returns the real roots of `a * x**2 + b * x + c = 0`, sorted in
    ascending order.

    An empty tuple is returned when the discriminant is not positive, i.e. a
    double root is treated as no solution at all. The roots are computed as
    `q / a` and `c / q` with `q = -(b + sign(b) * sqrt(D)) / 2`, which avoids
    the cancellation of `-b + sqrt(D)` when `b**2 >> 4*a*c`.

    Parameters
    ----------
    a:
        Quadratic coefficient (non-zero).
    b:
        Linear coefficient.
    c:
        Constant coefficient.
    """
    disc = b * b - 4 * a * c
    if disc <= 0.0:
        return ()
    q = -0.5 * (b + math.copysign(math.sqrt(disc), b))
    x1 = q / a
    x2 = c / q
    return tuple(sorted((x1, x2)))
