"""Newton fractal for ``z^n - 1``: roots of unity and root classification."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Sequence

from .colors import BLACK, ColorRGB, hsl_to_rgb
from .complex_number import ComplexNumber
from .errors import InvalidParameterError
from .escape_time import check_iterations

NEWTON_PRECISION = 1e-4
DEFAULT_DEGREE = 3

# Points whose iteration never reaches a root are left as background.
NEWTON_BACKGROUND = BLACK


@dataclass(frozen=True)
class NewtonResult:
    iteration_count: int
    root_index: Optional[int]

    @property
    def converged(self) -> bool:
        return self.root_index is not None


def compute_roots(n: int) -> tuple[ComplexNumber, ...]:
    """Return the ``n``-th roots of unity, starting at ``1 + 0i``."""

    if isinstance(n, bool) or not isinstance(n, int) or n <= 0:
        raise InvalidParameterError(f"polynomial degree must be a positive integer, got {n!r}")
    return tuple(
        ComplexNumber(math.cos(2 * k * math.pi / n), math.sin(2 * k * math.pi / n))
        for k in range(n)
    )


def matching_root(z: ComplexNumber, roots: Sequence[ComplexNumber]) -> Optional[int]:
    """Index of the first root within :data:`NEWTON_PRECISION` of ``z``."""

    for index, root in enumerate(roots):
        if (z - root).modulus() <= NEWTON_PRECISION:
            return index
    return None


def newton_step(z: ComplexNumber, n: int) -> ComplexNumber:
    """One Newton step on ``z^n - 1``; ``z`` is returned unchanged at a pole."""

    if not z.modulus() > 0:
        return z
    numerator = ComplexNumber(n - 1, 0.0) * z.pow(n) + ComplexNumber(1.0, 0.0)
    denominator = ComplexNumber(n, 0.0) * z.pow(n - 1)
    if not denominator.modulus() > 0:
        return z
    return numerator / denominator


def iterate_newton(point: ComplexNumber, roots: Sequence[ComplexNumber], iter_max: int) -> NewtonResult:
    check_iterations(iter_max)
    n = len(roots)
    if n == 0:
        raise InvalidParameterError("at least one root is required")
    z = point
    iteration = 0
    while iteration < iter_max and matching_root(z, roots) is None:
        z = newton_step(z, n)
        iteration += 1
    return NewtonResult(iteration_count=iteration, root_index=matching_root(z, roots))


def newton_color(result: NewtonResult, n: int, iter_max: int) -> ColorRGB:
    """Hue by root, lightness by convergence speed; faster is brighter."""

    if result.root_index is None:
        return NEWTON_BACKGROUND
    lightness = 0.5 * (1 - result.iteration_count / iter_max)
    return hsl_to_rgb(result.root_index / n, 1.0, lightness)
