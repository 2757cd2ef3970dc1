"""Escape-time classifiers: Mandelbrot, Julia and Burning Ship."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable

from .colors import BLACK, ColorRGB, hsl_to_rgb
from .complex_number import ComplexNumber
from .errors import InvalidParameterError

ESCAPE_RADIUS = 2.0

# Hue bands as (start, end); the hue moves linearly from start to end with t.
MANDELBROT_HUE_BAND = (0.745098039, 0.882352941)
JULIA_HUE_BAND = (0.352941176, 0.470588235)
BURNING_SHIP_HUE_BAND = (0.0, 0.125)

JULIA_CONSTANTS = (
    ComplexNumber(0.3, 0.6),
    ComplexNumber(-0.75, 0.0),
    ComplexNumber(0.0, 1.0),
    ComplexNumber(-1.3, 0.0),
)

# (zr, zi, cr, ci) -> (zr, zi)
StepFunction = Callable[[float, float, float, float], "tuple[float, float]"]


@dataclass(frozen=True)
class EscapeResult:
    iteration_count: int
    escaped: bool


def check_iterations(iter_max: int) -> None:
    if iter_max <= 0:
        raise InvalidParameterError(f"iteration limit must be positive, got {iter_max}")


def quadratic_step(zr: float, zi: float, cr: float, ci: float) -> tuple[float, float]:
    """``z = z^2 + c``."""

    return (zr * zr - zi * zi) + cr, (zr * zi + zi * zr) + ci


def burning_ship_step(zr: float, zi: float, cr: float, ci: float) -> tuple[float, float]:
    """``z = (|Re z|, |Im z|)^2 + c``."""

    return quadratic_step(abs(zr), abs(zi), cr, ci)


def escape_iterate(z0: ComplexNumber, c: ComplexNumber, iter_max: int, step: StepFunction) -> EscapeResult:
    """Iterate ``step`` from ``z0`` until ``|z| >= 2`` or ``iter_max`` passes."""

    check_iterations(iter_max)
    zr, zi = z0.re, z0.im
    cr, ci = c.re, c.im
    iteration = 0
    while iteration < iter_max and math.sqrt(zr * zr + zi * zi) < ESCAPE_RADIUS:
        zr, zi = step(zr, zi, cr, ci)
        iteration += 1
    return EscapeResult(iteration_count=iteration, escaped=iteration < iter_max)


def iterate_mandelbrot(point: ComplexNumber, iter_max: int) -> EscapeResult:
    return escape_iterate(ComplexNumber(0.0, 0.0), point, iter_max, quadratic_step)


def iterate_julia(point: ComplexNumber, constant: ComplexNumber, iter_max: int) -> EscapeResult:
    # Seed and constant swap roles relative to Mandelbrot.
    return escape_iterate(point, constant, iter_max, quadratic_step)


def iterate_burning_ship(point: ComplexNumber, iter_max: int) -> EscapeResult:
    return escape_iterate(ComplexNumber(0.0, 0.0), point, iter_max, burning_ship_step)


def julia_constant(index: int) -> ComplexNumber:
    """Return a preset Julia constant; the index cycles through the list."""

    return JULIA_CONSTANTS[index % len(JULIA_CONSTANTS)]


def band_hue(t: float, band: tuple[float, float]) -> float:
    start, end = band
    return start + t * (end - start)


def escape_color(result: EscapeResult, iter_max: int, band: tuple[float, float]) -> ColorRGB:
    """Color an escape-time result: black inside, hue/lightness by speed outside."""

    if result.iteration_count >= iter_max:
        return BLACK
    t = result.iteration_count / iter_max
    return hsl_to_rgb(band_hue(t, band), 1.0, 0.5 * t)
