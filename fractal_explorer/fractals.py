"""Fractal variants and their presets.

Each plane fractal classifies a point with ``classify`` and turns the result
into a color with ``color``; each geometric fractal produces its primitive
list with ``primitives``. Callers dispatch on these methods only.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, Union

from .colors import ColorRGB
from .complex_number import ComplexNumber
from .errors import InvalidParameterError
from .escape_time import (
    BURNING_SHIP_HUE_BAND,
    JULIA_HUE_BAND,
    MANDELBROT_HUE_BAND,
    EscapeResult,
    escape_color,
    iterate_burning_ship,
    iterate_julia,
    iterate_mandelbrot,
    julia_constant,
)
from .geometry import Primitive, levy_curve, sierpinski_carpet, sierpinski_triangle
from .newton import DEFAULT_DEGREE, NewtonResult, compute_roots, iterate_newton, newton_color
from .viewport import ViewRect


@dataclass(frozen=True)
class Mandelbrot:
    name: ClassVar[str] = "mandelbrot"
    view_seed: ClassVar[tuple[float, float, float]] = (-2.0, 1.0, -1.1)
    default_iterations: ClassVar[int] = 50

    def classify(self, point: ComplexNumber, iter_max: int) -> EscapeResult:
        return iterate_mandelbrot(point, iter_max)

    def color(self, result: EscapeResult, iter_max: int) -> ColorRGB:
        return escape_color(result, iter_max, MANDELBROT_HUE_BAND)


@dataclass(frozen=True)
class Julia:
    constant: ComplexNumber = field(default_factory=lambda: julia_constant(0))

    name: ClassVar[str] = "julia"
    view_seed: ClassVar[tuple[float, float, float]] = (-2.0, 2.0, -1.35)
    default_iterations: ClassVar[int] = 50

    @classmethod
    def preset(cls, index: int) -> Julia:
        return cls(julia_constant(index))

    def classify(self, point: ComplexNumber, iter_max: int) -> EscapeResult:
        return iterate_julia(point, self.constant, iter_max)

    def color(self, result: EscapeResult, iter_max: int) -> ColorRGB:
        return escape_color(result, iter_max, JULIA_HUE_BAND)


@dataclass(frozen=True)
class BurningShip:
    name: ClassVar[str] = "burning-ship"
    view_seed: ClassVar[tuple[float, float, float]] = (-2.0, 1.2, -1.6)
    default_iterations: ClassVar[int] = 40

    def classify(self, point: ComplexNumber, iter_max: int) -> EscapeResult:
        return iterate_burning_ship(point, iter_max)

    def color(self, result: EscapeResult, iter_max: int) -> ColorRGB:
        return escape_color(result, iter_max, BURNING_SHIP_HUE_BAND)


@dataclass(frozen=True)
class Newton:
    degree: int = DEFAULT_DEGREE
    roots: tuple[ComplexNumber, ...] = field(init=False, repr=False, compare=False)

    name: ClassVar[str] = "newton"
    view_seed: ClassVar[tuple[float, float, float]] = (-2.0, 2.0, -1.5)
    default_iterations: ClassVar[int] = 25

    def __post_init__(self) -> None:
        object.__setattr__(self, "roots", compute_roots(self.degree))

    def classify(self, point: ComplexNumber, iter_max: int) -> NewtonResult:
        return iterate_newton(point, self.roots, iter_max)

    def color(self, result: NewtonResult, iter_max: int) -> ColorRGB:
        return newton_color(result, self.degree, iter_max)


@dataclass(frozen=True)
class LevyCurve:
    depth: int = 1

    name: ClassVar[str] = "levy"

    def primitives(self, width: int, height: int) -> list[Primitive]:
        return levy_curve(width, height, self.depth)


@dataclass(frozen=True)
class SierpinskiTriangle:
    depth: int = 1

    name: ClassVar[str] = "sierpinski-triangle"

    def primitives(self, width: int, height: int) -> list[Primitive]:
        return sierpinski_triangle(width, height, self.depth)


@dataclass(frozen=True)
class SierpinskiCarpet:
    depth: int = 1

    name: ClassVar[str] = "sierpinski-carpet"

    def primitives(self, width: int, height: int) -> list[Primitive]:
        return sierpinski_carpet(width, height, self.depth)


PlaneFractal = Union[Mandelbrot, Julia, BurningShip, Newton]
GeometricFractal = Union[LevyCurve, SierpinskiTriangle, SierpinskiCarpet]
Fractal = Union[PlaneFractal, GeometricFractal]

PLANE_FRACTALS = (Mandelbrot, Julia, BurningShip, Newton)
GEOMETRIC_FRACTALS = (LevyCurve, SierpinskiTriangle, SierpinskiCarpet)
FRACTAL_NAMES = tuple(cls.name for cls in PLANE_FRACTALS + GEOMETRIC_FRACTALS)


def is_plane_fractal(fractal: Fractal) -> bool:
    return isinstance(fractal, PLANE_FRACTALS)


def default_view(fractal: PlaneFractal, width: int, height: int) -> ViewRect:
    """The starting view for ``fractal``, fitted to the screen aspect ratio."""

    real_min, real_max, imag_min = fractal.view_seed
    return ViewRect.fitted(real_min, real_max, imag_min, width, height)


def fractal_from_name(name: str, *, julia_index: int = 0, degree: int = DEFAULT_DEGREE, depth: int = 1) -> Fractal:
    """Build a variant from its command-line name, taking only the parameters it needs."""

    if name == Mandelbrot.name:
        return Mandelbrot()
    if name == Julia.name:
        return Julia.preset(julia_index)
    if name == BurningShip.name:
        return BurningShip()
    if name == Newton.name:
        return Newton(degree)
    if name == LevyCurve.name:
        return LevyCurve(depth)
    if name == SierpinskiTriangle.name:
        return SierpinskiTriangle(depth)
    if name == SierpinskiCarpet.name:
        return SierpinskiCarpet(depth)
    raise InvalidParameterError(f"unknown fractal '{name}'. Valid choices: {', '.join(FRACTAL_NAMES)}.")
