"""Recursive geometric fractals built from screen-space primitives.

Coordinates are in pixels with the origin at the bottom-left of the screen.
Every generator receives its depth explicitly and keeps no state between
calls, so the same request always yields the same primitive list.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Literal

from .colors import BLACK, WHITE, ColorRGB
from .errors import InvalidParameterError

PrimitiveKind = Literal["line", "triangle", "quad"]
Point = tuple[float, float]

MAX_LEVY_DEPTH = 16
MAX_SIERPINSKI_DEPTH = 6
DEFAULT_SHAPE_SIZE = 500.0

_SQRT3 = math.sqrt(3)


@dataclass(frozen=True)
class Primitive:
    kind: PrimitiveKind
    vertices: tuple[Point, ...]
    color: ColorRGB


def _check_depth(depth: int, minimum: int, maximum: int) -> None:
    if isinstance(depth, bool) or not isinstance(depth, int) or not minimum <= depth <= maximum:
        raise InvalidParameterError(f"depth must be an integer in [{minimum}, {maximum}], got {depth!r}")


def levy_segment(start: Point, end: Point, depth: int, color: ColorRGB = WHITE) -> list[Primitive]:
    """Replace a segment by two legs of a right isosceles triangle, ``depth - 1`` times."""

    _check_depth(depth, 1, MAX_LEVY_DEPTH)
    lines: list[Primitive] = []
    _levy(start, end, depth, color, lines)
    return lines


def _levy(start: Point, end: Point, depth: int, color: ColorRGB, out: list[Primitive]) -> None:
    (x1, y1), (x2, y2) = start, end
    if depth <= 1:
        out.append(Primitive("line", (start, end), color))
        return
    apex = (
        (x1 + x2) / 2 + (y2 - y1) / 2,
        (y1 + y2) / 2 - (x2 - x1) / 2,
    )
    _levy(start, apex, depth - 1, color, out)
    _levy(apex, end, depth - 1, color, out)


def levy_curve(width: int, height: int, depth: int) -> list[Primitive]:
    """Lévy C curve seeded on the middle third of the screen, drawn both ways."""

    a = (width / 3, height / 2)
    b = (2 * width / 3, height / 2)
    return levy_segment(a, b, depth) + levy_segment(b, a, depth)


def _triangle_hole(x: float, y: float, size: float) -> Primitive:
    # Inverted triangle joining the midpoints of the triangle at (x, y).
    half_height = size * _SQRT3 / 4
    return Primitive(
        "triangle",
        (
            (x + size / 4, y + half_height),
            (x + 3 * size / 4, y + half_height),
            (x + size / 2, y),
        ),
        BLACK,
    )


def _triangle_holes_at(x: float, y: float, size: float, level: int, out: list[Primitive]) -> None:
    """Append the holes of ``level`` inside the triangle with bottom-left corner (x, y)."""

    if level <= 1:
        out.append(_triangle_hole(x, y, size))
        return
    half = size / 2
    _triangle_holes_at(x, y, half, level - 1, out)
    _triangle_holes_at(x + half, y, half, level - 1, out)
    _triangle_holes_at(x + half / 2, y + half * _SQRT3 / 2, half, level - 1, out)


def sierpinski_triangle(width: int, height: int, depth: int, size: float = DEFAULT_SHAPE_SIZE) -> list[Primitive]:
    """White equilateral triangle with ``depth`` levels of central holes.

    All holes of level ``k`` are emitted before those of level ``k + 1``;
    level ``k`` holds ``3 ** (k - 1)`` holes.
    """

    _check_depth(depth, 0, MAX_SIERPINSKI_DEPTH)
    top = (width / 2, height / 2 + size * _SQRT3 / 4)
    base_y = top[1] - size * _SQRT3 / 2
    left = (width / 2 - size / 2, base_y)
    right = (width / 2 + size / 2, base_y)

    primitives = [Primitive("triangle", (top, left, right), WHITE)]
    for level in range(1, depth + 1):
        _triangle_holes_at(left[0], left[1], size, level, primitives)
    return primitives


def _square(x: float, y: float, side: float, color: ColorRGB) -> Primitive:
    return Primitive(
        "quad",
        ((x, y), (x + side, y), (x + side, y + side), (x, y + side)),
        color,
    )


def sierpinski_carpet(width: int, height: int, depth: int, size: float = DEFAULT_SHAPE_SIZE) -> list[Primitive]:
    """White square with the centre cell of every sub-square removed per level.

    Level ``k`` lays out a ``3 ** (k - 1)`` by ``3 ** (k - 1)`` grid of
    sub-squares and removes a cell of side ``size / 3 ** k`` from each.
    """

    _check_depth(depth, 0, MAX_SIERPINSKI_DEPTH)
    x0 = width / 2 - size / 2
    y0 = height / 2 - size / 2

    primitives = [_square(x0, y0, size, WHITE)]
    for level in range(1, depth + 1):
        cell = size / 3 ** level
        cells_per_side = 3 ** (level - 1)
        for row in range(cells_per_side):
            for col in range(cells_per_side):
                primitives.append(_square(x0 + cell + 3 * cell * col, y0 + cell + 3 * cell * row, cell, BLACK))
    return primitives
