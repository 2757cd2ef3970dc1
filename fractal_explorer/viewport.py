"""Pixel to plane mapping, zoom rectangles and the zoom history stack."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import numpy as np

from .complex_number import ComplexNumber
from .errors import InvalidParameterError


@dataclass(frozen=True)
class ViewRect:
    """The region of the complex plane currently mapped onto the screen."""

    real_min: float
    real_max: float
    imag_min: float
    imag_max: float

    def __post_init__(self) -> None:
        if not self.real_min < self.real_max:
            raise InvalidParameterError(
                f"real_min ({self.real_min}) must be smaller than real_max ({self.real_max})"
            )
        if not self.imag_min < self.imag_max:
            raise InvalidParameterError(
                f"imag_min ({self.imag_min}) must be smaller than imag_max ({self.imag_max})"
            )

    @classmethod
    def fitted(cls, real_min: float, real_max: float, imag_min: float, width: int, height: int) -> ViewRect:
        """Build a view whose imaginary span follows the screen aspect ratio."""

        _check_resolution(width, height)
        imag_max = imag_min + (real_max - real_min) * height / width
        return cls(real_min, real_max, imag_min, imag_max)

    @property
    def real_span(self) -> float:
        return self.real_max - self.real_min

    @property
    def imag_span(self) -> float:
        return self.imag_max - self.imag_min


def _check_resolution(width: int, height: int) -> None:
    if width <= 0 or height <= 0:
        raise InvalidParameterError(f"screen resolution must be positive, got {width}x{height}")


def pixel_to_plane(x: float, y: float, view: ViewRect, width: int, height: int) -> ComplexNumber:
    """Map a pixel to its point in the plane. Row 0 is ``imag_min``."""

    re = (x / width) * (view.real_max - view.real_min) + view.real_min
    im = (y / height) * (view.imag_max - view.imag_min) + view.imag_min
    return ComplexNumber(re, im)


def plane_grid(view: ViewRect, width: int, height: int) -> tuple[np.ndarray, np.ndarray]:
    """Return ``(re, im)`` arrays of shape ``(height, width)`` for every pixel.

    Element ``[y, x]`` equals :func:`pixel_to_plane` of ``(x, y)``.
    """

    _check_resolution(width, height)
    xs = (np.arange(width, dtype=np.float64) / width) * (view.real_max - view.real_min) + view.real_min
    ys = (np.arange(height, dtype=np.float64) / height) * (view.imag_max - view.imag_min) + view.imag_min
    re, im = np.meshgrid(xs, ys)
    return re, im


def compute_zoom_rect(
    view: ViewRect,
    center_x: float,
    center_y: float,
    zoom_fraction: float,
    width: int,
    height: int,
) -> ViewRect:
    """Return the view covered by a zoom box centred on a pixel.

    The box spans ``width * zoom_fraction`` by ``height * zoom_fraction``
    pixels; ``zoom_fraction`` is clamped to at most 1.0.
    """

    _check_resolution(width, height)
    if zoom_fraction <= 0:
        raise InvalidParameterError(f"zoom fraction must be positive, got {zoom_fraction}")
    zoom_fraction = min(zoom_fraction, 1.0)

    offset_width = width / 2.0 * zoom_fraction
    offset_height = height / 2.0 * zoom_fraction
    real_span = view.real_max - view.real_min
    imag_span = view.imag_max - view.imag_min

    return ViewRect(
        real_min=((center_x - offset_width) / width) * real_span + view.real_min,
        real_max=((center_x + offset_width) / width) * real_span + view.real_min,
        imag_min=((center_y - offset_height) / height) * imag_span + view.imag_min,
        imag_max=((center_y + offset_height) / height) * imag_span + view.imag_min,
    )


class ZoomStack:
    """LIFO history of views; an empty stack means the outermost view."""

    def __init__(self) -> None:
        self._items: list[ViewRect] = []

    def push(self, view: ViewRect) -> None:
        self._items.append(view)

    def pop(self) -> Optional[ViewRect]:
        if not self._items:
            return None
        return self._items.pop()

    def clear(self) -> None:
        while self.pop() is not None:
            pass

    def peek(self) -> Optional[ViewRect]:
        return self._items[-1] if self._items else None

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)

    def __repr__(self) -> str:
        return f"ZoomStack(depth={len(self._items)})"


def push_zoom(stack: ZoomStack, view: ViewRect) -> None:
    stack.push(view)


def pop_zoom(stack: ZoomStack) -> Optional[ViewRect]:
    return stack.pop()


def clear_zoom(stack: ZoomStack) -> None:
    stack.clear()
