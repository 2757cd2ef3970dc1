"""Zoom navigation over a plane fractal."""

from __future__ import annotations

from typing import Optional

import numpy as np

from .errors import InvalidParameterError
from .fractals import PlaneFractal, default_view
from .renderer import RenderParameters
from .viewport import ViewRect, ZoomStack, compute_zoom_rect

ZOOM_DEFAULT = 0.25
ZOOM_STEP = 0.05
ZOOM_MIN = 0.05
ZOOM_MAX = 1.0


class ZoomNavigator:
    """Track the current view of a plane fractal and its zoom history.

    ``zoom_in`` pushes the current view before rescaling, ``zoom_out`` pops
    it back and ``reset`` clears the history and restores the default view.
    """

    def __init__(self, fractal: PlaneFractal, width: int, height: int, *, iter_max: Optional[int] = None,
                 view: Optional[ViewRect] = None) -> None:
        self.fractal = fractal
        self.width = width
        self.height = height
        self.iter_max = iter_max if iter_max is not None else fractal.default_iterations
        self.home = view if view is not None else default_view(fractal, width, height)
        self.view = self.home
        self.stack = ZoomStack()

    @property
    def depth(self) -> int:
        return len(self.stack)

    def parameters(self) -> RenderParameters:
        return RenderParameters(view=self.view, width=self.width, height=self.height, iter_max=self.iter_max)

    def zoom_in(self, x: float, y: float, fraction: float = ZOOM_DEFAULT) -> ViewRect:
        new_view = compute_zoom_rect(self.view, x, y, fraction, self.width, self.height)
        self.stack.push(self.view)
        self.view = new_view
        return self.view

    def zoom_out(self) -> bool:
        previous = self.stack.pop()
        if previous is None:
            return False
        self.view = previous
        return True

    def reset(self) -> None:
        self.stack.clear()
        self.view = self.home


def clamp_zoom_fraction(fraction: float) -> float:
    return max(ZOOM_MIN, min(fraction, ZOOM_MAX))


def zoom_box(x: float, y: float, fraction: float, width: int, height: int) -> tuple[float, float, float, float]:
    """Pixel corners ``(left, bottom, right, top)`` of the zoom box around a pixel."""

    if fraction <= 0:
        raise InvalidParameterError(f"zoom fraction must be positive, got {fraction}")
    fraction = min(fraction, 1.0)
    half_width = width * fraction / 2
    half_height = height * fraction / 2
    return x - half_width, y - half_height, x + half_width, y + half_height


def edge_map(interior: np.ndarray) -> np.ndarray:
    """Mark pixels where the interior mask changes between adjacent rows."""

    return np.logical_xor(np.roll(interior, 1, axis=0), interior)


def select_zoom_center(edges: np.ndarray) -> np.ndarray:
    """Select a deterministic focus pixel ``(row, col)`` near the center of the edge map."""

    if edges.size == 0:
        return np.array([edges.shape[0] // 2, edges.shape[1] // 2], dtype=np.int64)

    height, width = edges.shape
    center_row = height // 2
    center_col = width // 2
    max_radius = max(height, width)

    for radius in range(max_radius):
        row_start = max(center_row - radius, 0)
        row_end = min(center_row + radius + 1, height)
        col_start = max(center_col - radius, 0)
        col_end = min(center_col + radius + 1, width)
        region = edges[row_start:row_end, col_start:col_end]
        if np.any(region):
            indices = np.argwhere(region)
            indices[:, 0] += row_start
            indices[:, 1] += col_start
            return _closest_to_center(indices, edges.shape)

    return np.array([center_row, center_col], dtype=np.int64)


def _closest_to_center(edge_indices: np.ndarray, shape: tuple[int, int]) -> np.ndarray:
    center = np.array([(shape[0] - 1) / 2.0, (shape[1] - 1) / 2.0], dtype=np.float64)
    indices = edge_indices.astype(np.float64, copy=False)
    distances = np.sum((indices - center) ** 2, axis=1)
    return edge_indices[int(np.argmin(distances))]
