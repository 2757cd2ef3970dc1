"""Frame rendering for the plane fractals.

Two interchangeable backends evaluate a frame: ``"scalar"`` walks the pixels
through each variant's ``classify`` and ``color``; ``"tensorflow"`` runs the
same per-point update over the whole grid with a TensorFlow while loop. Both
produce the same :class:`RenderResult`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, NamedTuple, Optional

import numpy as np
import tensorflow as tf

from .colors import ColorRGB, hsl_to_rgb_array
from .errors import InvalidParameterError
from .escape_time import (
    BURNING_SHIP_HUE_BAND,
    ESCAPE_RADIUS,
    JULIA_HUE_BAND,
    MANDELBROT_HUE_BAND,
    check_iterations,
)
from .fractals import BurningShip, Julia, Mandelbrot, Newton, PlaneFractal
from .newton import NEWTON_BACKGROUND, NEWTON_PRECISION
from .viewport import ViewRect, pixel_to_plane, plane_grid

BACKENDS = ("tensorflow", "scalar")
DEFAULT_BACKEND = "tensorflow"


@dataclass(frozen=True)
class RenderParameters:
    """Parameters that describe a single render of a plane fractal."""

    view: ViewRect
    width: int
    height: int
    iter_max: int

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise InvalidParameterError(f"screen resolution must be positive, got {self.width}x{self.height}")
        check_iterations(self.iter_max)


@dataclass(frozen=True)
class RenderResult:
    """Per-pixel results of a render. Row 0 is the bottom row of the view."""

    iterations: np.ndarray
    colors: np.ndarray
    interior: np.ndarray
    root_index: Optional[np.ndarray]
    params: RenderParameters


class PixelSample(NamedTuple):
    x: int
    y: int
    color: ColorRGB


def iter_pixels(fractal: PlaneFractal, params: RenderParameters) -> Iterator[PixelSample]:
    """Yield the color of every pixel, column by column."""

    for x in range(params.width):
        for y in range(params.height):
            point = pixel_to_plane(x, y, params.view, params.width, params.height)
            result = fractal.classify(point, params.iter_max)
            yield PixelSample(x, y, fractal.color(result, params.iter_max))


def frame_to_samples(result: RenderResult) -> Iterator[PixelSample]:
    height, width = result.iterations.shape
    for x in range(width):
        for y in range(height):
            r, g, b = (int(v) for v in result.colors[y, x])
            yield PixelSample(x, y, ColorRGB(r, g, b))


def render_frame(
    fractal: PlaneFractal,
    params: RenderParameters,
    *,
    backend: str = DEFAULT_BACKEND,
    device: Optional[str] = None,
) -> RenderResult:
    """Render ``fractal`` over the view described by ``params``."""

    if backend == "scalar":
        return _render_scalar(fractal, params)
    if backend == "tensorflow":
        return _render_tensorflow(fractal, params, device=device)
    raise InvalidParameterError(f"unknown backend '{backend}'. Valid choices: {', '.join(BACKENDS)}.")


def _render_scalar(fractal: PlaneFractal, params: RenderParameters) -> RenderResult:
    shape = (params.height, params.width)
    iterations = np.zeros(shape, dtype=np.int32)
    colors = np.zeros(shape + (3,), dtype=np.uint8)
    interior = np.zeros(shape, dtype=bool)
    is_newton = isinstance(fractal, Newton)
    root_index = np.full(shape, -1, dtype=np.int32) if is_newton else None

    for y in range(params.height):
        for x in range(params.width):
            point = pixel_to_plane(x, y, params.view, params.width, params.height)
            result = fractal.classify(point, params.iter_max)
            iterations[y, x] = result.iteration_count
            colors[y, x] = fractal.color(result, params.iter_max)
            if is_newton:
                converged = result.root_index is not None
                interior[y, x] = not converged
                if converged:
                    root_index[y, x] = result.root_index
            else:
                interior[y, x] = not result.escaped

    return RenderResult(iterations=iterations, colors=colors, interior=interior, root_index=root_index, params=params)


@tf.function
def _escape_run(
    zr: tf.Tensor,
    zi: tf.Tensor,
    cr: tf.Tensor,
    ci: tf.Tensor,
    max_iterations: tf.Tensor,
    burning_ship: bool,
) -> tuple[tf.Tensor, tf.Tensor, tf.Tensor, tf.Tensor]:
    """Iterate an escape-time rule for every point that has not escaped."""

    max_iterations = tf.cast(max_iterations, tf.int32)
    radius = tf.constant(ESCAPE_RADIUS, dtype=zr.dtype)
    i = tf.constant(0, dtype=tf.int32)
    ns = tf.zeros_like(zr, dtype=tf.int32)
    active = tf.sqrt(zr * zr + zi * zi) < radius

    def cond(i, zr, zi, ns, active):
        return tf.logical_and(tf.less(i, max_iterations), tf.reduce_any(active))

    def body(i, zr, zi, ns, active):
        ar = tf.abs(zr) if burning_ship else zr
        ai = tf.abs(zi) if burning_ship else zi
        zr_new = (ar * ar - ai * ai) + cr
        zi_new = (ar * ai + ai * ar) + ci
        zr = tf.where(active, zr_new, zr)
        zi = tf.where(active, zi_new, zi)
        ns = ns + tf.cast(active, tf.int32)
        active = tf.logical_and(active, tf.sqrt(zr * zr + zi * zi) < radius)
        return i + 1, zr, zi, ns, active

    _, zr, zi, ns, _ = tf.while_loop(cond, body, (i, zr, zi, ns, active))
    return zr, zi, ns, tf.less(ns, max_iterations)


def _complex_mul(ar, ai, br, bi):
    return ar * br - ai * bi, ar * bi + ai * br


def _complex_pow(zr, zi, n: int):
    out_r = tf.ones_like(zr)
    out_i = tf.zeros_like(zi)
    for _ in range(n):
        out_r, out_i = _complex_mul(zr, zi, out_r, out_i)
    return out_r, out_i


def _root_match(zr, zi, roots: tuple[tuple[float, float], ...]) -> tf.Tensor:
    """Index of the first root within precision of each point, or -1."""

    precision = tf.constant(NEWTON_PRECISION, dtype=zr.dtype)
    index = tf.fill(tf.shape(zr), tf.constant(-1, dtype=tf.int32))
    for k in reversed(range(len(roots))):
        dr = zr - roots[k][0]
        di = zi - roots[k][1]
        near = tf.sqrt(dr * dr + di * di) <= precision
        index = tf.where(near, tf.constant(k, dtype=tf.int32), index)
    return index


@tf.function
def _newton_run(
    zr: tf.Tensor,
    zi: tf.Tensor,
    max_iterations: tf.Tensor,
    roots: tuple[tuple[float, float], ...],
) -> tuple[tf.Tensor, tf.Tensor]:
    """Newton iteration on ``z^n - 1`` until every point sits on a root."""

    n = len(roots)
    max_iterations = tf.cast(max_iterations, tf.int32)
    zero = tf.constant(0.0, dtype=zr.dtype)
    i = tf.constant(0, dtype=tf.int32)
    ns = tf.zeros_like(zr, dtype=tf.int32)
    active = _root_match(zr, zi, roots) < 0

    def cond(i, zr, zi, ns, active):
        return tf.logical_and(tf.less(i, max_iterations), tf.reduce_any(active))

    def body(i, zr, zi, ns, active):
        pr, pi = _complex_pow(zr, zi, n)
        qr, qi = _complex_pow(zr, zi, n - 1)
        num_r, num_i = _complex_mul(tf.fill(tf.shape(zr), tf.constant(n - 1, zr.dtype)), tf.zeros_like(zi), pr, pi)
        num_r = num_r + 1.0
        num_i = num_i + 0.0
        den_r, den_i = _complex_mul(tf.fill(tf.shape(zr), tf.constant(n, zr.dtype)), tf.zeros_like(zi), qr, qi)
        den = den_r * den_r + den_i * den_i
        safe_den = tf.where(den > zero, den, tf.ones_like(den))
        new_r = (num_r * den_r + num_i * den_i) / safe_den
        new_i = (num_i * den_r - den_i * num_r) / safe_den
        update = tf.logical_and(
            active,
            tf.logical_and(tf.sqrt(zr * zr + zi * zi) > zero, tf.sqrt(den) > zero),
        )
        zr = tf.where(update, new_r, zr)
        zi = tf.where(update, new_i, zi)
        ns = ns + tf.cast(active, tf.int32)
        active = tf.logical_and(active, _root_match(zr, zi, roots) < 0)
        return i + 1, zr, zi, ns, active

    _, zr, zi, ns, _ = tf.while_loop(cond, body, (i, zr, zi, ns, active))
    return ns, _root_match(zr, zi, roots)


def _render_tensorflow(fractal: PlaneFractal, params: RenderParameters, *, device: Optional[str]) -> RenderResult:
    re, im = plane_grid(params.view, params.width, params.height)
    max_iterations = tf.constant(params.iter_max, dtype=tf.int32)

    with tf.device(device if device is not None else "/CPU:0"):
        re_tf = tf.convert_to_tensor(re, dtype=tf.float64)
        im_tf = tf.convert_to_tensor(im, dtype=tf.float64)

        if isinstance(fractal, Newton):
            roots = tuple((root.re, root.im) for root in fractal.roots)
            ns, index = _newton_run(re_tf, im_tf, max_iterations, roots)
            iterations = ns.numpy()
            root_index = index.numpy()
            return _newton_frame(iterations, root_index, fractal.degree, params)

        if isinstance(fractal, Julia):
            zr, zi = re_tf, im_tf
            cr = tf.fill(tf.shape(re_tf), tf.constant(fractal.constant.re, tf.float64))
            ci = tf.fill(tf.shape(re_tf), tf.constant(fractal.constant.im, tf.float64))
        else:
            zr = tf.zeros_like(re_tf)
            zi = tf.zeros_like(im_tf)
            cr, ci = re_tf, im_tf
        _, _, ns, escaped = _escape_run(zr, zi, cr, ci, max_iterations, isinstance(fractal, BurningShip))
        iterations = ns.numpy()

    return _escape_frame(iterations, escaped.numpy(), _hue_band(fractal), params)


def _hue_band(fractal: PlaneFractal) -> tuple[float, float]:
    if isinstance(fractal, Mandelbrot):
        return MANDELBROT_HUE_BAND
    if isinstance(fractal, Julia):
        return JULIA_HUE_BAND
    if isinstance(fractal, BurningShip):
        return BURNING_SHIP_HUE_BAND
    raise InvalidParameterError(f"{type(fractal).__name__} is not an escape-time fractal")


def _escape_frame(iterations: np.ndarray, escaped: np.ndarray, band: tuple[float, float], params: RenderParameters) -> RenderResult:
    t = iterations.astype(np.float64) / params.iter_max
    start, end = band
    hue = start + t * (end - start)
    colors = hsl_to_rgb_array(hue, np.ones_like(t), 0.5 * t)
    interior = ~escaped
    colors[interior] = 0
    return RenderResult(
        iterations=iterations.astype(np.int32),
        colors=colors,
        interior=interior,
        root_index=None,
        params=params,
    )


def _newton_frame(iterations: np.ndarray, root_index: np.ndarray, degree: int, params: RenderParameters) -> RenderResult:
    lightness = 0.5 * (1 - iterations.astype(np.float64) / params.iter_max)
    hue = root_index.astype(np.float64) / degree
    colors = hsl_to_rgb_array(hue, np.ones_like(hue), lightness)
    interior = root_index < 0
    colors[interior] = NEWTON_BACKGROUND
    return RenderResult(
        iterations=iterations.astype(np.int32),
        colors=colors,
        interior=interior,
        root_index=root_index.astype(np.int32),
        params=params,
    )
