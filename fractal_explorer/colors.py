"""HSL to RGB conversion shared by every classifier."""

from __future__ import annotations

from typing import NamedTuple

import numpy as np


class ColorRGB(NamedTuple):
    r: int
    g: int
    b: int


class ColorHSL(NamedTuple):
    h: float
    s: float
    l: float


BLACK = ColorRGB(0, 0, 0)
WHITE = ColorRGB(255, 255, 255)
RED = ColorRGB(255, 0, 0)

_ONE_THIRD = 1.0 / 3.0
_ONE_SIXTH = 1.0 / 6.0
_TWO_THIRDS = 2.0 / 3.0


def hue_to_channel(p: float, q: float, t: float) -> float:
    """Fold a hue offset ``t`` into a single channel intensity in ``[p, q]``."""

    t = t % 1.0
    if t < _ONE_SIXTH:
        return p + (q - p) * 6 * t
    if t < 0.5:
        return q
    if t < _TWO_THIRDS:
        return p + (q - p) * (_TWO_THIRDS - t) * 6
    return p


def hsl_to_rgb(h: float, s: float, l: float) -> ColorRGB:
    """Convert an HSL triple to 8-bit RGB.

    Components are expected in ``[0, 1]`` and are not clamped. Channels are
    truncated, not rounded.
    """

    if s == 0:
        red = green = blue = l * 255.0
    else:
        q = l * (1 + s) if l < 0.5 else (l + s) - (l * s)
        p = 2 * l - q
        red = 255.0 * hue_to_channel(p, q, h + _ONE_THIRD)
        green = 255.0 * hue_to_channel(p, q, h)
        blue = 255.0 * hue_to_channel(p, q, h - _ONE_THIRD)
    return ColorRGB(int(red), int(green), int(blue))


def hsl_to_rgb_color(color: ColorHSL) -> ColorRGB:
    return hsl_to_rgb(color.h, color.s, color.l)


def _hue_to_channel_array(p: np.ndarray, q: np.ndarray, t: np.ndarray) -> np.ndarray:
    t = np.mod(t, 1.0)
    rising = p + (q - p) * 6 * t
    falling = p + (q - p) * (_TWO_THIRDS - t) * 6
    return np.where(
        t < _ONE_SIXTH,
        rising,
        np.where(t < 0.5, q, np.where(t < _TWO_THIRDS, falling, p)),
    )


def hsl_to_rgb_array(h: np.ndarray, s: np.ndarray, l: np.ndarray) -> np.ndarray:
    """Vectorized :func:`hsl_to_rgb` returning an ``(..., 3)`` uint8 array.

    The arithmetic is the scalar conversion applied elementwise, so a pixel
    converted here matches the scalar result exactly.
    """

    h, s, l = np.broadcast_arrays(
        np.asarray(h, dtype=np.float64),
        np.asarray(s, dtype=np.float64),
        np.asarray(l, dtype=np.float64),
    )
    q = np.where(l < 0.5, l * (1 + s), (l + s) - (l * s))
    p = 2 * l - q
    red = 255.0 * _hue_to_channel_array(p, q, h + _ONE_THIRD)
    green = 255.0 * _hue_to_channel_array(p, q, h)
    blue = 255.0 * _hue_to_channel_array(p, q, h - _ONE_THIRD)
    gray = l * 255.0
    achromatic = s == 0
    rgb = np.stack(
        (
            np.where(achromatic, gray, red),
            np.where(achromatic, gray, green),
            np.where(achromatic, gray, blue),
        ),
        axis=-1,
    )
    return np.trunc(rgb).astype(np.uint8)
