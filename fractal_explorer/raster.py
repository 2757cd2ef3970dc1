"""Rasterize engine output into Pillow images.

Engine coordinates put row 0 at the bottom of the screen; images put it at
the top, so every function here flips the vertical axis.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

import numpy as np
import PIL.Image
import PIL.ImageDraw
import PIL.ImageFont

from .colors import BLACK, RED, ColorRGB
from .geometry import Primitive
from .renderer import PixelSample, RenderResult

_FONT_CANDIDATES = (
    "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/truetype/liberation/LiberationSans-Regular.ttf",
    "/usr/share/fonts/truetype/freefont/FreeSans.ttf",
)


def result_to_image(result: RenderResult) -> PIL.Image.Image:
    return PIL.Image.fromarray(np.ascontiguousarray(np.flipud(result.colors)))


def samples_to_image(samples: Iterable[PixelSample], width: int, height: int) -> PIL.Image.Image:
    pixels = np.zeros((height, width, 3), dtype=np.uint8)
    for x, y, color in samples:
        pixels[height - 1 - y, x] = color
    return PIL.Image.fromarray(pixels)


def primitives_to_image(
    primitives: Iterable[Primitive],
    width: int,
    height: int,
    background: ColorRGB = BLACK,
) -> PIL.Image.Image:
    """Draw primitives in order: lines as 1px segments, triangles and quads filled."""

    image = PIL.Image.new("RGB", (width, height), tuple(background))
    draw = PIL.ImageDraw.Draw(image)
    for primitive in primitives:
        points = [(x, height - y) for x, y in primitive.vertices]
        if primitive.kind == "line":
            draw.line(points, fill=tuple(primitive.color), width=1)
        else:
            draw.polygon(points, fill=tuple(primitive.color))
    return image


def draw_zoom_box(image: PIL.Image.Image, box: tuple[float, float, float, float], color: ColorRGB = RED) -> PIL.Image.Image:
    """Outline a zoom box given as engine-space ``(left, bottom, right, top)``."""

    left, bottom, right, top = box
    height = image.height
    draw = PIL.ImageDraw.Draw(image)
    draw.rectangle([(left, height - top), (right, height - bottom)], outline=tuple(color), width=1)
    return image


def _load_caption_font(image: PIL.Image.Image) -> PIL.ImageFont.ImageFont:
    target_size = max(12, int(round(max(min(image.size), 1) * 0.028)))
    for path in _FONT_CANDIDATES:
        font_path = Path(path)
        if font_path.exists():
            try:
                return PIL.ImageFont.truetype(str(font_path), target_size)
            except OSError:
                continue
    return PIL.ImageFont.load_default()


def draw_caption(image: PIL.Image.Image, text: str) -> PIL.Image.Image:
    """Write ``text`` in the top-left corner with a drop shadow."""

    draw = PIL.ImageDraw.Draw(image)
    font = _load_caption_font(image)
    draw.text((14, 14), text, font=font, fill=(0, 0, 0))
    draw.text((12, 12), text, font=font, fill=(255, 255, 255))
    return image
