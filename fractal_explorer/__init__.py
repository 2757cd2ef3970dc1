"""Public API for the fractal computation engine."""

from .colors import ColorHSL, ColorRGB, hsl_to_rgb, hsl_to_rgb_array, hue_to_channel
from .complex_number import ComplexNumber
from .errors import InvalidParameterError
from .escape_time import (
    EscapeResult,
    iterate_burning_ship,
    iterate_julia,
    iterate_mandelbrot,
    julia_constant,
)
from .fractals import (
    BurningShip,
    Julia,
    LevyCurve,
    Mandelbrot,
    Newton,
    SierpinskiCarpet,
    SierpinskiTriangle,
    default_view,
    fractal_from_name,
    is_plane_fractal,
)
from .geometry import Primitive, levy_curve, levy_segment, sierpinski_carpet, sierpinski_triangle
from .navigation import ZoomNavigator, select_zoom_center
from .newton import NewtonResult, compute_roots, iterate_newton
from .renderer import PixelSample, RenderParameters, RenderResult, iter_pixels, render_frame
from .viewport import ViewRect, ZoomStack, compute_zoom_rect, pixel_to_plane

__all__ = [
    "BurningShip",
    "ColorHSL",
    "ColorRGB",
    "ComplexNumber",
    "EscapeResult",
    "InvalidParameterError",
    "Julia",
    "LevyCurve",
    "Mandelbrot",
    "Newton",
    "NewtonResult",
    "PixelSample",
    "Primitive",
    "RenderParameters",
    "RenderResult",
    "SierpinskiCarpet",
    "SierpinskiTriangle",
    "ViewRect",
    "ZoomNavigator",
    "ZoomStack",
    "compute_roots",
    "compute_zoom_rect",
    "default_view",
    "fractal_from_name",
    "hsl_to_rgb",
    "hsl_to_rgb_array",
    "hue_to_channel",
    "is_plane_fractal",
    "iter_pixels",
    "iterate_burning_ship",
    "iterate_julia",
    "iterate_mandelbrot",
    "iterate_newton",
    "julia_constant",
    "levy_curve",
    "levy_segment",
    "pixel_to_plane",
    "render_frame",
    "select_zoom_center",
    "sierpinski_carpet",
    "sierpinski_triangle",
]
