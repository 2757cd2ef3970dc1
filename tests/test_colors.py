import numpy as np
import pytest

from fractal_explorer.colors import ColorHSL, ColorRGB, hsl_to_rgb, hsl_to_rgb_array, hsl_to_rgb_color, hue_to_channel


@pytest.mark.parametrize("hue", [0.0, 0.2, 0.5, 0.99])
def test_zero_saturation_is_gray(hue):
    color = hsl_to_rgb(hue, 0.0, 0.2)
    assert color.r == color.g == color.b == int(0.2 * 255)


def test_primary_colors():
    assert hsl_to_rgb(0.0, 1.0, 0.5) == ColorRGB(255, 0, 0)
    assert hsl_to_rgb(1.0 / 3.0, 1.0, 0.5) == ColorRGB(0, 255, 0)
    assert hsl_to_rgb(0.0, 1.0, 0.0) == ColorRGB(0, 0, 0)
    assert hsl_to_rgb(0.5, 1.0, 1.0) == ColorRGB(255, 255, 255)
    assert hsl_to_rgb_color(ColorHSL(0.0, 1.0, 0.5)) == ColorRGB(255, 0, 0)


def test_channels_are_truncated():
    # l * 255 = 127.5
    assert hsl_to_rgb(0.0, 0.0, 0.5) == ColorRGB(127, 127, 127)


@pytest.mark.parametrize("boundary", [1.0 / 6.0, 0.5, 2.0 / 3.0])
def test_hue_to_channel_is_continuous(boundary):
    p, q = 0.2, 0.8
    below = hue_to_channel(p, q, boundary - 1e-9)
    above = hue_to_channel(p, q, boundary + 1e-9)
    assert abs(below - above) < 1e-6


def test_hue_offsets_wrap():
    p, q = 0.1, 0.9
    assert hue_to_channel(p, q, -0.25) == pytest.approx(hue_to_channel(p, q, 0.75))
    assert hue_to_channel(p, q, 1.25) == pytest.approx(hue_to_channel(p, q, 0.25))


def test_array_conversion_matches_scalar():
    hues = np.linspace(0.0, 1.0, 37)
    lights = np.linspace(0.0, 1.0, 11)
    for s in (0.0, 0.35, 1.0):
        h, l = np.meshgrid(hues, lights)
        rgb = hsl_to_rgb_array(h, s, l)
        assert rgb.shape == h.shape + (3,)
        assert rgb.dtype == np.uint8
        for index in np.ndindex(h.shape):
            expected = hsl_to_rgb(float(h[index]), s, float(l[index]))
            assert tuple(int(v) for v in rgb[index]) == expected
