import pytest

from fractal_explorer.colors import ColorRGB
from fractal_explorer.complex_number import ComplexNumber
from fractal_explorer.errors import InvalidParameterError
from fractal_explorer.fractals import (
    FRACTAL_NAMES,
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


@pytest.mark.parametrize(
    "name, cls",
    [
        ("mandelbrot", Mandelbrot),
        ("julia", Julia),
        ("burning-ship", BurningShip),
        ("newton", Newton),
        ("levy", LevyCurve),
        ("sierpinski-triangle", SierpinskiTriangle),
        ("sierpinski-carpet", SierpinskiCarpet),
    ],
)
def test_fractal_from_name(name, cls):
    assert name in FRACTAL_NAMES
    assert isinstance(fractal_from_name(name), cls)


def test_unknown_name_is_rejected():
    with pytest.raises(InvalidParameterError):
        fractal_from_name("koch")


def test_parameters_reach_the_variant():
    assert fractal_from_name("julia", julia_index=5).constant == ComplexNumber(-0.75, 0.0)
    assert fractal_from_name("newton", degree=5).degree == 5
    assert fractal_from_name("levy", depth=7).depth == 7


def test_newton_roots_follow_degree():
    assert len(Newton(4).roots) == 4
    with pytest.raises(InvalidParameterError):
        Newton(0)


def test_plane_and_geometric_variants():
    assert is_plane_fractal(Mandelbrot())
    assert is_plane_fractal(Newton())
    assert not is_plane_fractal(SierpinskiCarpet(2))


def test_default_view_is_fitted_to_the_screen():
    view = default_view(Mandelbrot(), 1280, 720)
    assert (view.real_min, view.real_max, view.imag_min) == (-2.0, 1.0, -1.1)
    assert view.imag_max == pytest.approx(-1.1 + 3.0 * 720 / 1280)
    assert default_view(Newton(), 400, 300).imag_max == pytest.approx(1.5)


@pytest.mark.parametrize("fractal", [Mandelbrot(), Julia(), BurningShip(), Newton()])
def test_plane_variants_classify_and_color(fractal):
    iter_max = fractal.default_iterations
    result = fractal.classify(ComplexNumber(0.25, 0.4), iter_max)
    color = fractal.color(result, iter_max)
    assert isinstance(color, ColorRGB)
    assert all(0 <= channel <= 255 for channel in color)


@pytest.mark.parametrize("fractal", [LevyCurve(4), SierpinskiTriangle(2), SierpinskiCarpet(2)])
def test_geometric_variants_produce_primitives(fractal):
    primitives = fractal.primitives(800, 600)
    assert primitives
    assert primitives == fractal.primitives(800, 600)
