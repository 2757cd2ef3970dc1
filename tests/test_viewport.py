import pytest

from fractal_explorer.complex_number import ComplexNumber
from fractal_explorer.errors import InvalidParameterError
from fractal_explorer.viewport import (
    ViewRect,
    ZoomStack,
    clear_zoom,
    compute_zoom_rect,
    pixel_to_plane,
    plane_grid,
    pop_zoom,
    push_zoom,
)

VIEW = ViewRect(-2.0, 2.0, -1.0, 1.0)


def test_fitted_view_follows_aspect_ratio():
    view = ViewRect.fitted(-2.0, 1.0, -1.1, 1280, 720)
    assert view.imag_max == pytest.approx(-1.1 + 3.0 * 720 / 1280)
    assert view.real_span == 3.0


@pytest.mark.parametrize(
    "bounds",
    [(1.0, 1.0, 0.0, 1.0), (2.0, 1.0, 0.0, 1.0), (0.0, 1.0, 1.0, 0.5)],
)
def test_degenerate_view_is_rejected(bounds):
    with pytest.raises(InvalidParameterError):
        ViewRect(*bounds)


def test_pixel_to_plane():
    assert pixel_to_plane(0, 0, VIEW, 400, 200) == ComplexNumber(-2.0, -1.0)
    assert pixel_to_plane(200, 100, VIEW, 400, 200) == ComplexNumber(0.0, 0.0)
    assert pixel_to_plane(300, 150, VIEW, 400, 200) == ComplexNumber(1.0, 0.5)


def test_plane_grid_matches_pixel_mapping():
    re, im = plane_grid(VIEW, 7, 5)
    assert re.shape == im.shape == (5, 7)
    for y in range(5):
        for x in range(7):
            point = pixel_to_plane(x, y, VIEW, 7, 5)
            assert re[y, x] == point.re
            assert im[y, x] == point.im


def test_plane_grid_rejects_empty_screen():
    with pytest.raises(InvalidParameterError):
        plane_grid(VIEW, 0, 10)


def test_full_screen_zoom_keeps_the_view():
    zoomed = compute_zoom_rect(VIEW, 200, 100, 1.0, 400, 200)
    assert zoomed.real_min == pytest.approx(VIEW.real_min)
    assert zoomed.real_max == pytest.approx(VIEW.real_max)
    assert zoomed.imag_min == pytest.approx(VIEW.imag_min)
    assert zoomed.imag_max == pytest.approx(VIEW.imag_max)


def test_zoom_box_is_inverse_mapped():
    zoomed = compute_zoom_rect(VIEW, 300, 150, 0.5, 400, 200)
    # box spans pixels 200..400 by 100..200
    assert zoomed.real_min == pytest.approx(0.0)
    assert zoomed.real_max == pytest.approx(2.0)
    assert zoomed.imag_min == pytest.approx(0.0)
    assert zoomed.imag_max == pytest.approx(1.0)


def test_zoom_fraction_is_clamped():
    assert compute_zoom_rect(VIEW, 100, 50, 3.0, 400, 200) == compute_zoom_rect(VIEW, 100, 50, 1.0, 400, 200)


@pytest.mark.parametrize("fraction", [0.0, -0.5])
def test_non_positive_zoom_fraction_is_rejected(fraction):
    with pytest.raises(InvalidParameterError):
        compute_zoom_rect(VIEW, 100, 50, fraction, 400, 200)


def test_zoom_stack_round_trip():
    stack = ZoomStack()
    first = ViewRect(-1.0, 1.0, -1.0, 1.0)
    push_zoom(stack, first)
    before = len(stack)
    push_zoom(stack, VIEW)
    assert pop_zoom(stack) == VIEW
    assert len(stack) == before
    assert stack.peek() == first


def test_zoom_stack_is_lifo_and_reports_empty():
    stack = ZoomStack()
    assert stack.pop() is None
    assert not stack
    views = [ViewRect(-float(k), float(k), -1.0, 1.0) for k in range(1, 4)]
    for view in views:
        stack.push(view)
    assert [stack.pop() for _ in range(3)] == list(reversed(views))
    assert stack.pop() is None


def test_zoom_stack_clear():
    stack = ZoomStack()
    for _ in range(5):
        stack.push(VIEW)
    clear_zoom(stack)
    assert len(stack) == 0
    assert stack.peek() is None
