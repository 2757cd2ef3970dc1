import numpy as np
import pytest

from fractal_explorer.fractals import Mandelbrot
from fractal_explorer.navigation import (
    ZOOM_MAX,
    ZOOM_MIN,
    ZoomNavigator,
    clamp_zoom_fraction,
    edge_map,
    select_zoom_center,
    zoom_box,
)


def test_zoom_in_pushes_the_current_view():
    navigator = ZoomNavigator(Mandelbrot(), 400, 300)
    home = navigator.view
    zoomed = navigator.zoom_in(200, 150, 0.5)
    assert navigator.depth == 1
    assert navigator.stack.peek() == home
    assert zoomed.real_span == pytest.approx(home.real_span / 2)
    assert zoomed.imag_span == pytest.approx(home.imag_span / 2)


def test_zoom_out_restores_views_in_order():
    navigator = ZoomNavigator(Mandelbrot(), 400, 300)
    home = navigator.view
    first = navigator.zoom_in(100, 100, 0.5)
    navigator.zoom_in(50, 50, 0.25)
    assert navigator.zoom_out()
    assert navigator.view == first
    assert navigator.zoom_out()
    assert navigator.view == home
    assert not navigator.zoom_out()
    assert navigator.view == home


def test_reset_clears_history():
    navigator = ZoomNavigator(Mandelbrot(), 400, 300, iter_max=80)
    for _ in range(3):
        navigator.zoom_in(200, 150, 0.5)
    navigator.reset()
    assert navigator.depth == 0
    assert navigator.view == navigator.home
    params = navigator.parameters()
    assert params.iter_max == 80
    assert (params.width, params.height) == (400, 300)


def test_clamp_zoom_fraction():
    assert clamp_zoom_fraction(0.0) == ZOOM_MIN
    assert clamp_zoom_fraction(0.3) == 0.3
    assert clamp_zoom_fraction(4.0) == ZOOM_MAX


def test_zoom_box_corners():
    assert zoom_box(100, 50, 0.5, 400, 200) == (0.0, 0.0, 200.0, 100.0)


def test_edge_map_marks_row_changes():
    interior = np.zeros((6, 6), dtype=bool)
    interior[2:4, 2:4] = True
    edges = edge_map(interior)
    assert edges[2, 2] and edges[4, 2]
    assert not edges[3, 2]
    assert not edges[0, 0]


def test_select_zoom_center_prefers_the_closest_edge():
    edges = np.zeros((9, 9), dtype=bool)
    edges[0, 0] = True
    edges[5, 4] = True
    assert select_zoom_center(edges).tolist() == [5, 4]


def test_select_zoom_center_without_edges_is_the_middle():
    edges = np.zeros((8, 10), dtype=bool)
    assert select_zoom_center(edges).tolist() == [4, 5]
