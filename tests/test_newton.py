import pytest

from fractal_explorer.colors import ColorRGB, hsl_to_rgb
from fractal_explorer.complex_number import ComplexNumber
from fractal_explorer.errors import InvalidParameterError
from fractal_explorer.newton import (
    NEWTON_BACKGROUND,
    NewtonResult,
    compute_roots,
    iterate_newton,
    matching_root,
    newton_color,
    newton_step,
)


@pytest.mark.parametrize("n", range(1, 10))
def test_roots_of_unity(n):
    roots = compute_roots(n)
    assert len(roots) == n
    assert roots[0] == ComplexNumber(1.0, 0.0)
    for root in roots:
        assert abs(root.modulus() - 1.0) < 1e-12
        assert abs(root.pow(n).re - 1.0) < 1e-9
        assert abs(root.pow(n).im) < 1e-9


@pytest.mark.parametrize("n", [0, -3, 2.5, True])
def test_invalid_degree_is_rejected(n):
    with pytest.raises(InvalidParameterError):
        compute_roots(n)


def test_point_on_a_root_needs_no_iteration():
    result = iterate_newton(ComplexNumber(1.0, 0.0), compute_roots(3), 25)
    assert result == NewtonResult(iteration_count=0, root_index=0)
    assert result.converged
    assert newton_color(result, 3, 25) == ColorRGB(255, 0, 0)


def test_linear_polynomial_converges_in_one_step():
    result = iterate_newton(ComplexNumber(-4.0, 2.5), compute_roots(1), 10)
    assert result == NewtonResult(iteration_count=1, root_index=0)


def test_point_converges_to_nearest_real_root():
    roots = compute_roots(2)
    assert iterate_newton(ComplexNumber(1.3, 0.0), roots, 25).root_index == 0
    assert iterate_newton(ComplexNumber(-1.3, 0.0), roots, 25).root_index == 1


def test_conjugate_points_reach_conjugate_roots():
    roots = compute_roots(3)
    upper = iterate_newton(ComplexNumber(-0.6, 0.9), roots, 25)
    lower = iterate_newton(ComplexNumber(-0.6, -0.9), roots, 25)
    assert upper.converged and lower.converged
    assert {upper.root_index, lower.root_index} == {1, 2}
    assert upper.iteration_count == lower.iteration_count


def test_origin_is_held_and_left_as_background():
    result = iterate_newton(ComplexNumber(0.0, 0.0), compute_roots(3), 10)
    assert result.iteration_count == 10
    assert result.root_index is None
    assert not result.converged
    assert newton_color(result, 3, 10) == NEWTON_BACKGROUND


def test_newton_step_keeps_zero():
    assert newton_step(ComplexNumber(0.0, 0.0), 4) == ComplexNumber(0.0, 0.0)


def test_matching_root_uses_precision():
    roots = compute_roots(4)
    assert matching_root(ComplexNumber(1.00005, 0.0), roots) == 0
    assert matching_root(ComplexNumber(0.0, 0.99995), roots) == 1
    assert matching_root(ComplexNumber(1.01, 0.0), roots) is None


def test_slower_convergence_is_darker():
    fast = NewtonResult(iteration_count=2, root_index=1)
    slow = NewtonResult(iteration_count=20, root_index=1)
    assert newton_color(fast, 3, 25) == hsl_to_rgb(1 / 3, 1.0, 0.5 * (1 - 2 / 25))
    assert sum(newton_color(slow, 3, 25)) < sum(newton_color(fast, 3, 25))
