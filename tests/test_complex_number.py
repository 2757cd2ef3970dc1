import math

import pytest

from fractal_explorer.complex_number import I, ONE, ZERO, ComplexNumber, add, div, mul, power, sub
from fractal_explorer.errors import InvalidParameterError


def test_arithmetic():
    a = ComplexNumber(1.0, 2.0)
    b = ComplexNumber(3.0, -4.0)
    assert a + b == ComplexNumber(4.0, -2.0)
    assert a - b == ComplexNumber(-2.0, 6.0)
    assert a * b == ComplexNumber(11.0, 2.0)
    assert add(a, b) == a + b
    assert sub(a, b) == a - b
    assert mul(a, b) == a * b
    assert I * I == ComplexNumber(-1.0, 0.0)


def test_values_are_immutable():
    z = ComplexNumber(1.0, 1.0)
    with pytest.raises(AttributeError):
        z.re = 2.0


@pytest.mark.parametrize(
    "a, b",
    [
        (ComplexNumber(1.0, 2.0), ComplexNumber(3.0, -4.0)),
        (ComplexNumber(-0.75, 0.1), ComplexNumber(0.5, 0.5)),
        (ComplexNumber(123.5, -7.25), ComplexNumber(-0.001, 2.0)),
        (ComplexNumber(0.0, 0.0), ComplexNumber(1.0, 1.0)),
    ],
)
def test_division_undoes_multiplication(a, b):
    back = div(mul(a, b), b)
    assert abs(back.re - a.re) < 1e-9
    assert abs(back.im - a.im) < 1e-9


def test_division_by_zero_is_left_to_the_caller():
    with pytest.raises(ZeroDivisionError):
        ONE / ZERO


def test_modulus_argument_conjugate():
    z = ComplexNumber(3.0, 4.0)
    assert z.modulus() == 5.0
    assert z.conjugate() == ComplexNumber(3.0, -4.0)
    assert ComplexNumber(-1.0, 0.0).argument() == pytest.approx(math.pi)
    assert ComplexNumber(0.0, -2.0).argument() == pytest.approx(-math.pi / 2)
    assert z.real == 3.0 and z.imag == 4.0


def test_power_by_repeated_multiplication():
    z = ComplexNumber(1.0, 1.0)
    assert z.pow(0) == ONE
    assert z.pow(1) == z
    assert z.pow(2) == ComplexNumber(0.0, 2.0)
    assert power(z, 4) == ComplexNumber(-4.0, 0.0)


def test_negative_power_is_rejected():
    with pytest.raises(InvalidParameterError):
        ComplexNumber(1.0, 0.0).pow(-1)


@pytest.mark.parametrize(
    "z, text",
    [
        (ComplexNumber(1.5, 0.0), "1.5"),
        (ComplexNumber(-0.75, 0.0), "-0.75"),
        (ComplexNumber(0.0, 1.0), "i"),
        (ComplexNumber(0.0, -1.0), "-i"),
        (ComplexNumber(2.0, 1.0), "2 +i"),
        (ComplexNumber(2.0, -1.0), "2 -i"),
        (ComplexNumber(0.3, 0.6), "0.3 +0.6i"),
        (ComplexNumber(1.23456, -2.5), "1.235 -2.5i"),
        (ComplexNumber(0.0, 0.5), "0 +0.5i"),
    ],
)
def test_string_form(z, text):
    assert str(z) == text
