"""Complex-number value type used by the plane classifiers."""

from __future__ import annotations

import math
from dataclasses import dataclass

from .errors import InvalidParameterError


@dataclass(frozen=True)
class ComplexNumber:
    """An immutable complex number ``re + i*im``.

    Every operation returns a new value. Division by a number whose modulus is
    zero is undefined and raises :class:`ZeroDivisionError`; callers that may
    hit the origin must guard the division themselves.
    """

    re: float
    im: float

    @property
    def real(self) -> float:
        return self.re

    @property
    def imag(self) -> float:
        return self.im

    def conjugate(self) -> ComplexNumber:
        return ComplexNumber(self.re, -self.im)

    def modulus(self) -> float:
        return math.sqrt(self.re * self.re + self.im * self.im)

    def argument(self) -> float:
        return math.atan2(self.im, self.re)

    def __add__(self, other: ComplexNumber) -> ComplexNumber:
        return ComplexNumber(self.re + other.re, self.im + other.im)

    def __sub__(self, other: ComplexNumber) -> ComplexNumber:
        return ComplexNumber(self.re - other.re, self.im - other.im)

    def __mul__(self, other: ComplexNumber) -> ComplexNumber:
        return ComplexNumber(
            self.re * other.re - self.im * other.im,
            self.re * other.im + self.im * other.re,
        )

    def __truediv__(self, other: ComplexNumber) -> ComplexNumber:
        denominator = other.re * other.re + other.im * other.im
        return ComplexNumber(
            (self.re * other.re + self.im * other.im) / denominator,
            (self.im * other.re - other.im * self.re) / denominator,
        )

    def pow(self, n: int) -> ComplexNumber:
        """Raise to a non-negative integer power by repeated multiplication."""

        if n < 0:
            raise InvalidParameterError(f"power must be non-negative, got {n}")
        out = ONE
        for _ in range(n):
            out = self * out
        return out

    def __str__(self) -> str:
        if self.im == 0.0:
            return f"{self.re:.4g}"
        if self.im == 1.0 and self.re != 0.0:
            return f"{self.re:.4g} +i"
        if self.im == -1.0 and self.re != 0.0:
            return f"{self.re:.4g} -i"
        if self.im == -1.0:
            return "-i"
        if self.im == 1.0:
            return "i"
        return f"{self.re:.4g} {self.im:+.4g}i"


ZERO = ComplexNumber(0.0, 0.0)
ONE = ComplexNumber(1.0, 0.0)
I = ComplexNumber(0.0, 1.0)


def add(z1: ComplexNumber, z2: ComplexNumber) -> ComplexNumber:
    return z1 + z2


def sub(z1: ComplexNumber, z2: ComplexNumber) -> ComplexNumber:
    return z1 - z2


def mul(z1: ComplexNumber, z2: ComplexNumber) -> ComplexNumber:
    return z1 * z2


def div(z1: ComplexNumber, z2: ComplexNumber) -> ComplexNumber:
    return z1 / z2


def power(z: ComplexNumber, n: int) -> ComplexNumber:
    return z.pow(n)
