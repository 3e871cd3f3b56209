"""Complex arithmetic used by the escape-time recurrence."""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Complex:
    """A point ``real + imag * i`` of the complex plane."""

    real: float
    imag: float

    def __add__(self, other: Complex) -> Complex:
        if not isinstance(other, Complex):
            return NotImplemented
        return Complex(self.real + other.real, self.imag + other.imag)


ORIGIN = Complex(0.0, 0.0)


def magnitude(z: Complex) -> float:
    """Return ``|z| = sqrt(real^2 + imag^2)``."""

    return math.sqrt(z.real * z.real + z.imag * z.imag)


def square(z: Complex) -> Complex:
    """Return ``z^2 = (real^2 - imag^2, 2 * real * imag)``."""

    return Complex(z.real * z.real - z.imag * z.imag, 2.0 * z.real * z.imag)
