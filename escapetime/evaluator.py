"""Escape-time evaluation of single points for the Mandelbrot and Julia sets."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import NamedTuple

from matplotlib import colors as mcolors

from .arithmetic import ORIGIN, Complex, magnitude, square

MAX_ITERATIONS = 255
DIVERGENCE_BOUND = 2.0
JULIA_CONSTANT = Complex(-0.79, 0.15)


class FractalSet(enum.Enum):
    MANDELBROT = "mandelbrot"
    JULIA = "julia"


class ColorBand(enum.Enum):
    """Color classes ordered from fastest divergence to interior points."""

    RED = 0
    YELLOW = 1
    GREEN = 2
    BLACK = 3


# Inclusive upper bound of each band, in ascending order.
COLOR_BANDS: tuple[tuple[int, ColorBand], ...] = (
    (20, ColorBand.RED),
    (80, ColorBand.YELLOW),
    (160, ColorBand.GREEN),
    (MAX_ITERATIONS, ColorBand.BLACK),
)

_BAND_COLOR_NAMES = {
    ColorBand.RED: "red",
    ColorBand.YELLOW: "yellow",
    ColorBand.GREEN: "lime",
    ColorBand.BLACK: "black",
}


class RGB(NamedTuple):
    red: int
    green: int
    blue: int


@dataclass(frozen=True)
class Evaluation:
    """Outcome of evaluating one plane coordinate."""

    iterations: int
    band: ColorBand


def band_rgb(band: ColorBand) -> RGB:
    """Convert a color class to the 8-bit RGB triple drawn by the sink."""

    red, green, blue = mcolors.to_rgb(_BAND_COLOR_NAMES[band])
    return RGB(int(round(red * 255)), int(round(green * 255)), int(round(blue * 255)))


def starting_values(fractal: FractalSet, point: Complex) -> tuple[Complex, Complex]:
    """Return ``(z0, c)`` for ``point`` under ``fractal``."""

    if fractal is FractalSet.MANDELBROT:
        return ORIGIN, point
    return point, JULIA_CONSTANT


def escape_iterations(fractal: FractalSet, point: Complex) -> int:
    """Count applications of ``z <- z^2 + c`` before ``|z|`` leaves the bound.

    Points that already lie outside the bound are reported as diverging
    immediately, with a count of zero. Points that never escape report
    ``MAX_ITERATIONS``.
    """

    if magnitude(point) > DIVERGENCE_BOUND:
        return 0

    z, c = starting_values(fractal, point)
    iterations = 0
    while magnitude(z) <= DIVERGENCE_BOUND:
        iterations += 1
        z = square(z) + c
        if iterations == MAX_ITERATIONS:
            break
    return iterations


def color_for_iterations(iterations: int) -> ColorBand:
    if not 0 <= iterations <= MAX_ITERATIONS:
        raise ValueError(f"Iteration count {iterations} out of range [0, {MAX_ITERATIONS}]")
    for upper, band in COLOR_BANDS:
        if iterations <= upper:
            return band
    raise AssertionError("color bands do not cover the iteration range")


def evaluate(fractal: FractalSet, point: Complex) -> Evaluation:
    iterations = escape_iterations(fractal, point)
    return Evaluation(iterations=iterations, band=color_for_iterations(iterations))
