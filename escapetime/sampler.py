"""Sampling grids over a rectangular region of the complex plane."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

from .arithmetic import Complex
from .evaluator import ColorBand, FractalSet, evaluate

REFERENCE_WIDTH = 800
REFERENCE_HEIGHT = 600
MANDELBROT_OUT_FILE = Path("./mandelbrot.png")
JULIA_OUT_FILE = Path("./julia.png")


@dataclass(frozen=True)
class PlaneRegion:
    """Axis-aligned rectangle ``[x_min, x_max] x [y_min, y_max]``."""

    x_min: float
    x_max: float
    y_min: float
    y_max: float


@dataclass(frozen=True)
class RenderParameters:
    """Parameters that describe a single render of an escape-time fractal."""

    fractal: FractalSet
    region: PlaneRegion
    width: int
    height: int
    output_path: Path


@dataclass(frozen=True)
class SamplingMetadata:
    """Metadata describing the sampling grid for a rendered image."""

    x_min: float
    y_min: float
    x_step: float
    y_step: float
    width: int
    height: int

    @property
    def size(self) -> int:
        return self.width * self.height


@dataclass(frozen=True)
class Sample:
    coordinate: Complex
    band: ColorBand


MANDELBROT_PARAMETERS = RenderParameters(
    fractal=FractalSet.MANDELBROT,
    region=PlaneRegion(x_min=-2.1, x_max=0.6, y_min=-1.2, y_max=1.2),
    width=REFERENCE_WIDTH,
    height=REFERENCE_HEIGHT,
    output_path=MANDELBROT_OUT_FILE,
)

JULIA_PARAMETERS = RenderParameters(
    fractal=FractalSet.JULIA,
    region=PlaneRegion(x_min=-2.1, x_max=2.1, y_min=-1.2, y_max=1.2),
    width=REFERENCE_WIDTH,
    height=REFERENCE_HEIGHT,
    output_path=JULIA_OUT_FILE,
)


def reference_parameters(fractal: FractalSet) -> RenderParameters:
    if fractal is FractalSet.MANDELBROT:
        return MANDELBROT_PARAMETERS
    return JULIA_PARAMETERS


def compute_metadata(params: RenderParameters) -> SamplingMetadata:
    width = int(params.width)
    height = int(params.height)
    if width <= 0 or height <= 0:
        raise ValueError(f"Resolution must be positive, got {width}x{height}")

    region = params.region
    if region.x_max <= region.x_min or region.y_max <= region.y_min:
        raise ValueError(f"Degenerate plane region: {region}")

    return SamplingMetadata(
        x_min=float(region.x_min),
        y_min=float(region.y_min),
        x_step=(region.x_max - region.x_min) / width,
        y_step=(region.y_max - region.y_min) / height,
        width=width,
        height=height,
    )


def sample_coordinate(metadata: SamplingMetadata, index: int) -> Complex:
    """Plane coordinate of the sample at linear ``index`` (x varies fastest)."""

    column = index % metadata.width
    row = index // metadata.width
    return Complex(
        metadata.x_min + metadata.x_step * column,
        metadata.y_min + metadata.y_step * row,
    )


def sample_grid(params: RenderParameters) -> Iterator[Sample]:
    """Yield one ``Sample`` per grid cell in row-major order."""

    metadata = compute_metadata(params)
    for index in range(metadata.size):
        coordinate = sample_coordinate(metadata, index)
        yield Sample(coordinate=coordinate, band=evaluate(params.fractal, coordinate).band)
