"""Public API for escape-time fractal rendering."""

from .arithmetic import Complex, magnitude, square
from .evaluator import (
    COLOR_BANDS,
    DIVERGENCE_BOUND,
    JULIA_CONSTANT,
    MAX_ITERATIONS,
    RGB,
    ColorBand,
    Evaluation,
    FractalSet,
    band_rgb,
    color_for_iterations,
    escape_iterations,
    evaluate,
)
from .plot import plot
from .sampler import (
    JULIA_PARAMETERS,
    MANDELBROT_PARAMETERS,
    PlaneRegion,
    RenderParameters,
    Sample,
    SamplingMetadata,
    compute_metadata,
    reference_parameters,
    sample_coordinate,
    sample_grid,
)
from .sink import ImageSink, RenderSinkError, plane_to_pixel

__all__ = [
    "COLOR_BANDS",
    "DIVERGENCE_BOUND",
    "JULIA_CONSTANT",
    "JULIA_PARAMETERS",
    "MANDELBROT_PARAMETERS",
    "MAX_ITERATIONS",
    "RGB",
    "ColorBand",
    "Complex",
    "Evaluation",
    "FractalSet",
    "ImageSink",
    "PlaneRegion",
    "RenderParameters",
    "RenderSinkError",
    "Sample",
    "SamplingMetadata",
    "band_rgb",
    "color_for_iterations",
    "compute_metadata",
    "escape_iterations",
    "evaluate",
    "magnitude",
    "plane_to_pixel",
    "plot",
    "reference_parameters",
    "sample_coordinate",
    "sample_grid",
    "square",
]
