"""Tests for the sampling grid."""

from dataclasses import replace
from pathlib import Path

import pytest

from escapetime.arithmetic import Complex
from escapetime.evaluator import FractalSet, evaluate
from escapetime.sampler import (
    JULIA_PARAMETERS,
    MANDELBROT_PARAMETERS,
    PlaneRegion,
    RenderParameters,
    compute_metadata,
    reference_parameters,
    sample_coordinate,
    sample_grid,
)


def _params(fractal=FractalSet.MANDELBROT, width=8, height=6):
    return RenderParameters(
        fractal=fractal,
        region=PlaneRegion(x_min=-2.1, x_max=0.6, y_min=-1.2, y_max=1.2),
        width=width,
        height=height,
        output_path=Path("grid.png"),
    )


def test_reference_parameters():
    assert reference_parameters(FractalSet.MANDELBROT) is MANDELBROT_PARAMETERS
    assert reference_parameters(FractalSet.JULIA) is JULIA_PARAMETERS
    assert (MANDELBROT_PARAMETERS.width, MANDELBROT_PARAMETERS.height) == (800, 600)
    assert MANDELBROT_PARAMETERS.region == PlaneRegion(-2.1, 0.6, -1.2, 1.2)
    assert JULIA_PARAMETERS.region == PlaneRegion(-2.1, 2.1, -1.2, 1.2)
    assert MANDELBROT_PARAMETERS.output_path == Path("mandelbrot.png")
    assert JULIA_PARAMETERS.output_path == Path("julia.png")


def test_metadata_steps():
    metadata = compute_metadata(MANDELBROT_PARAMETERS)
    assert metadata.x_step == pytest.approx(2.7 / 800)
    assert metadata.y_step == pytest.approx(2.4 / 600)
    assert metadata.size == 800 * 600


@pytest.mark.parametrize("fractal", list(FractalSet))
def test_grid_yields_one_sample_per_cell(fractal):
    samples = list(sample_grid(_params(fractal, width=7, height=5)))
    assert len(samples) == 35


def test_first_samples_of_each_row():
    params = _params(width=8, height=6)
    metadata = compute_metadata(params)
    samples = list(sample_grid(params))

    assert samples[0].coordinate == Complex(-2.1, -1.2)
    assert samples[8].coordinate == Complex(-2.1, -1.2 + metadata.y_step)
    assert samples[1].coordinate == Complex(-2.1 + metadata.x_step, -1.2)


def test_row_major_order():
    params = _params(width=4, height=3)
    metadata = compute_metadata(params)
    coordinates = [sample.coordinate for sample in sample_grid(params)]

    expected = [
        Complex(-2.1 + metadata.x_step * column, -1.2 + metadata.y_step * row)
        for row in range(3)
        for column in range(4)
    ]
    assert coordinates == expected
    assert [sample_coordinate(metadata, k) for k in range(12)] == expected


def test_grid_never_reaches_upper_bounds():
    params = _params(width=10, height=10)
    samples = list(sample_grid(params))
    assert max(s.coordinate.real for s in samples) < 0.6
    assert max(s.coordinate.imag for s in samples) < 1.2


@pytest.mark.parametrize("fractal", list(FractalSet))
def test_sample_bands_match_evaluator(fractal):
    for sample in sample_grid(_params(fractal, width=6, height=4)):
        assert sample.band is evaluate(fractal, sample.coordinate).band


def test_grids_are_independent():
    params = _params(FractalSet.JULIA, width=5, height=5)
    assert list(sample_grid(params)) == list(sample_grid(params))


@pytest.mark.parametrize("width, height", [(0, 10), (10, 0), (-1, 4)])
def test_non_positive_resolution_rejected(width, height):
    with pytest.raises(ValueError):
        compute_metadata(_params(width=width, height=height))


def test_degenerate_region_rejected():
    params = replace(_params(), region=PlaneRegion(0.5, 0.5, -1.0, 1.0))
    with pytest.raises(ValueError):
        list(sample_grid(params))
