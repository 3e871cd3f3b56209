"""Whole-grid escape-time evaluation with TensorFlow."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import numpy as np
import tensorflow as tf

from .evaluator import COLOR_BANDS, DIVERGENCE_BOUND, JULIA_CONSTANT, MAX_ITERATIONS, FractalSet
from .sampler import RenderParameters, SamplingMetadata, compute_metadata

# Inclusive upper bounds of every band except the last, for np.searchsorted.
_BAND_EDGES = np.array([upper for upper, _ in COLOR_BANDS[:-1]], dtype=np.int64)


@dataclass(frozen=True)
class BatchResult:
    """Iteration counts and band indices for a grid, shaped ``(height, width)``."""

    iterations: np.ndarray
    bands: np.ndarray
    metadata: SamplingMetadata


@tf.function
def _escape_step(
    zr: tf.Tensor,
    zi: tf.Tensor,
    cr: tf.Tensor,
    ci: tf.Tensor,
    ns: tf.Tensor,
    active: tf.Tensor,
) -> tuple[tf.Tensor, tf.Tensor, tf.Tensor, tf.Tensor]:
    """Apply one step of ``z <- z^2 + c`` to the points still inside the bound."""

    bound = tf.constant(DIVERGENCE_BOUND, dtype=zr.dtype)
    active = tf.logical_and(active, tf.sqrt(zr * zr + zi * zi) <= bound)
    zr_new = (zr * zr - zi * zi) + cr
    zi_new = (2.0 * zr * zi) + ci
    zr = tf.where(active, zr_new, zr)
    zi = tf.where(active, zi_new, zi)
    ns = ns + tf.cast(active, tf.int32)
    return zr, zi, ns, active


@tf.function
def _escape_run(
    zr: tf.Tensor,
    zi: tf.Tensor,
    cr: tf.Tensor,
    ci: tf.Tensor,
    active: tf.Tensor,
) -> tf.Tensor:
    """Iterate until every point escaped or the iteration cap was reached."""

    max_iterations = tf.constant(MAX_ITERATIONS, dtype=tf.int32)
    i = tf.constant(0, dtype=tf.int32)
    ns = tf.zeros_like(zr, tf.int32)

    def cond(i, zr, zi, ns, active):
        return tf.logical_and(tf.less(i, max_iterations), tf.reduce_any(active))

    def body(i, zr, zi, ns, active):
        zr, zi, ns, active = _escape_step(zr, zi, cr, ci, ns, active)
        return i + 1, zr, zi, ns, active

    _, _, _, ns, _ = tf.while_loop(cond, body, (i, zr, zi, ns, active))
    return ns


def grid_axes(metadata: SamplingMetadata) -> tuple[np.ndarray, np.ndarray]:
    """Sample positions along each axis, computed as ``min + step * index``."""

    x = np.float64(metadata.x_min) + np.float64(metadata.x_step) * np.arange(metadata.width, dtype=np.float64)
    y = np.float64(metadata.y_min) + np.float64(metadata.y_step) * np.arange(metadata.height, dtype=np.float64)
    return x, y


def bands_for_iterations(iterations: np.ndarray) -> np.ndarray:
    """Vectorised ``color_for_iterations``, returning ``ColorBand`` values."""

    return np.searchsorted(_BAND_EDGES, iterations, side="left")


def render_counts(params: RenderParameters, *, device: Optional[str] = None) -> BatchResult:
    """Evaluate every cell of the sampling grid in one TensorFlow loop."""

    metadata = compute_metadata(params)
    x, y = grid_axes(metadata)

    with tf.device(device if device is not None else "/CPU:0"):
        X, Y = tf.meshgrid(tf.convert_to_tensor(x, dtype=tf.float64), tf.convert_to_tensor(y, dtype=tf.float64))
        bound = tf.constant(DIVERGENCE_BOUND, dtype=tf.float64)
        active = tf.sqrt(X * X + Y * Y) <= bound

        if params.fractal is FractalSet.MANDELBROT:
            zr = tf.zeros_like(X)
            zi = tf.zeros_like(Y)
            cr, ci = X, Y
        else:
            zr, zi = X, Y
            cr = tf.fill(tf.shape(X), tf.constant(JULIA_CONSTANT.real, dtype=tf.float64))
            ci = tf.fill(tf.shape(Y), tf.constant(JULIA_CONSTANT.imag, dtype=tf.float64))

        ns = _escape_run(zr, zi, cr, ci, active)

    iterations = ns.numpy().astype(np.int64)
    return BatchResult(
        iterations=iterations,
        bands=bands_for_iterations(iterations),
        metadata=metadata,
    )
