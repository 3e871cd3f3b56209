"""Raster image sink that persists rendered samples with Pillow."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

import numpy as np
import PIL.Image

from .arithmetic import Complex
from .evaluator import RGB, ColorBand, band_rgb
from .sampler import Sample, SamplingMetadata

BACKGROUND = RGB(255, 255, 255)


class RenderSinkError(RuntimeError):
    """The rendered image could not be persisted."""


def _pil_format_name(path: Path) -> str:
    """Pillow format for the suffix of ``path``; no suffix means PNG."""

    suffix = path.suffix.lower()
    if not suffix:
        return "PNG"
    try:
        return PIL.Image.registered_extensions()[suffix]
    except KeyError:
        raise RenderSinkError(f"Unsupported image extension {path.suffix!r} for {path}") from None


def plane_to_pixel(metadata: SamplingMetadata, point: Complex) -> tuple[int, int]:
    """Map a sampled plane coordinate to its ``(column, row)`` pixel.

    Row 0 is the top of the image, which holds the largest imaginary part.
    """

    column = int(round((point.real - metadata.x_min) / metadata.x_step))
    row_from_bottom = int(round((point.imag - metadata.y_min) / metadata.y_step))
    return column, metadata.height - 1 - row_from_bottom


def band_palette() -> np.ndarray:
    """RGB rows indexed by ``ColorBand.value``."""

    return np.array([band_rgb(band) for band in ColorBand], dtype=np.uint8)


class ImageSink:
    """Collect colored samples on a white canvas and write them to ``path``."""

    def __init__(self, metadata: SamplingMetadata, path: Path | str) -> None:
        self.metadata = metadata
        self.path = Path(path)
        self.image = PIL.Image.new("RGB", (metadata.width, metadata.height), tuple(BACKGROUND))

    def draw_pixel(self, point: Complex, color: RGB) -> bool:
        """Color the pixel under ``point``; points off the canvas are not drawn."""

        column, row = plane_to_pixel(self.metadata, point)
        if not (0 <= column < self.metadata.width and 0 <= row < self.metadata.height):
            return False
        self.image.putpixel((column, row), tuple(color))
        return True

    def draw(self, samples: Iterable[Sample]) -> int:
        drawn = 0
        for sample in samples:
            if self.draw_pixel(sample.coordinate, band_rgb(sample.band)):
                drawn += 1
        return drawn

    def paste_bands(self, bands: np.ndarray) -> None:
        """Draw a ``(height, width)`` array of band indices in sampling order."""

        expected = (self.metadata.height, self.metadata.width)
        if bands.shape != expected:
            raise ValueError(f"Band array shape {bands.shape} does not match grid {expected}")
        # Sampling row 0 is the bottom of the image.
        rgb = band_palette()[np.flipud(bands)]
        self.image = PIL.Image.fromarray(np.ascontiguousarray(rgb))

    def present(self) -> Path:
        """Write the image now, raising ``RenderSinkError`` if it cannot be saved."""

        directory = self.path.parent
        if not directory.is_dir():
            raise RenderSinkError(f"Output directory {directory} does not exist; unable to write {self.path}")
        try:
            self.image.save(str(self.path), format=_pil_format_name(self.path))
        except (OSError, ValueError) as exc:
            raise RenderSinkError(f"Unable to write result to {self.path}: {exc}") from exc
        return self.path
