"""Drive a single render from the sampling grid into an image file."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from .sampler import RenderParameters, compute_metadata, sample_grid
from .sink import ImageSink


def plot(params: RenderParameters, *, batched: bool = False, device: Optional[str] = None) -> Path:
    """Render ``params`` and write the image, returning the written path.

    ``RenderSinkError`` from the sink propagates to the caller.
    """

    metadata = compute_metadata(params)
    sink = ImageSink(metadata, params.output_path)

    if batched:
        from .batch import render_counts

        result = render_counts(params, device=device)
        sink.paste_bands(result.bands)
    else:
        sink.draw(sample_grid(params))

    return sink.present()
