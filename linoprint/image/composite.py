"""
Composite Preview Rendering

Produces the flat, posterized preview of the finished print, either as
gray bands or in simulated ink colours.
"""

import logging

import numpy as np

from ..core.buffer import PixelBuffer
from ..core.settings import PrintSettings
from .inks import build_bucket_colors
from .tonal import bucketize

logger = logging.getLogger(__name__)


def gray_levels(layer_count: int) -> np.ndarray:
    """
    Gray value of each bucket: round(bucket / (layer_count - 1) * 255).

    Halves round up, so the middle band of a 3-layer print is 128.
    """
    if layer_count < 2:
        raise ValueError(f"Layer count must be at least 2, got {layer_count}")
    buckets = np.arange(layer_count, dtype=np.float64)
    levels = np.floor(buckets * 255 / (layer_count - 1) + 0.5)
    return levels.astype(np.uint8)


def render_composite(source: PixelBuffer, settings: PrintSettings) -> PixelBuffer:
    """
    Render the posterized preview of a source image.

    Every pixel is replaced by the colour of its tonal bucket; alpha is
    kept as is. The view_mode of the settings is ignored.

    Args:
        source: Image to render, already blurred if blur is wanted
        settings: Print settings

    Returns:
        New buffer with the same size as source

    Raises:
        ValueError: If the settings are invalid
    """
    settings.ensure_valid()

    buckets = bucketize(source.rgb, settings.sorted_thresholds)

    if settings.color_mode:
        table = build_bucket_colors(
            settings.paper_color, settings.ink_colors,
            settings.layer_count, settings.blend_policy
        )
        rgb = table[buckets]
    else:
        levels = gray_levels(settings.layer_count)
        rgb = np.repeat(levels[buckets][..., np.newaxis], 3, axis=2)

    logger.debug(
        "Rendered %dx%d composite (%d layers, colour=%s)",
        source.width, source.height, settings.layer_count, settings.color_mode
    )
    return source.with_rgb(rgb)
