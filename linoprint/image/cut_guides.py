"""
Cut Guide Generation

Produces the black and white stencil for one carving step.

Black means "keep" (the block surface stays and takes ink), white means
"carve away". Two strategies are supported:

- Stack (reduction): one block is carved progressively. Step k keeps
  everything darker than the k-th threshold counted from the lightest,
  so each stencil is a subset of the one before it.
- Zone (isolated): one block per ink. Step k keeps exactly one tonal
  band, so stencils never overlap.
"""

import logging

import numpy as np

from ..core.buffer import PixelBuffer
from ..core.settings import CutStrategy, PrintSettings
from .tonal import bucketize_luminance, luminance

logger = logging.getLogger(__name__)

KEEP_VALUE = 0
CARVE_VALUE = 255


def stack_keep_mask(values: np.ndarray, sorted_thresholds, threshold_index: int) -> np.ndarray:
    """
    Keep mask for reduction cutting.

    A negative threshold_index means the step lies beyond the available
    thresholds: nothing is kept.
    """
    if threshold_index < 0:
        return np.zeros(values.shape, dtype=bool)
    return values < sorted_thresholds[threshold_index]


def zone_keep_mask(values: np.ndarray, sorted_thresholds, target_bucket: int) -> np.ndarray:
    """Keep mask for isolated cutting: pixels in exactly one bucket."""
    return bucketize_luminance(values, sorted_thresholds) == target_bucket


def stencil_from_mask(source: PixelBuffer, keep: np.ndarray) -> PixelBuffer:
    """Map a keep mask to black (keep) and white (carve), keeping alpha."""
    values = np.where(keep, KEEP_VALUE, CARVE_VALUE).astype(np.uint8)
    return source.with_rgb(values[..., np.newaxis])


class CutGuideGenerator:
    """Generate cut stencils for a print."""

    def __init__(self, settings: PrintSettings):
        settings.ensure_valid()
        self.settings = settings
        self.sorted_thresholds = settings.sorted_thresholds

    def threshold_index(self, step: int) -> int:
        """Threshold used by a reduction step; later steps use lighter thresholds."""
        return (self.settings.layer_count - 2) - step

    def target_bucket(self, step: int) -> int:
        """Bucket isolated by a zone step; step 0 is the lightest ink band."""
        return (self.settings.layer_count - 1) - (step + 1)

    def keep_mask(self, source: PixelBuffer, step: int) -> np.ndarray:
        """Boolean (height, width) mask of pixels kept at a step, before inversion."""
        values = luminance(source.rgb)
        if self.settings.cut_strategy == CutStrategy.ZONE:
            return zone_keep_mask(values, self.sorted_thresholds, self.target_bucket(step))
        return stack_keep_mask(values, self.sorted_thresholds, self.threshold_index(step))

    def generate(self, source: PixelBuffer, step: int) -> PixelBuffer:
        """
        Render the stencil for one step.

        Args:
            source: Image to cut, already blurred if blur is wanted
            step: 0-based cut step

        Returns:
            Bitonal buffer with the same size and alpha as source

        Raises:
            ValueError: If step is outside 0..layer_count - 2
        """
        if not 0 <= step < self.settings.step_count:
            raise ValueError(
                f"Cut step {step} outside 0-{self.settings.step_count - 1}"
            )

        keep = self.keep_mask(source, step)
        if self.settings.inverted:
            keep = ~keep

        logger.debug(
            "Step %d (%s): keeping %d of %d pixels",
            step + 1, self.settings.cut_strategy.value,
            int(np.count_nonzero(keep)), keep.size
        )
        return stencil_from_mask(source, keep)


def render_cut_guide(source: PixelBuffer, settings: PrintSettings) -> PixelBuffer:
    """Render the stencil for settings.selected_step."""
    return CutGuideGenerator(settings).generate(source, settings.selected_step)


def step_label(settings: PrintSettings, step: int) -> str:
    """Human readable title of a cut step, e.g. 'Step 1 (lightest ink)'."""
    count = settings.step_count
    if count == 1:
        tone = "only ink"
    elif step == 0:
        tone = "lightest ink"
    elif step == count - 1:
        tone = "darkest ink"
    else:
        tone = "mid ink"
    return f"Step {step + 1} ({tone})"
