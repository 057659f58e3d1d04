"""
Batch Export

Renders the full set of print layers in a fixed order: the composite
preview first, then one cut guide per step.
"""

import logging
from typing import Callable, Iterator, Optional, Tuple

from ..core.buffer import PixelBuffer
from ..core.settings import CutStrategy, PrintSettings, ViewMode
from .composite import render_composite
from .cut_guides import CutGuideGenerator

logger = logging.getLogger(__name__)

PREVIEW_LABEL = "00-preview"

STRATEGY_PREFIXES = {
    CutStrategy.STACK: "reduction",
    CutStrategy.ZONE: "isolated",
}


def cut_guide_label(strategy: CutStrategy, step: int) -> str:
    """Label of a batch cut guide, e.g. 'reduction-01-step-1' for step 0."""
    number = step + 1
    return f"{STRATEGY_PREFIXES[strategy]}-{number:02d}-step-{number}"


def single_view_label(settings: PrintSettings) -> str:
    """Label for exporting only the current view."""
    if settings.view_mode == ViewMode.COMPOSITE:
        return "preview"
    return f"cut-step-{settings.selected_step + 1}"


def export_layers(source: PixelBuffer, settings: PrintSettings,
                  should_cancel: Optional[Callable[[], bool]] = None
                  ) -> Iterator[Tuple[str, PixelBuffer]]:
    """
    Yield (label, buffer) pairs for the preview and every cut step.

    The preview is always a composite and each guide is a cut guide,
    whatever view the settings are on. Inversion, cut strategy and
    colour mode are taken from the settings.

    Args:
        source: Working image, already blurred if blur is wanted
        settings: Base print settings
        should_cancel: Optional callable checked between outputs; when it
            returns True no further outputs are produced

    Raises:
        ValueError: If the settings are invalid
    """
    settings.ensure_valid()

    preview_settings = settings.replace(view_mode=ViewMode.COMPOSITE)
    yield PREVIEW_LABEL, render_composite(source, preview_settings)

    for step in range(settings.step_count):
        if should_cancel is not None and should_cancel():
            logger.info("Export cancelled before step %d", step + 1)
            return
        step_settings = settings.replace(view_mode=ViewMode.CUT_GUIDE, selected_step=step)
        generator = CutGuideGenerator(step_settings)
        yield cut_guide_label(settings.cut_strategy, step), generator.generate(source, step)
