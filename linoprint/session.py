"""
LinoPrint Session

Holds the image being worked on. The master image is set once per load
and never changes; the working image is either the master or a crop of
it, and is replaced as a whole on every crop or reset.
"""

import logging
from typing import Callable, Iterator, Optional, Tuple

from .core.buffer import CropRect, PixelBuffer
from .core.settings import PrintSettings, ViewMode
from .image.composite import render_composite
from .image.crop import clamp_rect, crop
from .image.cut_guides import render_cut_guide
from .image.export import export_layers
from .image.prefilter import apply_blur

logger = logging.getLogger(__name__)


class NoImageError(RuntimeError):
    """Raised when a render is requested before an image is loaded."""


class PrintSession:
    """
    The master and working images plus the settings used to render them.

    Example:
        >>> session = PrintSession()
        >>> session.load(buffer)
        >>> session.apply_crop(CropRect(10, 10, 200, 150))
        >>> preview = session.render()
    """

    def __init__(self, settings: Optional[PrintSettings] = None):
        self.settings = settings or PrintSettings()
        self._master: Optional[PixelBuffer] = None
        self._working: Optional[PixelBuffer] = None
        self.crop_rect: Optional[CropRect] = None

    @property
    def master(self) -> Optional[PixelBuffer]:
        return self._master

    @property
    def working(self) -> Optional[PixelBuffer]:
        return self._working

    @property
    def has_image(self) -> bool:
        return self._working is not None

    def load(self, buffer: PixelBuffer) -> None:
        """Start working on a new image; any previous crop is discarded."""
        self._master = buffer
        self._working = buffer
        self.crop_rect = CropRect.full(buffer.width, buffer.height)
        logger.info("Loaded %dx%d image", buffer.width, buffer.height)

    def apply_crop(self, rect: CropRect) -> bool:
        """
        Replace the working image with a region of the master.

        Crops always sample the master, so cropping twice does not
        compound. The rectangle is clipped to the master image first; if
        nothing is left it is ignored.

        Returns:
            True if the working image changed
        """
        master = self._require_master()
        rect = clamp_rect(rect, master.width, master.height)
        if rect.is_degenerate:
            logger.debug("Ignoring empty crop rectangle %s", rect)
            return False

        self._working = crop(master, rect)
        self.crop_rect = rect
        logger.info("Cropped to %dx%d at (%d, %d)", rect.w, rect.h, rect.x, rect.y)
        return True

    def reset(self) -> None:
        """Discard any crop and go back to the master image."""
        master = self._require_master()
        self._working = master
        self.crop_rect = CropRect.full(master.width, master.height)

    def prepared_source(self, settings: Optional[PrintSettings] = None) -> PixelBuffer:
        """The working image with the settings' blur applied."""
        settings = settings or self.settings
        return apply_blur(self._require_working(), settings.blur_amount)

    def render(self, settings: Optional[PrintSettings] = None) -> PixelBuffer:
        """Render the current view: the composite preview or one cut guide."""
        settings = settings or self.settings
        settings.ensure_valid()
        source = self.prepared_source(settings)
        if settings.view_mode == ViewMode.CUT_GUIDE:
            return render_cut_guide(source, settings)
        return render_composite(source, settings)

    def export_all(self, settings: Optional[PrintSettings] = None,
                   should_cancel: Optional[Callable[[], bool]] = None
                   ) -> Iterator[Tuple[str, PixelBuffer]]:
        """Render the preview and every cut guide of the working image."""
        settings = settings or self.settings
        settings.ensure_valid()
        return export_layers(self.prepared_source(settings), settings, should_cancel)

    def _require_master(self) -> PixelBuffer:
        if self._master is None:
            raise NoImageError("No image loaded")
        return self._master

    def _require_working(self) -> PixelBuffer:
        if self._working is None:
            raise NoImageError("No image loaded")
        return self._working
