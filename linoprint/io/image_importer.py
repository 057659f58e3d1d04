"""
Image Importer for LinoPrint

Loads photographs into RGBA pixel buffers, capping the longer side so
every render stays fast.
"""

import logging
from pathlib import Path
from typing import Tuple, Union

from PIL import Image, UnidentifiedImageError

from ..core.buffer import PixelBuffer
from ..core.settings import round_half_up

logger = logging.getLogger(__name__)

MAX_IMAGE_DIMENSION = 1200


def capped_size(width: int, height: int,
                max_dimension: int = MAX_IMAGE_DIMENSION) -> Tuple[int, int]:
    """
    Size of an image after capping its longer side.

    The longer side becomes max_dimension and the shorter one is scaled
    in proportion, rounded to the nearest pixel. Images that already
    fit are left alone.
    """
    if width <= max_dimension and height <= max_dimension:
        return width, height
    if width > height:
        return max_dimension, round_half_up(height * max_dimension / width)
    return round_half_up(width * max_dimension / height), max_dimension


class ImageImporter:
    """
    Import raster images as pixel buffers.

    Any format Pillow can open is accepted. The result is always RGBA.
    """

    def __init__(self, max_dimension: int = MAX_IMAGE_DIMENSION):
        """
        Initialize image importer.

        Args:
            max_dimension: Longest allowed side in pixels
        """
        if max_dimension <= 0:
            raise ValueError(f"Maximum dimension must be positive, got {max_dimension}")
        self.max_dimension = max_dimension

    def load_image(self, image: Image.Image) -> PixelBuffer:
        """Convert an already opened Pillow image, applying the size cap."""
        original_width, original_height = image.size
        width, height = capped_size(original_width, original_height, self.max_dimension)

        if image.mode != 'RGBA':
            image = image.convert('RGBA')

        if (width, height) != (original_width, original_height):
            image = image.resize((width, height), Image.Resampling.LANCZOS)
            logger.info(
                "Downscaled image from %dx%d to %dx%d pixels",
                original_width, original_height, width, height
            )

        return PixelBuffer.from_image(image)

    def import_image(self, filepath: Union[str, Path]) -> PixelBuffer:
        """
        Load an image file.

        Args:
            filepath: Path to image file (PNG, JPG, etc.)

        Returns:
            RGBA pixel buffer

        Raises:
            ValueError: If the file cannot be read as an image
        """
        try:
            with Image.open(filepath) as img:
                img.load()
                buffer = self.load_image(img)
        except (OSError, UnidentifiedImageError) as e:
            raise ValueError(f"Failed to load image {filepath}: {e}") from e

        logger.info("Imported %s (%dx%d)", filepath, buffer.width, buffer.height)
        return buffer
