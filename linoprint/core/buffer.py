"""
LinoPrint Pixel Buffers

Immutable RGBA pixel buffers and crop rectangles shared by every
transform in the engine.
"""

from dataclasses import dataclass
from typing import Tuple

import numpy as np
from PIL import Image


@dataclass(frozen=True, eq=False)
class PixelBuffer:
    """
    An immutable RGBA image.

    Pixels are stored as a read-only uint8 array of shape
    (height, width, 4), row-major with the origin at the top-left.
    Transforms never modify a buffer; they return a new one.
    """
    pixels: np.ndarray

    def __post_init__(self):
        pixels = np.asarray(self.pixels)
        if pixels.ndim != 3 or pixels.shape[2] != 4:
            raise ValueError(
                f"Pixel array must have shape (height, width, 4), got {pixels.shape}"
            )
        if pixels.dtype != np.uint8:
            raise ValueError(f"Pixel array must be uint8, got {pixels.dtype}")
        # Take a private copy so callers cannot mutate us through their array
        pixels = pixels.copy()
        pixels.flags.writeable = False
        object.__setattr__(self, 'pixels', pixels)

    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @property
    def height(self) -> int:
        return self.pixels.shape[0]

    @property
    def size(self) -> Tuple[int, int]:
        """(width, height) in pixels."""
        return self.width, self.height

    @property
    def rgb(self) -> np.ndarray:
        """Read-only view of the colour channels, shape (height, width, 3)."""
        return self.pixels[..., :3]

    @property
    def alpha(self) -> np.ndarray:
        """Read-only view of the alpha channel, shape (height, width)."""
        return self.pixels[..., 3]

    @classmethod
    def from_bytes(cls, width: int, height: int, data: bytes) -> 'PixelBuffer':
        """
        Build a buffer from a flat RGBA byte sequence.

        Args:
            width: Image width in pixels
            height: Image height in pixels
            data: width * height * 4 bytes, RGBA, row-major

        Raises:
            ValueError: If the byte count does not match the dimensions
        """
        if width < 0 or height < 0:
            raise ValueError(f"Invalid buffer size {width}x{height}")
        expected = width * height * 4
        if len(data) != expected:
            raise ValueError(
                f"Expected {expected} bytes for a {width}x{height} RGBA buffer, "
                f"got {len(data)}"
            )
        array = np.frombuffer(bytes(data), dtype=np.uint8).reshape(height, width, 4)
        return cls(array)

    @classmethod
    def from_image(cls, image: Image.Image) -> 'PixelBuffer':
        """Build a buffer from a Pillow image, converting to RGBA."""
        if image.mode != 'RGBA':
            image = image.convert('RGBA')
        return cls(np.array(image, dtype=np.uint8))

    @classmethod
    def filled(cls, width: int, height: int,
               color: Tuple[int, int, int, int]) -> 'PixelBuffer':
        """Create a buffer where every pixel has the same RGBA value."""
        array = np.empty((height, width, 4), dtype=np.uint8)
        array[...] = color
        return cls(array)

    def with_rgb(self, rgb: np.ndarray) -> 'PixelBuffer':
        """Return a new buffer with replaced colour channels and the same alpha."""
        out = np.empty_like(self.pixels)
        out[..., :3] = rgb
        out[..., 3] = self.alpha
        return PixelBuffer(out)

    def to_bytes(self) -> bytes:
        """Flat RGBA bytes, row-major."""
        return self.pixels.tobytes()

    def to_image(self) -> Image.Image:
        """Convert to a Pillow RGBA image."""
        return Image.fromarray(self.pixels.copy())

    def __eq__(self, other) -> bool:
        if not isinstance(other, PixelBuffer):
            return NotImplemented
        return (self.pixels.shape == other.pixels.shape
                and np.array_equal(self.pixels, other.pixels))


@dataclass(frozen=True)
class CropRect:
    """
    A crop selection in master-image pixel coordinates.

    Width and height may be negative while a selection is being dragged
    towards the top-left; call normalized() before sampling.
    """
    x: int
    y: int
    w: int
    h: int

    def normalized(self) -> 'CropRect':
        """Return the equivalent rectangle with non-negative width and height."""
        x, w = (self.x + self.w, -self.w) if self.w < 0 else (self.x, self.w)
        y, h = (self.y + self.h, -self.h) if self.h < 0 else (self.y, self.h)
        return CropRect(x, y, w, h)

    @property
    def is_degenerate(self) -> bool:
        """True when the rectangle has no area."""
        return self.w == 0 or self.h == 0

    def fits_within(self, width: int, height: int) -> bool:
        """Check whether the normalized rectangle lies inside an image."""
        rect = self.normalized()
        return (rect.x >= 0 and rect.y >= 0
                and rect.x + rect.w <= width
                and rect.y + rect.h <= height)

    @classmethod
    def full(cls, width: int, height: int) -> 'CropRect':
        """Rectangle covering a whole image."""
        return cls(0, 0, width, height)
