"""
Crop Transform

Cuts an axis-aligned region out of a master image, pixel for pixel.
"""

from ..core.buffer import CropRect, PixelBuffer


def clamp_rect(rect: CropRect, width: int, height: int) -> CropRect:
    """
    Normalize a rectangle and intersect it with the image bounds.

    The result may be degenerate if the selection lies entirely
    outside the image.
    """
    rect = rect.normalized()
    left = min(max(rect.x, 0), width)
    top = min(max(rect.y, 0), height)
    right = min(max(rect.x + rect.w, 0), width)
    bottom = min(max(rect.y + rect.h, 0), height)
    return CropRect(left, top, right - left, bottom - top)


def crop(master: PixelBuffer, rect: CropRect) -> PixelBuffer:
    """
    Copy a rectangle of the master image into a new buffer.

    Args:
        master: Source image, never modified
        rect: Selection in master pixel coordinates; negative width or
            height is normalized first

    Returns:
        New buffer of the normalized rectangle's size

    Raises:
        ValueError: If the rectangle has no area or leaves the image
    """
    rect = rect.normalized()
    if rect.is_degenerate:
        raise ValueError(f"Crop rectangle has no area: {rect}")
    if not rect.fits_within(master.width, master.height):
        raise ValueError(
            f"Crop rectangle {rect} outside {master.width}x{master.height} image"
        )
    region = master.pixels[rect.y:rect.y + rect.h, rect.x:rect.x + rect.w]
    return PixelBuffer(region)
