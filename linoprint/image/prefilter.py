"""
Pre-filtering

Softens the source image before it is bucketed, which smooths ragged
band edges in photographs.
"""

from PIL import ImageFilter

from ..core.buffer import PixelBuffer


def apply_blur(source: PixelBuffer, radius: float) -> PixelBuffer:
    """
    Gaussian blur of the colour channels.

    Args:
        source: Image to blur
        radius: Blur radius in pixels; 0 returns source unchanged

    Returns:
        Blurred buffer with the original alpha channel
    """
    if radius < 0:
        raise ValueError(f"Blur radius must not be negative, got {radius}")
    if radius == 0:
        return source

    rgb_image = source.to_image().convert('RGB')
    blurred = rgb_image.filter(ImageFilter.GaussianBlur(radius=radius))
    return source.with_rgb(PixelBuffer.from_image(blurred).rgb)
