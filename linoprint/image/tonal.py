"""
Tonal Bucketing

Maps pixel luminance to ordered tonal bands. Bucket 0 is the darkest
band, bucket len(thresholds) is the paper (lightest) band.
"""

from typing import Sequence, Tuple

import numpy as np

# Perceptual luma weights, applied to the raw 8-bit values (no gamma)
LUMA_WEIGHTS = (0.299, 0.587, 0.114)


def luminance_of(rgb: Tuple[int, int, int]) -> float:
    """Luminance of a single RGB triple."""
    r, g, b = rgb
    return LUMA_WEIGHTS[0] * r + LUMA_WEIGHTS[1] * g + LUMA_WEIGHTS[2] * b


def luminance(rgb: np.ndarray) -> np.ndarray:
    """
    Luminance of every pixel.

    Args:
        rgb: uint8 array of shape (..., 3)

    Returns:
        float64 array of shape (...)
    """
    channels = rgb.astype(np.float64)
    # Same operation order as luminance_of so results agree bit for bit
    return (LUMA_WEIGHTS[0] * channels[..., 0]
            + LUMA_WEIGHTS[1] * channels[..., 1]
            + LUMA_WEIGHTS[2] * channels[..., 2])


def bucket_for_luminance(value: float, sorted_thresholds: Sequence[int]) -> int:
    """
    Index of the first threshold strictly greater than value.

    A luminance equal to a threshold lands in the lighter bucket. If no
    threshold exceeds the value the result is the paper bucket,
    len(sorted_thresholds).
    """
    for index, threshold in enumerate(sorted_thresholds):
        if value < threshold:
            return index
    return len(sorted_thresholds)


def bucket_for_rgb(rgb: Tuple[int, int, int], sorted_thresholds: Sequence[int]) -> int:
    """Bucket of a single pixel."""
    return bucket_for_luminance(luminance_of(rgb), sorted_thresholds)


def bucketize_luminance(values: np.ndarray, sorted_thresholds: Sequence[int]) -> np.ndarray:
    """Vectorised bucket_for_luminance over an array of luminance values."""
    edges = np.asarray(sorted_thresholds, dtype=np.float64)
    # side='right' counts thresholds <= value, which is the first index > value
    return np.searchsorted(edges, values, side='right').astype(np.intp)


def bucketize(rgb: np.ndarray, sorted_thresholds: Sequence[int]) -> np.ndarray:
    """
    Bucket index for every pixel.

    Args:
        rgb: uint8 array of shape (height, width, 3)
        sorted_thresholds: Ascending thresholds

    Returns:
        Integer array of shape (height, width) with values in
        0..len(sorted_thresholds)
    """
    return bucketize_luminance(luminance(rgb), sorted_thresholds)
