"""
Ink Compositing

Simulates how printed inks build up on paper so the composite preview
can show each tonal band in its final printed colour.

Bucket b of an N-layer print has N - 1 - b inks on it: the paper bucket
has none, the darkest bucket has every ink. Inks go down lightest first.
"""

from typing import Sequence

import numpy as np

from ..core.settings import RGB, BlendPolicy


def multiply_blend(base: RGB, ink: RGB) -> RGB:
    """Multiply blend of one ink over a colour: floor(a * c / 255) per channel."""
    return tuple((a * c) // 255 for a, c in zip(base, ink))


def stacked_color(paper: RGB, inks: Sequence[RGB], ink_count: int,
                  policy: BlendPolicy) -> RGB:
    """
    Colour of a region with the first ink_count inks printed on it.

    Args:
        paper: Paper colour
        inks: Inks, lightest first
        ink_count: How many inks (from the lightest) have been applied
        policy: MULTIPLY compounds every ink, OPAQUE shows only the last one

    Returns:
        RGB tuple
    """
    if policy == BlendPolicy.MULTIPLY:
        color = tuple(paper)
        for ink in inks[:ink_count]:
            color = multiply_blend(color, ink)
        return color

    if ink_count > 0:
        return tuple(inks[ink_count - 1])
    return tuple(paper)


def build_bucket_colors(paper: RGB, inks: Sequence[RGB], layer_count: int,
                        policy: BlendPolicy) -> np.ndarray:
    """
    Display colour for each bucket.

    Returns:
        Read-only uint8 array of shape (layer_count, 3), indexed by bucket
    """
    if len(inks) != layer_count - 1:
        raise ValueError(
            f"Expected {layer_count - 1} inks for {layer_count} layers, got {len(inks)}"
        )

    table = np.empty((layer_count, 3), dtype=np.uint8)
    for bucket in range(layer_count):
        ink_count = (layer_count - 1) - bucket
        table[bucket] = stacked_color(paper, inks, ink_count, policy)
    table.flags.writeable = False
    return table
