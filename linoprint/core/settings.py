"""
LinoPrint Print Settings

The numeric configuration that drives every render: tonal layer count,
thresholds, cut strategy and the simulated ink palette.
"""

import math
import numbers
import re
from dataclasses import dataclass, field, replace as dc_replace
from enum import Enum
from typing import List, Sequence, Tuple, Union

RGB = Tuple[int, int, int]
ColorLike = Union[str, Sequence[int]]

WHITE: RGB = (255, 255, 255)
BLACK: RGB = (0, 0, 0)

DEFAULT_LAYER_COUNT = 3

# Lightest ink first
DEFAULT_INK_PALETTE = ('#facc15', '#ef4444', '#171717', '#000000')

# Used by index when the layer count grows beyond the current ink list
PADDING_INK_PALETTE = ('#facc15', '#ef4444', '#1e40af', '#171717')

_HEX_COLOR = re.compile(r'^#?([a-f\d]{2})([a-f\d]{2})([a-f\d]{2})$', re.IGNORECASE)


class ViewMode(Enum):
    """What a render produces."""
    COMPOSITE = "composite"
    CUT_GUIDE = "cut_guide"


class CutStrategy(Enum):
    """How per-step stencils relate to each other."""
    STACK = "stack"  # Reduction print: one block, cumulative cuts
    ZONE = "zone"    # Isolated blocks: one tonal band per block


class BlendPolicy(Enum):
    """How stacked inks combine in the colour preview."""
    OPAQUE = "opaque"
    MULTIPLY = "multiply"


def round_half_up(value: float) -> int:
    """Round .5 away from zero for non-negative values."""
    return int(math.floor(value + 0.5))


def hex_to_rgb(value: str) -> RGB:
    """
    Parse a '#rrggbb' colour string.

    Raises:
        ValueError: If the string is not a six digit hex colour
    """
    match = _HEX_COLOR.match(value.strip())
    if not match:
        raise ValueError(f"Invalid hex colour: {value!r}")
    return tuple(int(part, 16) for part in match.groups())


def rgb_to_hex(color: RGB) -> str:
    return '#{:02x}{:02x}{:02x}'.format(*color)


def to_rgb(value: ColorLike) -> RGB:
    """Accept a hex string or an (r, g, b) sequence and return an RGB tuple."""
    if isinstance(value, str):
        return hex_to_rgb(value)
    channels = tuple(int(c) for c in value)
    if len(channels) != 3:
        raise ValueError(f"Colour must have 3 channels, got {len(channels)}")
    for channel in channels:
        if not 0 <= channel <= 255:
            raise ValueError(f"Colour channel {channel} outside 0-255")
    return channels


def to_threshold(value) -> int:
    """
    Convert a cut point to int, rejecting fractional or non-numeric values.

    Raises:
        ValueError: If value is not a whole number
    """
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, numbers.Integral) and not isinstance(value, bool):
        return int(value)
    raise ValueError(f"Threshold must be a whole number, got {value!r}")


def default_thresholds(layer_count: int) -> List[int]:
    """Evenly spaced cut points: round(255 / layer_count * i) for i = 1..layer_count-1."""
    step = 255 / layer_count
    return [round_half_up(step * i) for i in range(1, layer_count)]


def default_inks(layer_count: int) -> List[RGB]:
    """The default palette truncated to layer_count - 1 inks."""
    return resize_inks([hex_to_rgb(c) for c in DEFAULT_INK_PALETTE], layer_count)


def resize_inks(inks: Sequence[RGB], layer_count: int) -> List[RGB]:
    """
    Truncate or pad an ink list to layer_count - 1 entries.

    Existing entries keep their index. New slots are filled from the
    padding palette by index, falling back to black.
    """
    needed = layer_count - 1
    resized = list(inks[:needed])
    while len(resized) < needed:
        index = len(resized)
        if index < len(PADDING_INK_PALETTE):
            resized.append(hex_to_rgb(PADDING_INK_PALETTE[index]))
        else:
            resized.append(BLACK)
    return resized


@dataclass
class PrintSettings:
    """
    Configuration for rendering a composite preview or a cut guide.

    Attributes:
        layer_count: Number of tonal bands (layer_count - 1 inks / cut steps)
        thresholds: layer_count - 1 luminance cut points in 0-255, any order
        blur_amount: Pre-blur radius in pixels, applied before bucketing
        view_mode: Composite preview or cut guide
        selected_step: Cut step to render, 0-based
        inverted: Swap black and white in cut guides
        cut_strategy: Reduction (stack) or isolated (zone) cutting
        color_mode: Render the composite with simulated inks
        blend_policy: How inks combine in the colour composite
        paper_color: RGB colour of the paper
        ink_colors: layer_count - 1 RGB inks, lightest first
    """
    layer_count: int = DEFAULT_LAYER_COUNT
    thresholds: List[int] = field(
        default_factory=lambda: default_thresholds(DEFAULT_LAYER_COUNT))
    blur_amount: float = 0.0
    view_mode: ViewMode = ViewMode.COMPOSITE
    selected_step: int = 0
    inverted: bool = False
    cut_strategy: CutStrategy = CutStrategy.STACK
    color_mode: bool = False
    blend_policy: BlendPolicy = BlendPolicy.MULTIPLY
    paper_color: RGB = WHITE
    ink_colors: List[RGB] = field(
        default_factory=lambda: default_inks(DEFAULT_LAYER_COUNT))

    def __post_init__(self):
        self.view_mode = ViewMode(self.view_mode)
        self.cut_strategy = CutStrategy(self.cut_strategy)
        self.blend_policy = BlendPolicy(self.blend_policy)
        self.paper_color = to_rgb(self.paper_color)
        self.ink_colors = [to_rgb(c) for c in self.ink_colors]
        self.thresholds = [to_threshold(t) for t in self.thresholds]

    @property
    def step_count(self) -> int:
        """Number of inks, which is also the number of cut steps."""
        return self.layer_count - 1

    @property
    def sorted_thresholds(self) -> List[int]:
        """Ascending copy of the thresholds; the stored order is left alone."""
        return sorted(self.thresholds)

    def validate(self) -> Tuple[bool, str]:
        """
        Validate settings.

        Returns:
            Tuple of (is_valid, error_message)
        """
        if self.layer_count < 2:
            return False, f"Layer count must be at least 2, got {self.layer_count}"

        if len(self.thresholds) != self.step_count:
            return False, (
                f"Expected {self.step_count} thresholds for {self.layer_count} "
                f"layers, got {len(self.thresholds)}"
            )

        for threshold in self.thresholds:
            if not 0 <= threshold <= 255:
                return False, f"Threshold {threshold} outside 0-255"

        if len(self.ink_colors) != self.step_count:
            return False, (
                f"Expected {self.step_count} ink colours for {self.layer_count} "
                f"layers, got {len(self.ink_colors)}"
            )

        if not 0 <= self.selected_step < self.step_count:
            return False, (
                f"Selected step {self.selected_step} outside 0-{self.step_count - 1}"
            )

        if self.blur_amount < 0:
            return False, f"Blur amount must not be negative, got {self.blur_amount}"

        return True, ""

    def ensure_valid(self) -> None:
        """Raise ValueError if the settings are not valid."""
        is_valid, error = self.validate()
        if not is_valid:
            raise ValueError(error)

    def replace(self, **changes) -> 'PrintSettings':
        """Return a copy with some fields changed."""
        return dc_replace(self, **changes)

    def with_layer_count(self, layer_count: int) -> 'PrintSettings':
        """
        Return a copy resized to a new layer count.

        Thresholds are reset to even spacing, the ink list is truncated or
        padded by index, and an out of range selected step goes back to 0.
        """
        if layer_count < 2:
            raise ValueError(f"Layer count must be at least 2, got {layer_count}")
        selected_step = self.selected_step
        if selected_step >= layer_count - 1:
            selected_step = 0
        return dc_replace(
            self,
            layer_count=layer_count,
            thresholds=default_thresholds(layer_count),
            ink_colors=resize_inks(self.ink_colors, layer_count),
            selected_step=selected_step,
        )
