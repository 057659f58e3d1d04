"""
LinoPrint Core Module

Contains the core data structures:
- PixelBuffer: Immutable RGBA image handed between transforms
- CropRect: Crop selection in master-image coordinates
- PrintSettings: Layer count, thresholds, cut strategy and ink palette
"""

from .buffer import PixelBuffer, CropRect
from .settings import (
    PrintSettings, ViewMode, CutStrategy, BlendPolicy,
    hex_to_rgb, rgb_to_hex, default_thresholds, resize_inks
)

__all__ = [
    'PixelBuffer', 'CropRect',
    'PrintSettings', 'ViewMode', 'CutStrategy', 'BlendPolicy',
    'hex_to_rgb', 'rgb_to_hex', 'default_thresholds', 'resize_inks',
]
