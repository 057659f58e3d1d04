"""
LinoPrint Image Processing Module

Contains the pixel transforms behind the print layers:
- Tonal bucketing of luminance against thresholds
- Ink compositing for the colour preview
- Composite preview and cut guide rendering
- Cropping, blur pre-filtering and batch export
"""

from .tonal import luminance, bucketize, bucket_for_rgb
from .inks import multiply_blend, build_bucket_colors
from .composite import render_composite
from .cut_guides import CutGuideGenerator, render_cut_guide, step_label
from .crop import crop, clamp_rect
from .export import export_layers, single_view_label
from .prefilter import apply_blur

__all__ = [
    'luminance',
    'bucketize',
    'bucket_for_rgb',
    'multiply_blend',
    'build_bucket_colors',
    'render_composite',
    'CutGuideGenerator',
    'render_cut_guide',
    'step_label',
    'crop',
    'clamp_rect',
    'export_layers',
    'single_view_label',
    'apply_blur',
]
