"""
LinoPrint I/O Module

Handles image import/export and settings files.
"""

from .image_importer import ImageImporter, capped_size
from .image_exporter import save_buffer, save_layers, layer_filename
from .settings_io import save_settings, load_settings

__all__ = [
    'ImageImporter', 'capped_size',
    'save_buffer', 'save_layers', 'layer_filename',
    'save_settings', 'load_settings',
]
