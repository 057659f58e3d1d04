"""
Image Exporter for LinoPrint

Writes rendered layers to PNG files.
"""

import logging
from pathlib import Path
from typing import Iterable, List, Tuple, Union

from ..core.buffer import PixelBuffer

logger = logging.getLogger(__name__)

DEFAULT_PREFIX = "linocut"


def layer_filename(label: str, prefix: str = DEFAULT_PREFIX, extension: str = "png") -> str:
    """File name for a rendered layer, e.g. 'linocut-00-preview.png'."""
    return f"{prefix}-{label}.{extension}"


def save_buffer(buffer: PixelBuffer, filepath: Union[str, Path]) -> Path:
    """
    Save a pixel buffer as a PNG file.

    Raises:
        ValueError: If the file cannot be written
    """
    path = Path(filepath)
    try:
        buffer.to_image().save(path, format='PNG')
    except OSError as e:
        raise ValueError(f"Failed to save {path}: {e}") from e
    logger.info("Saved %s", path)
    return path


def save_layers(layers: Iterable[Tuple[str, PixelBuffer]],
                output_dir: Union[str, Path],
                prefix: str = DEFAULT_PREFIX) -> List[Path]:
    """
    Save labelled layers into a directory.

    Layers are written as they arrive, so a lazily generated export is
    rendered and saved one image at a time.

    Args:
        layers: (label, buffer) pairs, e.g. from export_layers()
        output_dir: Directory to write into, created if missing
        prefix: File name prefix

    Returns:
        Paths of the written files in order
    """
    directory = Path(output_dir)
    directory.mkdir(parents=True, exist_ok=True)

    written = []
    for label, buffer in layers:
        written.append(save_buffer(buffer, directory / layer_filename(label, prefix)))
    return written
