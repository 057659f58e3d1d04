"""
Settings File I/O for LinoPrint

Saves and loads print settings as JSON so a set of thresholds and inks
can be reused between runs. Colours are stored as '#rrggbb' strings.
"""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Union

from ..core.settings import (
    BlendPolicy, CutStrategy, PrintSettings, ViewMode,
    hex_to_rgb, resize_inks, rgb_to_hex
)

logger = logging.getLogger(__name__)

SETTINGS_VERSION = '1.0'


def settings_to_dict(settings: PrintSettings) -> Dict[str, Any]:
    """Convert PrintSettings to a JSON-friendly dictionary."""
    return {
        'layer_count': settings.layer_count,
        'thresholds': list(settings.thresholds),
        'blur_amount': settings.blur_amount,
        'view_mode': settings.view_mode.value,
        'selected_step': settings.selected_step,
        'inverted': settings.inverted,
        'cut_strategy': settings.cut_strategy.value,
        'color_mode': settings.color_mode,
        'blend_policy': settings.blend_policy.value,
        'paper_color': rgb_to_hex(settings.paper_color),
        'ink_colors': [rgb_to_hex(c) for c in settings.ink_colors],
    }


def _whole_number(data: Dict[str, Any], key: str, default: int) -> int:
    value = data.get(key, default)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"Invalid settings data: {key} must be a number, got {value!r}")
    if isinstance(value, float) and not value.is_integer():
        raise ValueError(f"Invalid settings data: {key} must be a whole number, got {value!r}")
    return int(value)


def _flag(data: Dict[str, Any], key: str, default: bool) -> bool:
    value = data.get(key, default)
    if not isinstance(value, bool):
        raise ValueError(f"Invalid settings data: {key} must be true or false, got {value!r}")
    return value


def dict_to_settings(data: Dict[str, Any]) -> PrintSettings:
    """
    Convert a dictionary to PrintSettings.

    Missing keys fall back to defaults. If the threshold or ink lists do
    not match the layer count they are resized the same way a layer
    count change resizes them.

    Raises:
        ValueError: If a value has the wrong type or an unknown mode
    """
    defaults = PrintSettings()
    layer_count = _whole_number(data, 'layer_count', defaults.layer_count)
    base = defaults.with_layer_count(layer_count)

    try:
        settings = PrintSettings(
            layer_count=layer_count,
            thresholds=data.get('thresholds', base.thresholds),
            blur_amount=float(data.get('blur_amount', base.blur_amount)),
            view_mode=ViewMode(data.get('view_mode', base.view_mode.value)),
            selected_step=_whole_number(data, 'selected_step', base.selected_step),
            inverted=_flag(data, 'inverted', base.inverted),
            cut_strategy=CutStrategy(data.get('cut_strategy', base.cut_strategy.value)),
            color_mode=_flag(data, 'color_mode', base.color_mode),
            blend_policy=BlendPolicy(data.get('blend_policy', base.blend_policy.value)),
            paper_color=hex_to_rgb(data.get('paper_color', rgb_to_hex(base.paper_color))),
            ink_colors=[hex_to_rgb(c) for c in data.get(
                'ink_colors', [rgb_to_hex(c) for c in base.ink_colors])],
        )
    except (TypeError, AttributeError) as e:
        raise ValueError(f"Invalid settings data: {e}") from e

    if len(settings.thresholds) != settings.step_count:
        logger.warning(
            "Settings have %d thresholds for %d layers, using even spacing",
            len(settings.thresholds), layer_count
        )
        settings = settings.replace(thresholds=base.thresholds)

    if len(settings.ink_colors) != settings.step_count:
        settings = settings.replace(ink_colors=resize_inks(settings.ink_colors, layer_count))

    return settings


def save_settings(settings: PrintSettings, filepath: Union[str, Path]) -> None:
    """
    Save settings to a JSON file.

    Raises:
        ValueError: If the file cannot be written
    """
    data = settings_to_dict(settings)
    data['version'] = SETTINGS_VERSION
    data['saved_at'] = datetime.now().isoformat()

    try:
        with open(filepath, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
    except OSError as e:
        raise ValueError(f"Error saving settings to {filepath}: {e}") from e

    logger.info("Saved settings to %s", filepath)


def load_settings(filepath: Union[str, Path]) -> PrintSettings:
    """
    Load settings from a JSON file.

    Raises:
        ValueError: If the file cannot be read or holds invalid settings
    """
    try:
        with open(filepath, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ValueError(f"Error loading settings from {filepath}: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"Settings file {filepath} does not contain an object")

    version = data.get('version', SETTINGS_VERSION)
    if version != SETTINGS_VERSION:
        logger.warning("Settings file %s has version %s, expected %s",
                       filepath, version, SETTINGS_VERSION)

    return dict_to_settings(data)
