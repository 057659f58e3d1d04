#!/usr/bin/env python3
"""
LinoPrint - Main Entry Point

Command line front end: load a photo, render the print layers and save
them as PNG files.
Run with: python -m linoprint.main photo.jpg
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .core.buffer import CropRect
from .core.settings import BlendPolicy, CutStrategy, PrintSettings, ViewMode, to_rgb
from .image.cut_guides import step_label
from .image.export import single_view_label
from .io.image_exporter import DEFAULT_PREFIX, layer_filename, save_buffer, save_layers
from .io.image_importer import ImageImporter
from .io.settings_io import load_settings, save_settings
from .session import PrintSession


def _int_list(value: str) -> List[int]:
    try:
        return [int(part) for part in value.split(',') if part.strip()]
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected comma separated integers, got {value!r}")


def _crop_rect(value: str) -> CropRect:
    parts = _int_list(value)
    if len(parts) != 4:
        raise argparse.ArgumentTypeError(f"expected x,y,w,h, got {value!r}")
    return CropRect(*parts)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='linoprint',
        description="Split a photo into tonal layers and cut guides for relief printing.",
    )
    parser.add_argument('image', help="Input image file")
    parser.add_argument('-o', '--output-dir', default='.', help="Directory for the PNG files")
    parser.add_argument('--prefix', default=DEFAULT_PREFIX, help="File name prefix")
    parser.add_argument('--config', help="Settings JSON file to start from")
    parser.add_argument('--save-config', help="Write the final settings to this JSON file")

    tones = parser.add_argument_group('tones')
    tones.add_argument('--layers', type=int, help="Number of tonal layers (at least 2)")
    tones.add_argument('--thresholds', type=_int_list,
                       help="Comma separated cut points in 0-255, one fewer than layers")
    tones.add_argument('--blur', type=float, help="Blur radius in pixels applied first")
    tones.add_argument('--crop', type=_crop_rect, help="Crop region x,y,w,h")

    cuts = parser.add_argument_group('cut guides')
    cuts.add_argument('--strategy', choices=[s.value for s in CutStrategy],
                      help="stack: reduction print, zone: separate blocks")
    cuts.add_argument('--invert', action='store_true', default=None,
                      help="Swap black and white in cut guides")

    colors = parser.add_argument_group('colour preview')
    colors.add_argument('--color', action='store_true', default=None,
                        help="Render the preview with simulated inks")
    colors.add_argument('--blend', choices=[b.value for b in BlendPolicy],
                        help="How stacked inks combine")
    colors.add_argument('--paper', help="Paper colour as #rrggbb")
    colors.add_argument('--inks', help="Comma separated #rrggbb inks, lightest first")

    parser.add_argument('--view', choices=[v.value for v in ViewMode],
                        help="Export only this view instead of the full set")
    parser.add_argument('--step', type=int, help="1-based cut step for --view cut_guide")
    parser.add_argument('-v', '--verbose', action='store_true', help="Debug logging")
    return parser


def settings_from_args(args: argparse.Namespace) -> PrintSettings:
    """Start from defaults or a settings file and apply command line overrides."""
    settings = load_settings(args.config) if args.config else PrintSettings()

    if args.layers is not None and args.layers != settings.layer_count:
        settings = settings.with_layer_count(args.layers)

    changes = {}
    if args.thresholds is not None:
        changes['thresholds'] = args.thresholds
    if args.blur is not None:
        changes['blur_amount'] = args.blur
    if args.strategy is not None:
        changes['cut_strategy'] = CutStrategy(args.strategy)
    if args.invert is not None:
        changes['inverted'] = args.invert
    if args.color is not None:
        changes['color_mode'] = args.color
    if args.blend is not None:
        changes['blend_policy'] = BlendPolicy(args.blend)
    if args.paper is not None:
        changes['paper_color'] = to_rgb(args.paper)
    if args.inks is not None:
        changes['ink_colors'] = [to_rgb(c) for c in args.inks.split(',') if c.strip()]
    if args.view is not None:
        changes['view_mode'] = ViewMode(args.view)
    if args.step is not None:
        changes['selected_step'] = args.step - 1

    if changes:
        settings = settings.replace(**changes)
    settings.ensure_valid()
    return settings


def run(args: argparse.Namespace) -> List[Path]:
    """Execute one command line run and return the written files."""
    settings = settings_from_args(args)

    print(f"Loading {args.image}...")
    session = PrintSession(settings)
    session.load(ImageImporter().import_image(args.image))

    if args.crop is not None and not session.apply_crop(args.crop):
        print("Crop region is empty, using the whole image")

    width, height = session.working.size
    print(f"Working image: {width}x{height} pixels, {settings.layer_count} layers")

    if args.save_config:
        save_settings(settings, args.save_config)
        print(f"Saved settings to {args.save_config}")

    output_dir = Path(args.output_dir)
    if args.view is not None:
        output_dir.mkdir(parents=True, exist_ok=True)
        path = output_dir / layer_filename(single_view_label(settings), args.prefix)
        return [save_buffer(session.render(), path)]

    for step in range(settings.step_count):
        print(f"  {step_label(settings, step)}")
    return save_layers(session.export_all(), output_dir, args.prefix)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for LinoPrint."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(levelname)s %(name)s: %(message)s',
    )

    try:
        written = run(args)
    except (ValueError, RuntimeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    for path in written:
        print(f"Wrote {path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
