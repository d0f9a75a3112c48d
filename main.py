#!/usr/bin/env python3
"""main.py — CLI entry point for the slice effect generator.

Usage:
    python main.py <command> [options]

Commands:
    render    - Apply the slice effect to an image and write a PNG
    defaults  - Print the baseline parameter preset as JSON
    help      - Show this help message

Examples:
    python main.py render photo.jpg out.png
    python main.py render photo.jpg out.png --seed 7
    python main.py render photo.jpg out.png --set grayscale=1 --set slice_count=20
    python main.py render photo.jpg out.png --params preset.json --no-border
    python main.py defaults --by-alias
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any


def _load_params_file(path: Path) -> dict[str, Any]:
    from slicefx.exceptions import ParameterError

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise ParameterError(f"cannot read parameter file {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ParameterError(f"parameter file {path} must hold a JSON object")
    return data


def cmd_render(args: argparse.Namespace) -> int:
    """Render one image."""
    from pydantic import ValidationError

    from slicefx.adapter import load_bitmap, parse_override, save_png
    from slicefx.compositor import apply_effects
    from slicefx.exceptions import EffectError
    from slicefx.params import Parameters
    from slicefx.rng import fresh, seeded

    try:
        changes: dict[str, Any] = {}
        if args.params:
            changes.update(_load_params_file(Path(args.params)))
        for item in args.set or []:
            key, value = parse_override(item)
            changes[key] = value
        if args.corner_style:
            changes["corner_style"] = args.corner_style
        if args.no_border:
            changes["border_enabled"] = False
        params = Parameters().with_changes(**changes)

        source = load_bitmap(Path(args.input))
        rng = seeded(args.seed) if args.seed is not None else fresh()
        output = apply_effects(source, params, rng)
        out_path = save_png(output, Path(args.output))
    except (EffectError, ValidationError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print(f"  Input  : {args.input} ({source.width}x{source.height})")
    print(f"  Output : {out_path}")
    if args.seed is not None:
        print(f"  Seed   : {args.seed}")
    return 0


def cmd_defaults(args: argparse.Namespace) -> int:
    """Print the baseline preset."""
    from slicefx.params import default_parameters

    print(default_parameters().model_dump_json(indent=2, by_alias=args.by_alias))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Slice effect generator CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py render photo.jpg out.png
  python main.py render photo.jpg out.png --seed 7 --set tilt_angle=-5
  python main.py defaults
        """,
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # render subcommand
    render_parser = subparsers.add_parser(
        "render",
        help="Apply the slice effect to an image and write a PNG",
    )
    render_parser.add_argument("input", metavar="INPUT", help="Source image file")
    render_parser.add_argument("output", metavar="OUTPUT", help="Destination PNG file")
    render_parser.add_argument(
        "--seed",
        type=int,
        default=None,
        metavar="N",
        help="Seed for a reproducible layout (default: fresh randomness)",
    )
    render_parser.add_argument(
        "--params",
        default=None,
        metavar="FILE",
        help="JSON file of parameter overrides (snake_case or camelCase keys)",
    )
    render_parser.add_argument(
        "--set",
        action="append",
        metavar="KEY=VALUE",
        help="Override a single parameter; repeatable",
    )
    render_parser.add_argument(
        "--corner-style",
        choices=["all_corners", "single_right_angle"],
        default=None,
        help="Corner cut outline",
    )
    render_parser.add_argument(
        "--no-border", action="store_true", help="Skip the border strokes"
    )

    # defaults subcommand
    defaults_parser = subparsers.add_parser(
        "defaults",
        help="Print the baseline parameter preset as JSON",
    )
    defaults_parser.add_argument(
        "--by-alias", action="store_true", help="Use camelCase keys"
    )

    # help subcommand
    subparsers.add_parser("help", help="Show this help message")

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command == "render":
        return cmd_render(args)
    if args.command == "defaults":
        return cmd_defaults(args)
    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
