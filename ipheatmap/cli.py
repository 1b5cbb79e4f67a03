"""Command-line interface for ipheatmap."""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys

from .colour import GRADIENTS
from .config import DEFAULT_BITS_PER_PIXEL, HeatmapConfig
from .errors import HeatmapError
from .heatmap import Heatmap
from .modes import ValueMode
from .projection import image_size_for_bpp
from .report import build_report, validate_report
from .scale import DomainType

logger = logging.getLogger("ipheatmap")


def _configure_logging(verbose: int) -> None:
    level = logging.WARNING if verbose == 0 else logging.DEBUG
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(name)-18s | %(levelname)-7s | %(message)s",
        stream=sys.stderr,
    )


def _cmd_render(args: argparse.Namespace) -> int:
    config = HeatmapConfig.from_args(args)
    heatmap = Heatmap(config)

    if args.input:
        with open(args.input, "r", encoding="utf-8") as handle:
            heatmap.process_file(handle)
    else:
        heatmap.process_file(sys.stdin)

    # render fully before touching the output path
    image = heatmap.create_image()

    # the report is written first; a failed image save removes it again
    if args.report:
        report = build_report(heatmap)
        if not args.no_validate:
            validate_report(report)
        with open(args.report, "w") as handle:
            json.dump(report, handle, indent=2)

    try:
        image.save(args.output)
    except Exception:
        if args.report:
            os.remove(args.report)
        raise
    print(f"Saved {heatmap.image_size}x{heatmap.image_size} heatmap to {args.output}")
    if args.report:
        print(f"Report saved to {args.report}")
    return 0


def _cmd_size(args: argparse.Namespace) -> int:
    print(image_size_for_bpp(args.bits_per_pixel))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ipheatmap",
        description="Generate Hilbert curve heatmaps of the IPv4 address space",
    )
    parser.add_argument(
        "-v", "--verbose", action="count", default=0, help="Verbose output (-v for debug)"
    )
    sub = parser.add_subparsers(dest="command", required=True)

    render = sub.add_parser("render", help="Render records from a file or stdin to a PNG")
    render.add_argument("output", help="Output filename")
    render.add_argument("--input", help="Input path (defaults to stdin)")
    render.add_argument(
        "-z",
        dest="bits_per_pixel",
        type=int,
        default=DEFAULT_BITS_PER_PIXEL,
        help="Address space bits per pixel",
    )
    render.add_argument(
        "--curve",
        default=DomainType.LINEAR,
        type=DomainType.parse,
        help="Colour curve type: linear or logarithmic",
    )
    render.add_argument("--min-value", type=float, default=None, help="Minimum value for colour scaling (defaults to dataset minimum)")
    render.add_argument("--max-value", type=float, default=None, help="Maximum value for colour scaling (defaults to dataset maximum)")
    render.add_argument("-A", dest="log_min", type=float, default=None, help="Logarithmic scaling, min value (deprecated: use --min-value)")
    render.add_argument("-B", dest="log_max", type=float, default=None, help="Logarithmic scaling, max value (deprecated: use --max-value)")
    render.add_argument("-C", "--accumulate", action="store_true", help="Values accumulate instead of overwriting")
    render.add_argument(
        "--colour-scale",
        default="magma",
        help=f"Colour scale to use ({', '.join(GRADIENTS)}, accessible)",
    )
    render.add_argument(
        "--value-mode",
        default=ValueMode.SCALED,
        type=ValueMode.parse,
        help="Value mode: scaled (default), raw, or categorical",
    )
    render.add_argument("--separator", default=None, help="Single field separator character (default: comma or whitespace)")
    render.add_argument("--report", help="Write a JSON render report to this path")
    render.add_argument("--no-validate", action="store_true", help="Disable report schema validation")
    render.set_defaults(func=_cmd_render)

    size = sub.add_parser("size", help="Print the image side length for a granularity")
    size.add_argument("-z", dest="bits_per_pixel", type=int, default=DEFAULT_BITS_PER_PIXEL)
    size.set_defaults(func=_cmd_size)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)
    try:
        return args.func(args)
    except (HeatmapError, OSError) as exc:
        logger.error("%s", exc)
        return 1


if __name__ == "__main__":
    sys.exit(main())
