"""
Command-line interface for the contour_overlay package.

Provides an argparse-based CLI with subcommands for creating overlays from
CSV files and for writing a default configuration file.

Usage:
    contour-overlay create samples.csv --output overlay1
    contour-overlay create samples.csv --method thin-plate-spline --grid-res 150 --no-kmz
    contour-overlay create samples.csv --config overlay.yaml --levels 0,10,20,50,100
    contour-overlay init-config overlay.yaml
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

import pandas as pd

from .api import create_overlay
from .config import OverlayConfig
from .exceptions import ContourOverlayError
from .interpolation import InterpolationMethod
from .logging_config import setup_logging


def setup_logging_from_args(args: argparse.Namespace) -> None:
    """
    Configure logging based on command-line arguments.

    Args:
        args: Parsed command-line arguments with verbose, quiet, log_file
    """
    if getattr(args, 'quiet', False):
        verbosity = -1  # WARNING
    elif getattr(args, 'verbose', False):
        verbosity = 1  # DEBUG
    else:
        verbosity = 0  # INFO

    setup_logging(verbosity=verbosity, log_file=getattr(args, 'log_file', None))


def parse_levels(levels_str: str) -> List[float]:
    """
    Parse a comma-separated list of contour break values.

    Raises:
        argparse.ArgumentTypeError: If any entry is not a number
    """
    try:
        return [float(part) for part in levels_str.split(",") if part.strip()]
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"Invalid levels: {levels_str}. Expected comma-separated numbers, e.g. 0,10,20"
        )


def parse_colors(colors_str: str) -> List[str]:
    """Parse a comma-separated list of Matplotlib colors."""
    return [part.strip() for part in colors_str.split(",") if part.strip()]


def load_config(config_path: Optional[str]) -> Optional[OverlayConfig]:
    """
    Load configuration from file.

    Args:
        config_path: Path to config file (YAML or JSON)

    Returns:
        OverlayConfig or None if no path provided

    Raises:
        ContourOverlayError: If the file format or contents are invalid
        FileNotFoundError: If the file does not exist
    """
    if config_path is None:
        return None
    return OverlayConfig.load_from_file(Path(config_path))


def _options_from_args(args: argparse.Namespace) -> dict:
    """Collect config overrides given explicitly on the command line."""
    options = {}
    if args.output is not None:
        options["output_name"] = args.output
    if args.levels is not None:
        options["contour_breaks"] = args.levels
    elif args.breaks is not None:
        options["contour_breaks"] = args.breaks
    if args.colors is not None:
        options["fill_colors"] = args.colors
    if args.alpha is not None:
        options["alpha"] = args.alpha
    if args.buffer_percent is not None:
        options["buffer_percent"] = args.buffer_percent
    if args.include_legend:
        options["include_legend"] = True
    if args.no_kmz:
        options["create_kmz"] = False
    if args.no_interpolate:
        options["interpolate"] = False
    if args.method is not None:
        options["interp_method"] = args.method
    if args.grid_res is not None:
        options["interp_grid_res"] = args.grid_res
    if args.width is not None:
        options["width"] = args.width
    if args.height is not None:
        options["height"] = args.height
    if args.dpi is not None:
        options["dpi"] = args.dpi
    return options


def cmd_create(args: argparse.Namespace) -> int:
    """Handle 'create' subcommand."""
    try:
        config = load_config(args.config)
        data = pd.read_csv(args.input)
        result = create_overlay(data, config, **_options_from_args(args))
    except ContourOverlayError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except (OSError, UnicodeDecodeError, pd.errors.ParserError, pd.errors.EmptyDataError) as e:
        print(f"Error reading input: {e}", file=sys.stderr)
        return 1

    for warning in result.warnings:
        print(f"Warning: {warning.message}", file=sys.stderr)

    print(f"Image: {result.image_path}")
    print(f"KML: {result.descriptor_path}")
    if result.archive_path is not None:
        print(f"KMZ: {result.archive_path}")
    return 0


def cmd_init_config(args: argparse.Namespace) -> int:
    """Handle 'init-config' subcommand."""
    try:
        OverlayConfig().save_to_file(Path(args.path))
    except ContourOverlayError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    print(f"Default configuration written to {args.path}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="contour-overlay",
        description="Create Google Earth contour overlays from lat/lon/value samples",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    def _add_logging_args(p: argparse.ArgumentParser, default=None) -> None:
        # Subcommands pass SUPPRESS so flags given before the subcommand
        # are not reset by the subparser defaults.
        p.add_argument(
            "-v", "--verbose",
            action="store_true",
            default=False if default is None else default,
            help="Enable DEBUG logging"
        )
        p.add_argument(
            "-q", "--quiet",
            action="store_true",
            default=False if default is None else default,
            help="Suppress INFO logging (WARNING+ only)"
        )
        p.add_argument(
            "--log-file",
            type=str,
            default=default,
            help="Write logs to file"
        )

    _add_logging_args(parser)

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # ========================================================================
    # create subcommand
    # ========================================================================
    parser_create = subparsers.add_parser(
        "create",
        help="Create PNG/KML/KMZ overlay from a CSV of samples"
    )
    _add_logging_args(parser_create, default=argparse.SUPPRESS)
    parser_create.add_argument(
        "input",
        type=str,
        help="CSV file with lat, lon and value columns"
    )
    parser_create.add_argument(
        "--output",
        type=str,
        help="Base name for output files (default: contour_overlay)"
    )
    parser_create.add_argument(
        "--config",
        type=str,
        help="Config file path (YAML/JSON)"
    )
    breaks_group = parser_create.add_mutually_exclusive_group()
    breaks_group.add_argument(
        "--breaks",
        type=int,
        help="Number of equal-width contour bands (default: 10)"
    )
    breaks_group.add_argument(
        "--levels",
        type=parse_levels,
        help="Explicit contour break values, comma-separated"
    )
    parser_create.add_argument(
        "--colors",
        type=parse_colors,
        help="Band fill colors, comma-separated (default: viridis)"
    )
    parser_create.add_argument(
        "--alpha",
        type=float,
        help="Band opacity between 0 and 1 (default: 0.7)"
    )
    parser_create.add_argument(
        "--buffer-percent",
        type=float,
        help="Bounding box padding in percent of each span (default: 2)"
    )
    parser_create.add_argument(
        "--include-legend",
        action="store_true",
        help="Draw the band legend on the overlay image"
    )
    parser_create.add_argument(
        "--no-kmz",
        action="store_true",
        help="Skip the KMZ archive"
    )
    parser_create.add_argument(
        "--no-interpolate",
        action="store_true",
        help="Contour raw samples without gridding"
    )
    parser_create.add_argument(
        "--method",
        type=str,
        help=(
            "Interpolation method: "
            + ", ".join(m.value for m in InterpolationMethod)
            + " (default: triangulation)"
        )
    )
    parser_create.add_argument(
        "--grid-res",
        type=int,
        help="Interpolation grid steps per axis (default: 100)"
    )
    parser_create.add_argument(
        "--width",
        type=float,
        help="Image width in inches (default: 10)"
    )
    parser_create.add_argument(
        "--height",
        type=float,
        help="Image height in inches (default: 8)"
    )
    parser_create.add_argument(
        "--dpi",
        type=int,
        help="Image resolution (default: 300)"
    )
    parser_create.set_defaults(func=cmd_create)

    # ========================================================================
    # init-config subcommand
    # ========================================================================
    parser_init = subparsers.add_parser(
        "init-config",
        help="Write the default configuration to a YAML/JSON file"
    )
    _add_logging_args(parser_init, default=argparse.SUPPRESS)
    parser_init.add_argument(
        "path",
        type=str,
        help="Destination (.yaml, .yml or .json)"
    )
    parser_init.set_defaults(func=cmd_init_config)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not hasattr(args, "func"):
        parser.print_help()
        return 1

    setup_logging_from_args(args)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
