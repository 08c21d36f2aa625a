"""Main module for the image timestamper CLI."""

import sys
import argparse
from typing import List, Optional

from . import __version__
from .core import ImageTimestamperError, UsageError, get_logger
from .core.factories import TimestamperFactory
from .core.logging_config import set_debug_logging


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for single-file and batch modes."""
    parser = argparse.ArgumentParser(
        prog="image-timestamper",
        description="Image Timestamp Tool - stamp each image's modified time onto the image",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Stamp a single image (writes timestamped_photo.jpg beside photo.jpg)
  image-timestamper photo.jpg

  # Stamp a single image to an explicit output path
  image-timestamper photo.jpg photo_with_time.jpg

  # Stamp every image in a directory
  image-timestamper --batch ./photos ./photos_with_timestamps
        """,
    )

    parser.add_argument("input", nargs="?", help="Input image")
    parser.add_argument(
        "output",
        nargs="?",
        help="Output image (default: timestamped_<input name> beside the input)",
    )
    parser.add_argument(
        "--batch",
        nargs=2,
        metavar=("INPUT_DIR", "OUTPUT_DIR"),
        help="Stamp every supported image in INPUT_DIR into OUTPUT_DIR",
    )
    parser.add_argument(
        "--fail-fast",
        action="store_true",
        help="In batch mode, stop at the first image that fails",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    return parser


def validate_args(args: argparse.Namespace) -> None:
    """
    Reject argument combinations argparse cannot express.

    Raises:
        UsageError: If batch mode is mixed with positional paths, or no
            input was given at all
    """
    if args.batch and (args.input or args.output):
        raise UsageError("--batch takes input and output directories; do not pass image paths as well")
    if not args.batch and not args.input:
        raise UsageError("An input image or --batch INPUT_DIR OUTPUT_DIR is required")


def main(argv: Optional[List[str]] = None) -> None:
    """
    Entry point for the image timestamper command-line interface.

    Exit status is 0 on success, 1 when stamping fails (or any image in a
    batch fails), 2 for invalid usage and 130 when interrupted.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.input and not args.batch:
        parser.print_help()
        sys.exit(1)

    logger = get_logger("image-timestamper")

    try:
        validate_args(args)

        if args.debug:
            set_debug_logging("image-timestamper")

        pipeline = TimestamperFactory.create_pipeline(fail_fast=args.fail_fast)

        if args.batch:
            input_dir, output_dir = args.batch
            report = pipeline.process_directory(input_dir, output_dir)
            if report.error_count:
                sys.exit(1)
        else:
            pipeline.stamp_file(args.input, args.output)

    except UsageError as e:
        logger.error(f"Usage error: {e}")
        parser.print_usage(sys.stderr)
        sys.exit(2)
    except KeyboardInterrupt:
        logger.warning("Processing interrupted by user.")
        sys.exit(130)
    except ImageTimestamperError as e:
        logger.error(f"Processing failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
