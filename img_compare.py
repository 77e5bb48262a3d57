#!/usr/bin/env python3
"""
Compare two images pixel by pixel and write a diff image

Differing pixels are painted red, unchanged pixels are washed out toward white.

Usage:
    python img_compare.py <image1.tga> <image2.tga> <diff_output.tga>
"""

import os
import sys
import logging
import argparse

# Add the project root to Python path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from config import get_config
from diff.diff_engine import DiffConfig
from diff.errors import AllocationFailure, ArgumentError, DecodeError, DimensionMismatch
from diff.report import format_report
from services.compare_service import CompareService


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message):
        raise ArgumentError(message)


def build_parser(prog: str) -> argparse.ArgumentParser:
    parser = _ArgumentParser(prog=prog, description="Compare two images pixel by pixel",
                             add_help=False)
    parser.add_argument('image_a')
    parser.add_argument('image_b')
    parser.add_argument('diff_output')
    parser.add_argument('--wash-out-ratio', type=float, default=None,
                        help="Blend ratio toward white for unchanged pixels (default 0.5)")
    parser.add_argument('--verbose', '-v', action='store_true', help="Enable debug logging")
    return parser


def log_level(name) -> int:
    """Numeric level for a level name, WARNING for unknown names"""
    level = logging.getLevelName(str(name).upper())
    return level if isinstance(level, int) else logging.WARNING


def usage(prog: str) -> str:
    return f"Usage: {prog} <image1.tga> <image2.tga> <diff_output.tga>"


def main(argv=None) -> int:
    prog = sys.argv[0] if sys.argv and sys.argv[0] else 'img_compare.py'
    app_config = get_config()

    try:
        args = build_parser(prog).parse_args(argv)
        diff_config = DiffConfig(args.wash_out_ratio)
    except (ArgumentError, ValueError) as e:
        print(usage(prog))
        print(f"Error: {e}", file=sys.stderr)
        return 1

    level = logging.DEBUG if args.verbose else log_level(app_config.LOG_LEVEL)
    logging.basicConfig(level=level, format=app_config.LOG_FORMAT)
    logger = logging.getLogger('img_compare')

    service = CompareService(diff_config, output_format=app_config.DIFF_OUTPUT_FORMAT)

    try:
        outcome = service.compare_files(args.image_a, args.image_b, args.diff_output)
    except DecodeError as e:
        logger.error(str(e))
        print("Error loading images")
        print(f"Could not load: {e.path}")
        return 1
    except DimensionMismatch as e:
        logger.error(str(e))
        print("Error: Images have different dimensions")
        print(f"Image 1: {e.size_a[0]}x{e.size_a[1]}")
        print(f"Image 2: {e.size_b[0]}x{e.size_b[1]}")
        return 1
    except AllocationFailure as e:
        logger.error(str(e))
        print("Error allocating memory for diff image")
        return 1

    if outcome.saved:
        print(f"Diff image saved to: {args.diff_output}")
    else:
        print("Error writing diff image")

    for line in format_report(outcome.result):
        print(line)

    return 0 if outcome.saved else 1


if __name__ == "__main__":
    sys.exit(main())
