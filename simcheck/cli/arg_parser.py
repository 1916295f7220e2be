"""
Argument parsing for the CLI interface.

Provides functions to create and configure the argument parser for the
similarity checker command-line interface. Defaults come from the user
configuration (environment variables, ~/.simcheck/config.json).
"""

from __future__ import annotations

import argparse
from pathlib import Path

from ..config import DECODE_POLICIES, PROGRESS_MODES
from ..scanner.hashing import HASH_ALGORITHMS
from ..user_config import get_user_config


def create_parser() -> argparse.ArgumentParser:
    """
    Create and configure the argument parser for the CLI.

    Returns:
        Configured ArgumentParser instance
    """
    user_config = get_user_config()

    parser = argparse.ArgumentParser(
        description='Find visually similar images',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s /path/to/photos
      Report every pair of images at least 90%% similar

  %(prog)s /path/to/photos --threshold 100 --unique-pairs
      Only identical fingerprints, each pair reported once

  %(prog)s /path/to/photos --export results.csv --export-format csv
      Export results to CSV for external review
        """
    )

    # Positional argument
    parser.add_argument(
        'directory',
        type=Path,
        help='Directory to scan for similar images (searched recursively)'
    )

    # Matching options
    parser.add_argument(
        '-t', '--threshold',
        type=float,
        default=user_config.default_threshold,
        help=f'Minimum similarity percentage (0-100], higher=stricter. '
             f'Default: {user_config.default_threshold}'
    )

    parser.add_argument(
        '--unique-pairs',
        action='store_true',
        help='Report each similar pair once instead of in both orders'
    )
    parser.set_defaults(unique_pairs=not user_config.symmetric_pairs)

    parser.add_argument(
        '--algorithm',
        choices=sorted(HASH_ALGORITHMS),
        default=user_config.hash_algorithm,
        help=f'Perceptual hash algorithm. Default: {user_config.hash_algorithm}'
    )

    parser.add_argument(
        '--decode-policy',
        choices=DECODE_POLICIES,
        default=user_config.decode_policy,
        help=f'What to do with unreadable images. Default: {user_config.decode_policy}'
    )

    parser.add_argument(
        '--progress-mode',
        choices=PROGRESS_MODES,
        default=user_config.progress_mode,
        help=f'How comparison progress is reported. Default: {user_config.progress_mode}'
    )

    # Export options
    parser.add_argument(
        '-e', '--export',
        type=Path,
        help='Export results to file'
    )

    parser.add_argument(
        '--export-format',
        choices=['txt', 'csv'],
        default='txt',
        help='Export format. Default: txt'
    )

    # Output options
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Verbose output'
    )

    parser.add_argument(
        '--no-progress',
        action='store_true',
        help='Disable progress bar (useful for piping output)'
    )

    return parser


def parse_arguments(argv=None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Args:
        argv: List of argument strings (default: sys.argv)

    Returns:
        Parsed arguments as Namespace object

    Examples:
        >>> args = parse_arguments(['/path/to/photos', '--threshold', '95'])
        >>> args.threshold
        95.0
    """
    parser = create_parser()
    return parser.parse_args(argv)


__all__ = [
    'create_parser',
    'parse_arguments',
]
