"""
Argument parsing for the CLI interface.

Provides functions to create and configure the argument parser for the
phashkit command-line interface.
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Optional, Sequence

from .. import __version__


def create_parser() -> argparse.ArgumentParser:
    """
    Create and configure the argument parser for the CLI.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        prog='phashkit',
        description='Compute perceptual hashes (aHash, pHash, dHash, wHash) of images',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s hash photo.jpg
      Print the four hashes of one image

  %(prog)s hash *.png --json
      One JSON result per line, including errors and timing

  %(prog)s hash scans/*.tif --workers 8 --progress
      Hash many images in parallel with a progress bar

  %(prog)s config --init
      Create an example configuration file
        """
    )
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')

    subparsers = parser.add_subparsers(dest='command')

    hash_parser = subparsers.add_parser('hash', help='Hash one or more image files')
    hash_parser.add_argument(
        'files',
        type=Path,
        nargs='+',
        help='Image files to hash'
    )
    hash_parser.add_argument(
        '--json',
        action='store_true',
        help='Emit one JSON result per line'
    )
    hash_parser.add_argument(
        '-w', '--workers',
        type=int,
        default=None,
        help='Number of parallel workers. Default: from configuration'
    )
    hash_parser.add_argument(
        '--parallel',
        action='store_true',
        help='Also compute the four algorithms concurrently for each image'
    )
    hash_parser.add_argument(
        '--progress',
        action='store_true',
        help='Show a progress bar (requires tqdm)'
    )
    hash_parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable verbose logging'
    )

    config_parser = subparsers.add_parser('config', help='Show or create the user configuration')
    config_parser.add_argument(
        '-i', '--init',
        action='store_true',
        help='Create an example configuration file'
    )

    return parser


def parse_arguments(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """
    Parse and validate command-line arguments.

    Args:
        argv: Argument list (defaults to sys.argv[1:])

    Returns:
        Parsed arguments
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        parser.exit(2)

    if args.command == 'hash' and args.workers is not None and args.workers < 1:
        parser.error("--workers must be at least 1")

    return args


__all__ = ['create_parser', 'parse_arguments']
