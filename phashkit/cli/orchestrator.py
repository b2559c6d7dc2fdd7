"""
CLI workflow orchestration for phashkit.

Provides the CLIOrchestrator class that coordinates argument parsing,
hashing and output.
"""

from __future__ import annotations

import json
import logging
import sys
from typing import Optional, Sequence, TextIO

from ..calculator import HashCalculator
from ..user_config import get_user_config
from .arg_parser import parse_arguments


def setup_logging(verbose: bool = False) -> logging.Logger:
    """
    Configure logging for the CLI.

    Args:
        verbose: Enable verbose (DEBUG level) logging

    Returns:
        Configured logger instance
    """
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )
    return logging.getLogger(__name__)


class CLIOrchestrator:
    """Runs one CLI invocation and returns an exit code."""

    def __init__(self, out: Optional[TextIO] = None):
        self.out = out or sys.stdout
        self.logger: Optional[logging.Logger] = None

    def run(self, argv: Optional[Sequence[str]] = None) -> int:
        """
        Execute the command selected on the command line.

        Returns:
            0 if every image hashed (or config succeeded), 1 otherwise
        """
        args = parse_arguments(argv)
        if args.command == 'config':
            return self._run_config(args.init)

        self.logger = setup_logging(args.verbose)
        return self._run_hash(args)

    def _run_hash(self, args) -> int:
        calculator = HashCalculator(parallel_algorithms=args.parallel or None)
        if not calculator.is_available():
            self.logger.error("Image decoder is not available (is Pillow installed correctly?)")
            return 1

        paths = [str(p) for p in args.files]
        results = calculator.process_batch(
            paths,
            max_workers=args.workers,
            show_progress=args.progress,
        )

        failures = 0
        for path, result in zip(paths, results):
            if args.json:
                record = {'file': path, **result.to_dict()}
                print(json.dumps(record), file=self.out)
            elif result.success:
                h = result.data
                print(
                    f"{path}  aHash={h.a_hash} pHash={h.p_hash} dHash={h.d_hash} wHash={h.w_hash}",
                    file=self.out,
                )
            else:
                print(f"{path}  ERROR {result.error.code}: {result.error.message}", file=self.out)

            if not result.success:
                failures += 1

        if failures:
            self.logger.warning(f"{failures:,} of {len(paths):,} files could not be hashed")
        return 1 if failures else 0

    def _run_config(self, init: bool) -> int:
        config = get_user_config()

        if init:
            if config.create_example_config():
                print("Created example configuration file at:", file=self.out)
                print(f"  {config.config_file_path}", file=self.out)
                return 0
            print("Failed to create configuration file.", file=self.out)
            return 1

        print(f"Configuration file: {config.config_file_path}", file=self.out)
        if config.config_file_path.exists():
            print("Status: found", file=self.out)
        else:
            print("Status: not found (using defaults)", file=self.out)
            print("\nRun 'phashkit config --init' to create one.", file=self.out)

        print("\nCurrent settings:", file=self.out)
        print(f"  default_workers: {config.default_workers}", file=self.out)
        print(f"  max_image_pixels: {config.max_image_pixels:,}", file=self.out)
        print(f"  parallel_algorithms: {config.parallel_algorithms}", file=self.out)
        return 0


__all__ = ['CLIOrchestrator', 'setup_logging']
