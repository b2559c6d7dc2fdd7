"""
CLI package for phashkit.

Provides the command-line interface for hashing image files and
managing the user configuration.

Public API:
- main: Entry point for CLI execution
- CLIOrchestrator: CLI workflow orchestration class
- setup_logging: Configure logging for CLI runs
"""

from __future__ import annotations

from typing import Optional, Sequence

from .orchestrator import CLIOrchestrator, setup_logging
from .arg_parser import create_parser, parse_arguments


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Main entry point for the CLI.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    orchestrator = CLIOrchestrator()
    return orchestrator.run(argv)


__all__ = [
    'main',
    'CLIOrchestrator',
    'setup_logging',
    'create_parser',
    'parse_arguments',
]
