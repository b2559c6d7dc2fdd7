"""
Allow running the package with: python -m phashkit

Examples:
    python -m phashkit hash photo.jpg         # Print the four hashes
    python -m phashkit hash *.png --json      # JSON lines output
    python -m phashkit config --init          # Create example config file
"""

import sys


def main():
    from .cli import main as cli_main
    sys.exit(cli_main())


if __name__ == '__main__':
    main()
