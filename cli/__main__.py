"""Entry point: ``python -m cli``."""

import sys

from config import config
from cli.shell import LibraryShell
from core.books import BookStore, sample_books
from core.logging_config import setup_logging


def main() -> int:
    """Start an interactive session over the sample library."""
    setup_logging(config.log_level)
    LibraryShell(BookStore(sample_books())).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
