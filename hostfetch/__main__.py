"""
Entry point for the hostfetch CLI application.
"""

import sys

from loguru import logger

from hostfetch.cli.main import app


def main():
    """Main entry point."""
    try:
        app()
    except Exception as e:
        logger.opt(exception=True).debug("Unhandled error")
        sys.stderr.write(f"hostfetch: unexpected error: {e}\n")
        sys.exit(1)


if __name__ == "__main__":
    main()
