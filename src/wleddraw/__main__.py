"""Main entry point for ``python -m wleddraw``."""

from wleddraw.cli.main import cli

if __name__ == "__main__":
    cli()
