"""Entry point for ``python -m legendary``."""

from legendary.cli.main import cli

if __name__ == "__main__":
    cli()
