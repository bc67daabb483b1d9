"""Main entry point for the hygienic import consolidator."""

from .cli_full import cli


def main() -> None:
    """Main CLI entry point."""
    cli()


if __name__ == "__main__":
    main()
