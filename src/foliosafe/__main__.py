"""Entry point for `python -m foliosafe` and `foliosafe` CLI."""

from foliosafe.cli.app import app


def main() -> None:
    app()


if __name__ == "__main__":
    main()
