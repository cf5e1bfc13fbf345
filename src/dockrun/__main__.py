"""Entry point for ``python -m dockrun``."""

from dockrun.cli.main import main


if __name__ == "__main__":
    main()
