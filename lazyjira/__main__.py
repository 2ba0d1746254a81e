"""Module entrypoint for ``python -m lazyjira``."""

from .cli import main


if __name__ == "__main__":
    main()
