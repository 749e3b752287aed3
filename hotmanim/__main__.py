"""Module entrypoint for ``python -m hotmanim``."""

from .cli import main


if __name__ == "__main__":
    main()
