"""Module entrypoint for ``python -m termbrowse``."""

from .cli import main


if __name__ == "__main__":
    main()
