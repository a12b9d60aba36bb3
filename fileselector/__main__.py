"""Module entrypoint for ``python -m fileselector``."""

from .cli import main


if __name__ == "__main__":
    main()
