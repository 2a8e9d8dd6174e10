"""Module entrypoint for ``python -m projdash``.

All argument parsing and runtime setup happen in ``projdash.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()
