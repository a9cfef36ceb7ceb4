"""Module entrypoint for ``python -m memviz``.

All argument parsing and runtime setup happen in ``memviz.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()
