"""Module entrypoint for ``python -m lazytags``.

All argument parsing and lookup setup happen in ``lazytags.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()
