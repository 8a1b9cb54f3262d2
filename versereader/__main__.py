"""Module entrypoint for running the reader as ``python -m versereader``."""

from __future__ import annotations

from versereader.cli import main


if __name__ == "__main__":
    main()
