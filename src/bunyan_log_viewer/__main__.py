"""Module entrypoint.

Allows:
    python -m bunyan_log_viewer
"""

from __future__ import annotations

from bunyan_log_viewer.cli import main

if __name__ == "__main__":
    main()
