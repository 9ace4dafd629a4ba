"""PySide6 front end for the Bloom splash launcher.

The core (`bloomsplash/`) stays Qt-free; this package only owns the window,
the poll timer and the child-process watch.

Run from source:

    python -m bloomsplash_ui [arguments forwarded to Bloom]
"""

from __future__ import annotations

from bloomsplash.version import __version__

__all__ = ["__version__"]
