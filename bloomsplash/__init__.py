"""Headless core of the Bloom splash launcher.

Everything here is plain Python so it can be exercised without a display:

- sentinel marker lifecycle,
- interpreter/payload resolution,
- child environment construction,
- the termination decision driven by the splash event loop.

The Qt front end lives in its own package next to this one.
"""

from __future__ import annotations

from bloomsplash.version import __version__

__all__ = ["__version__"]
