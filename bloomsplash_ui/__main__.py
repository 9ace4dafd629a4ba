from __future__ import annotations

import sys


def main() -> int:
    """Entry point for `python -m bloomsplash_ui`."""

    try:
        from bloomsplash_ui.app import run_app
    except ImportError as e:  # pragma: no cover
        sys.stderr.write(
            "The Bloom splash launcher requires PySide6. Install it (e.g. `pip install PySide6`)\n"
        )
        sys.stderr.write(f"ImportError: {e}\n")
        return 1

    return run_app(argv=sys.argv)


if __name__ == "__main__":
    raise SystemExit(main())
