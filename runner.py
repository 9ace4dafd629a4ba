from __future__ import annotations

"""Repo-root convenience shim for launching the splash from a checkout.

    python runner.py [arguments forwarded to Bloom]

It delegates to the canonical entry point:

    python -m bloomsplash_ui

Bloom.exe is looked up next to this file, so a checkout can be dropped into
an installed Bloom directory for manual testing.
"""


def main() -> int:
    """Launch the splash.

    Arguments are forwarded exactly as in `python -m bloomsplash_ui`, but argv[0]
    stays this script so the payload is resolved relative to it.
    """

    from bloomsplash_ui.__main__ import main as ui_main

    return ui_main()


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
