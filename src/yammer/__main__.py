"""Run the CLI with `python -m yammer`."""

from __future__ import annotations

import sys

# Windows terminals default to cp1252; service definitions are often not ASCII.
if sys.platform == "win32":
    sys.stdout.reconfigure(encoding="utf-8")
    sys.stderr.reconfigure(encoding="utf-8")

from yammer.cli.main import run


def main() -> None:
    run()


if __name__ == "__main__":
    main()
