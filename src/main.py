"""Run script.

Why it exists:
- Lets `python -m main` run the CLI from `src/` during development.
- Keeps a simple entrypoint next to the `appship` console script.
"""

from __future__ import annotations

import sys

# Changelogs and app titles are UTF-8; Windows consoles default to cp1252.
if sys.platform == "win32":
    sys.stdout.reconfigure(encoding="utf-8")
    sys.stderr.reconfigure(encoding="utf-8")

from cli.main import run


def main() -> None:
    run()


if __name__ == "__main__":
    main()
