"""Changelog lookup.

Reads `CHANGELOG.md` in the project directory and returns the entry for one
version. Supported headings:

    ## 1.0.0
    ## v1.0.0 - 2024-01-31
    ## [1.0.0] - 2024-01-31

The entry is everything up to the next `#`/`##` heading.
"""

from __future__ import annotations

from pathlib import Path

from core.logging_utils import get_logger

_logger = get_logger(__name__)


def _heading_version(line: str) -> str | None:
    if not line.startswith("## "):
        return None
    parts = line[3:].split()
    if not parts:
        return None
    token = parts[0].strip("[]")
    if token[:1] in ("v", "V"):
        token = token[1:]
    return token


def _is_section_break(line: str) -> bool:
    return line.startswith("## ") or line.startswith("# ")


def extract_version_entry(text: str, version: str) -> str | None:
    """Return the stripped entry for `version` in changelog `text`, if any."""

    lines = text.splitlines()
    for start, line in enumerate(lines):
        if _heading_version(line) != version:
            continue
        body: list[str] = []
        for following in lines[start + 1 :]:
            if _is_section_break(following):
                break
            body.append(following)
        entry = "\n".join(body).strip()
        return entry or None
    return None


def get_version_changelog(
    version: str,
    app_dir: Path | None = None,
    *,
    filename: str = "CHANGELOG.md",
) -> str | None:
    """Changelog entry for `version`; `None` when the file or entry is missing."""

    path = (app_dir or Path.cwd()) / filename
    if not path.is_file():
        _logger.debug("No changelog at %s", path)
        return None

    # Older changelogs are sometimes saved as Latin-1; undecodable bytes become U+FFFD.
    text = path.read_text(encoding="utf-8", errors="replace")
    entry = extract_version_entry(text, version)
    if entry is None:
        _logger.debug("No entry for %s in %s", version, path)
    return entry
