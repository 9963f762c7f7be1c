"""Flattening of structured validation results.

The platform reports validation issues grouped by severity, e.g.:

    {"errors": [{"method": "triggers.new_lead", "description": "...", "link": "..."}]}

and, for some checks, grouped once more by check name:

    {"errors": {"T001": [{...}, {...}]}}

Both shapes collapse to an ordered list of `FlatIssue`.
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping

from core.domain.models import FlatIssue


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def _issues_in(group: Any) -> Iterable[Any]:
    if isinstance(group, Mapping):
        for nested in group.values():
            if isinstance(nested, list):
                yield from nested
    elif isinstance(group, list):
        yield from group


def flatten_check_result(check_result: Mapping[str, Any]) -> list[FlatIssue]:
    issues: list[FlatIssue] = []
    for category, group in check_result.items():
        for raw in _issues_in(group):
            if not isinstance(raw, Mapping):
                continue
            method = raw.get("method") or raw.get("key")
            issues.append(
                FlatIssue(
                    category=str(category),
                    method=_as_text(method),
                    description=_as_text(raw.get("description")),
                    link=_as_text(raw.get("link")),
                )
            )
    return issues
