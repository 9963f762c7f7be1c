"""Promotion workflow.

Runs the promote command end to end against injected collaborators:

    credentials -> changelog -> confirmation -> linked app -> PUT -> classify -> report

Every stage runs to completion before the next one starts and nothing is
retried. The CLI owns the concrete collaborators (platform client, rich
terminal); tests pass fakes. Side effects are limited to `ui` output and the
single promote call.
"""

from __future__ import annotations

from typing import Any, Sequence

from rich.markup import escape
from rich.text import Text

from adapters.check_results import flatten_check_result
from core.domain.models import (
    PendingActivation,
    PromotionOutcome,
    PromotionRequestBody,
    PromotionSuccess,
    TransportFailure,
    UnrecognizedFailure,
    ValidationFailure,
)
from core.errors import (
    PromotionCancelled,
    PromotionTransportError,
    PromotionValidationError,
)
from core.interfaces.platform import ChangelogSource, PlatformAPI, PromotionUI
from core.logging_utils import get_logger

_logger = get_logger(__name__)

CANCELLED_MESSAGE = "Cancelled promote."
CHANGELOG_EXAMPLE_URL = "https://gist.github.com/xavdid/b9ede3565f1188ce339292acc29612b2"
CONFIRM_WITH_CHANGELOG = "Would you like to continue promoting with this changelog?"
CONFIRM_WITHOUT_CHANGELOG = "Would you like to continue promoting without a changelog?"
ERRORS_OPENER = "Promotion failed for the following reasons:\n\n"
MIGRATE_HINT = "Optionally, run the `appship migrate` command to move users to this version."


def promote_path(app_id: int | str, version: str) -> str:
    return f"/apps/{app_id}/versions/{version}/promote/production"


def _dig(data: Any, *keys: str) -> Any:
    """Nested dict lookup that returns None on any missing or non-dict level."""

    current = data
    for key in keys:
        if not isinstance(current, dict):
            return None
        current = current.get(key)
    return current


def serialize_errors(errors: Sequence[Any]) -> Text:
    """Render validation errors as a bullet list (links muted).

    The first element decides the shape: plain strings, or structured issues
    that go through `flatten_check_result`.
    """

    text = Text(ERRORS_OPENER)
    if isinstance(errors[0], str):
        text.append("\n".join(f"* {error}" for error in errors))
        return text

    issues = flatten_check_result({"errors": list(errors)})
    for index, issue in enumerate(issues):
        if index:
            text.append("\n")
        text.append(f"* {issue.method}: {issue.description}\n ")
        text.append(issue.link, style="bright_black")
    return text


def classify_failure(error: BaseException) -> PromotionOutcome:
    """Map whatever the promote call raised to an outcome.

    Checks run in a fixed order: activation URL, then errors, then error
    text. An activation URL wins even when errors are also present.
    """

    body = getattr(error, "json", None)

    activation_url = _dig(body, "activationInfo", "url")
    if activation_url:
        return PendingActivation(activation_url=str(activation_url))

    errors = _dig(body, "errors")
    if isinstance(errors, list) and errors:
        return ValidationFailure(errors=errors)

    err_text = getattr(error, "err_text", None)
    if isinstance(err_text, str) and err_text:
        return TransportFailure(message=err_text)

    return UnrecognizedFailure(error=error)


def report_outcome(
    outcome: PromotionOutcome,
    *,
    ui: PromotionUI,
    print_migrate_hint: bool = True,
) -> None:
    """Print terminal outcomes; raise for the failing ones."""

    if isinstance(outcome, PromotionSuccess):
        ui.log("  Promotion successful!")
        if print_migrate_hint:
            ui.log(MIGRATE_HINT)
    elif isinstance(outcome, PendingActivation):
        ui.log("\nGood news! Your app passes validation.")
        ui.log(
            f"The next step is to visit [cyan]{escape(outcome.activation_url)}[/cyan] "
            "to request public activation of your app."
        )
    elif isinstance(outcome, ValidationFailure):
        rendered = serialize_errors(outcome.errors)
        raise PromotionValidationError(rendered.plain, renderable=rendered)
    elif isinstance(outcome, TransportFailure):
        raise PromotionTransportError(outcome.message)
    else:
        raise outcome.error


def confirm_changelog(version: str, changelog: str | None, *, ui: PromotionUI) -> bool:
    if changelog:
        ui.log(f"[green]Changelog found for {escape(version)}[/green]")
        ui.log(f"\n---\n{escape(changelog)}\n---\n")
        return ui.confirm(CONFIRM_WITH_CHANGELOG)

    ui.log(
        "[yellow]Warning![/yellow] Changelog not found. Please create a CHANGELOG.md "
        f"file in a format similar to [cyan]{CHANGELOG_EXAMPLE_URL}[/cyan] "
        "with user-facing descriptions."
    )
    return ui.confirm(CONFIRM_WITHOUT_CHANGELOG)


async def promote(
    version: str,
    *,
    api: PlatformAPI,
    get_changelog: ChangelogSource,
    ui: PromotionUI,
    print_migrate_hint: bool = True,
) -> PromotionOutcome:
    """Promote `version` of the linked app to production.

    Returns `PromotionSuccess` or `PendingActivation`. Raises
    `PromotionCancelled` when the user declines, `PromotionValidationError` /
    `PromotionTransportError` for classified API failures, and re-raises
    anything else from the promote call unchanged.

    `print_migrate_hint=False` is for commands that embed promotion and
    migrate users themselves.
    """

    if not version:
        raise ValueError("version is required")

    await api.check_credentials()

    changelog = get_changelog(version)
    if not confirm_changelog(version, changelog, ui=ui):
        raise PromotionCancelled(CANCELLED_MESSAGE)

    app = await api.get_linked_app()
    ui.log(
        f"Preparing to promote version {escape(version)} of your app "
        f'"{escape(app.title)}".'
    )

    body = PromotionRequestBody(changelog=changelog or None)
    path = promote_path(app.id, version)
    _logger.debug("Promoting app %s version %s", app.id, version)

    outcome: PromotionOutcome
    try:
        with ui.spinner(f"Verifying and promoting {escape(version)}"):
            await api.call_api(path, method="PUT", body=body.to_payload(), require_auth=True)
    except Exception as exc:
        outcome = classify_failure(exc)
        _logger.debug("Promote call failed, classified as %s", outcome.kind)
        if isinstance(outcome, UnrecognizedFailure):
            raise
    else:
        outcome = PromotionSuccess()

    report_outcome(outcome, ui=ui, print_migrate_hint=print_migrate_hint)
    return outcome
