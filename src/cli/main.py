"""appship CLI (Typer).

Why this module is thin:
- Parses arguments, builds the concrete collaborators and maps errors to exit
  codes. The workflow itself lives in `core.services.promotion`.
"""

from __future__ import annotations

import asyncio
from functools import partial
from pathlib import Path

import httpx
import typer
from rich.console import Console

from adapters.changelog import get_version_changelog
from adapters.platform_api import PlatformApiClient
from cli.ui_components import RichPromotionUI, print_cancelled, print_error
from core.config import AppSettings
from core.domain.models import PromotionOutcome
from core.errors import AppshipError, PromotionCancelled
from core.interfaces.platform import PromotionUI
from core.logging_utils import configure_logging, get_logger
from core.services.promotion import promote as promote_version

EXIT_ERROR = 1
EXIT_CANCELLED = 130

PROMOTE_HELP = """Promotes a specific version to public access.

Promotes an app version into production (non-private) rotation, which means
new users can use this app version.

* This DOES mark the version as the official public version - all other
versions & users are grandfathered.

* This does NOT build/upload or deploy a version - run `appship push` first.

* This does NOT move old users over to this version - `appship migrate 1.0.0 1.0.1` does that.

* This does NOT recommend old users stop using this version - `appship deprecate 1.0.0 2017-01-01` does that.

Promotes are an inherently safe operation for all existing users of your app.

If this is your first time promoting, this starts the platform quality review
of your intent to make your app public.
"""

PROMOTE_EPILOG = "Examples: appship promote 1.0.0"

app = typer.Typer(no_args_is_help=True, help="Manage integrations on the app platform.")

_console = Console()
_logger = get_logger(__name__)


def build_platform_client(settings: AppSettings, app_dir: Path | None = None) -> PlatformApiClient:
    return PlatformApiClient(settings, app_dir=app_dir)


async def run_promote(
    version: str,
    *,
    settings: AppSettings,
    ui: PromotionUI,
    print_migrate_hint: bool = True,
    app_dir: Path | None = None,
) -> PromotionOutcome:
    """Wire the real collaborators into the promotion workflow."""

    get_changelog = partial(
        get_version_changelog,
        app_dir=app_dir,
        filename=settings.changelog_filename,
    )
    async with build_platform_client(settings, app_dir) as api:
        return await promote_version(
            version,
            api=api,
            get_changelog=get_changelog,
            ui=ui,
            print_migrate_hint=print_migrate_hint,
        )


def _validate_version(value: str) -> str:
    value = value.strip()
    if not value:
        raise typer.BadParameter("version must not be empty")
    return value


@app.callback()
def main(
    debug: bool = typer.Option(False, "--debug", help="Show debug logs on stderr."),
) -> None:
    configure_logging(debug=debug)


@app.command(help=PROMOTE_HELP, epilog=PROMOTE_EPILOG)
def promote(
    version: str = typer.Argument(
        ...,
        help="The version you want to promote.",
        callback=_validate_version,
    ),
) -> None:
    settings = AppSettings()
    ui = RichPromotionUI(_console)

    try:
        asyncio.run(run_promote(version, settings=settings, ui=ui))
    except PromotionCancelled as exc:
        print_cancelled(_console, str(exc))
        raise typer.Exit(code=EXIT_CANCELLED) from exc
    except AppshipError as exc:
        _logger.debug("Promotion failed", exc_info=True)
        print_error(_console, exc)
        raise typer.Exit(code=EXIT_ERROR) from exc
    except httpx.HTTPError as exc:
        _logger.debug("Request to the platform API failed", exc_info=True)
        print_error(_console, exc)
        raise typer.Exit(code=EXIT_ERROR) from exc


def run() -> None:
    app()


if __name__ == "__main__":
    run()
