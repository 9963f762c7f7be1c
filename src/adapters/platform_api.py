"""Platform management API client.

Responsibilities:
- Locate the deploy key (env var or auth file) and send it on every call.
- Turn non-2xx responses into `ApiResponseError` with the parsed body attached.
- Resolve the app linked to the project directory (`.appshipapprc`).

Transport failures (`httpx.HTTPError`) are not wrapped: they reach the caller
unchanged.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import httpx

from adapters.http_client import build_async_client
from core.config import AppSettings
from core.domain.models import AppContext
from core.errors import ApiResponseError, AuthError, LinkedAppError
from core.logging_utils import get_logger

_logger = get_logger(__name__)

_DEPLOY_KEY_HEADER = "X-Deploy-Key"
_MAX_DETAIL_CHARS = 250


def _parse_json(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return None


def _error_detail(payload: Any, text: str) -> str:
    errors = payload.get("errors") if isinstance(payload, dict) else None
    if isinstance(errors, list) and errors and all(isinstance(e, str) for e in errors):
        return ", ".join(errors)
    return (text or "Unknown error")[:_MAX_DETAIL_CHARS]


class PlatformApiClient:
    """Async client for the platform API; use as `async with PlatformApiClient() as api`."""

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        app_dir: Path | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._app_dir = app_dir
        self._client = build_async_client(self._settings, transport=transport)

    async def __aenter__(self) -> "PlatformApiClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    def read_credentials(self) -> str:
        """Deploy key from settings (env) first, then the JSON auth file."""

        if self._settings.deploy_key:
            return self._settings.deploy_key

        auth_file = self._settings.auth_file.expanduser()
        missing = AuthError(
            f"No deploy key found in {auth_file}. "
            "Set APPSHIP_DEPLOY_KEY or store `deployKey` in that file."
        )
        if not auth_file.is_file():
            raise missing
        try:
            data = json.loads(auth_file.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise AuthError(f"Could not parse credentials file {auth_file}: {exc}") from exc

        key = data.get("deployKey") if isinstance(data, dict) else None
        if not isinstance(key, str) or not key.strip():
            raise missing
        return key.strip()

    async def check_credentials(self) -> None:
        self.read_credentials()
        try:
            await self.call_api("/check")
        except ApiResponseError as exc:
            raise AuthError(exc.err_text or str(exc)) from exc

    async def call_api(
        self,
        path: str,
        *,
        method: str = "GET",
        body: dict[str, Any] | None = None,
        require_auth: bool = True,
    ) -> Any:
        headers: dict[str, str] = {}
        if require_auth:
            headers[_DEPLOY_KEY_HEADER] = self.read_credentials()

        _logger.debug("%s %s", method, path)
        response = await self._client.request(method, path, json=body, headers=headers)
        _logger.debug("%s %s -> %s", method, path, response.status_code)

        payload = _parse_json(response)
        if response.status_code >= 400:
            detail = _error_detail(payload, response.text)
            err_text = (
                f'"{method} {response.request.url}" returned '
                f'"{response.status_code}" saying "{detail}"'
            )
            raise ApiResponseError(
                status_code=response.status_code,
                json=payload,
                err_text=err_text,
            )
        return payload

    def read_linked_app_id(self) -> int | str:
        """App id from the project's link file."""

        rc_path = (self._app_dir or Path.cwd()) / self._settings.app_rc_filename
        hint = "Run this command from a directory linked to an app."
        if not rc_path.is_file():
            raise LinkedAppError(f"{rc_path.name} not found in {rc_path.parent}. {hint}")
        try:
            data = json.loads(rc_path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise LinkedAppError(f"Could not parse {rc_path}: {exc}") from exc

        app_id = data.get("id") if isinstance(data, dict) else None
        if app_id in (None, ""):
            raise LinkedAppError(f"{rc_path.name} has no app id. {hint}")
        return app_id

    async def get_linked_app(self) -> AppContext:
        app_id = self.read_linked_app_id()
        data = await self.call_api(f"/apps/{app_id}")
        return AppContext.model_validate(data)
