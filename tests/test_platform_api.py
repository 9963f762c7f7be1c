"""Tests for the platform API client using httpx.MockTransport."""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Callable

import httpx
import pytest

from adapters.platform_api import PlatformApiClient
from core.config import AppSettings
from core.domain.models import AppContext
from core.errors import ApiResponseError, AuthError, LinkedAppError

Handler = Callable[[httpx.Request], httpx.Response]


def _settings(tmp_path: Path, **overrides: object) -> AppSettings:
    values: dict[str, object] = {
        "api_base_url": "https://platform.test/api/cli",
        "auth_file": tmp_path / ".appshiprc",
        "deploy_key": "secret-key",
    }
    values.update(overrides)
    return AppSettings(**values)


def _client(tmp_path: Path, handler: Handler, **overrides: object) -> PlatformApiClient:
    return PlatformApiClient(
        _settings(tmp_path, **overrides),
        app_dir=tmp_path,
        transport=httpx.MockTransport(handler),
    )


async def _call(client: PlatformApiClient, *args, **kwargs):
    async with client:
        return await client.call_api(*args, **kwargs)


def test_call_api_sends_deploy_key_and_json_body(tmp_path: Path) -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"ok": True})

    client = _client(tmp_path, handler)
    result = asyncio.run(_call(client, "/apps/1/versions/1.0.0/promote/production", method="PUT", body={}))

    assert result == {"ok": True}
    request = seen[0]
    assert request.method == "PUT"
    assert request.url.path == "/api/cli/apps/1/versions/1.0.0/promote/production"
    assert request.headers["X-Deploy-Key"] == "secret-key"
    assert json.loads(request.content) == {}


def test_error_response_carries_json_and_err_text(tmp_path: Path) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(400, json={"errors": ["Version not found"]})

    client = _client(tmp_path, handler)
    with pytest.raises(ApiResponseError) as info:
        asyncio.run(_call(client, "/apps/1", method="PUT", body={}))

    error = info.value
    assert error.status_code == 400
    assert error.json == {"errors": ["Version not found"]}
    assert error.err_text == (
        '"PUT https://platform.test/api/cli/apps/1" returned "400" saying "Version not found"'
    )


def test_non_json_error_body_is_truncated(tmp_path: Path) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(502, text="x" * 400)

    client = _client(tmp_path, handler)
    with pytest.raises(ApiResponseError) as info:
        asyncio.run(_call(client, "/check"))

    assert info.value.json is None
    assert info.value.err_text.endswith('saying "' + "x" * 250 + '"')


def test_transport_errors_propagate_unwrapped(tmp_path: Path) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("no route", request=request)

    client = _client(tmp_path, handler)
    with pytest.raises(httpx.ConnectError):
        asyncio.run(_call(client, "/check"))


def test_credentials_read_from_auth_file(tmp_path: Path) -> None:
    (tmp_path / ".appshiprc").write_text(json.dumps({"deployKey": "from-file"}), encoding="utf-8")
    client = _client(tmp_path, lambda r: httpx.Response(200), deploy_key=None)

    assert client.read_credentials() == "from-file"
    asyncio.run(client.aclose())


def test_missing_credentials_raise_auth_error(tmp_path: Path) -> None:
    client = _client(tmp_path, lambda r: httpx.Response(200), deploy_key=None)

    with pytest.raises(AuthError):
        client.read_credentials()
    asyncio.run(client.aclose())


def test_check_credentials_rejected_key(tmp_path: Path) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path.endswith("/check")
        return httpx.Response(401, json={"errors": ["Invalid deploy key"]})

    client = _client(tmp_path, handler)

    async def check() -> None:
        async with client:
            await client.check_credentials()

    with pytest.raises(AuthError) as info:
        asyncio.run(check())

    assert "Invalid deploy key" in str(info.value)


def test_get_linked_app_reads_rc_file(tmp_path: Path) -> None:
    (tmp_path / ".appshipapprc").write_text(json.dumps({"id": 42, "key": "App42"}), encoding="utf-8")

    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/api/cli/apps/42"
        return httpx.Response(200, json={"id": 42, "title": "Lead Tracker", "status": "private"})

    client = _client(tmp_path, handler)

    async def linked() -> AppContext:
        async with client:
            return await client.get_linked_app()

    assert asyncio.run(linked()) == AppContext(id=42, title="Lead Tracker")


def test_unlinked_directory_raises(tmp_path: Path) -> None:
    client = _client(tmp_path, lambda r: httpx.Response(200))

    async def linked() -> AppContext:
        async with client:
            return await client.get_linked_app()

    with pytest.raises(LinkedAppError):
        asyncio.run(linked())
