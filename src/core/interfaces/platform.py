"""Contracts consumed by the promotion workflow.

Why Protocol:
- Defines a structural contract (duck typing) without rigid inheritance.
- Lets the workflow run against the real platform client and rich terminal,
  or against in-memory fakes in tests.
"""

from __future__ import annotations

from typing import Any, ContextManager, Protocol, runtime_checkable

from core.domain.models import AppContext


@runtime_checkable
class PlatformAPI(Protocol):
    """Authenticated access to the platform management API."""

    async def check_credentials(self) -> None:
        """Raise `AuthError` unless a valid deploy key is available."""

        ...

    async def get_linked_app(self) -> AppContext:
        """Resolve the app linked to the current project directory."""

        ...

    async def call_api(
        self,
        path: str,
        *,
        method: str = "GET",
        body: dict[str, Any] | None = None,
        require_auth: bool = True,
    ) -> Any:
        """Send a request; non-2xx responses raise `ApiResponseError`."""

        ...


@runtime_checkable
class ChangelogSource(Protocol):
    def __call__(self, version: str) -> str | None: ...


@runtime_checkable
class PromotionUI(Protocol):
    """Terminal side effects: output lines, confirmation, progress indicator."""

    def log(self, message: str) -> None:
        """Print a line; rich markup is allowed for accents."""

        ...

    def confirm(self, prompt: str) -> bool: ...

    def spinner(self, label: str) -> ContextManager[Any]:
        """Progress indicator shown while the context is open."""

        ...
