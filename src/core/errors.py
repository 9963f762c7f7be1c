"""Error taxonomy shared by the core and the adapters.

Why a separate module:
- The CLI maps these classes to exit codes without knowing which layer raised them.
- Adapters raise `ApiResponseError`; the core classifies it.
"""

from __future__ import annotations

from typing import Any

from rich.console import RenderableType


class AppshipError(Exception):
    """Base class for classified, user-facing errors.

    `renderable` is an optional styled version of the message for terminals;
    `str(exc)` is always the plain text.
    """

    def __init__(self, message: str, *, renderable: RenderableType | None = None) -> None:
        super().__init__(message)
        self.renderable = renderable


class AuthError(AppshipError):
    """Missing or rejected deploy key."""


class LinkedAppError(AppshipError):
    """The current directory is not linked to a remote app."""


class PromotionCancelled(AppshipError):
    """The user declined the confirmation prompt."""


class PromotionValidationError(AppshipError):
    pass


class PromotionTransportError(AppshipError):
    pass


class ApiResponseError(AppshipError):
    """A non-2xx response from the platform API.

    Attributes mirror what callers inspect:
    - `status_code`: HTTP status.
    - `json`: parsed body (`None` when the body is not JSON).
    - `err_text`: one-line description of the failed request.
    """

    def __init__(self, *, status_code: int, json: Any = None, err_text: str | None = None) -> None:
        super().__init__(err_text or f"Request failed with status {status_code}")
        self.status_code = status_code
        self.json = json
        self.err_text = err_text
