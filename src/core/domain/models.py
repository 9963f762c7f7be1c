"""Domain models (Pydantic v2).

Why Pydantic in the domain:
- Strict validation and self-documenting fields (Field) without coupling the
  core to I/O libraries.
- The remote API returns loosely-typed JSON; these models are the typed shape
  the rest of the code works with.

Note:
- These models describe *what* the information is, not *how* it is fetched.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class AppContext(BaseModel):
    """The remote app linked to the current project directory."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: int | str = Field(
        ...,
        description="Opaque app identifier assigned by the platform.",
    )
    title: str = Field(
        ...,
        description="Human readable app title.",
    )


class PromotionRequestBody(BaseModel):
    changelog: str | None = Field(
        default=None,
        description="Changelog text for the promoted version (omitted when absent).",
    )

    def to_payload(self) -> dict[str, Any]:
        """JSON payload for the promote call; unset keys are left out entirely."""

        return self.model_dump(exclude_none=True)


class FlatIssue(BaseModel):
    """A structured validation issue normalized to a flat record.

    The platform reports issues in several nested shapes (grouped by severity,
    sometimes by check); the CLI only ever needs these four fields.
    """

    category: str = Field(default="", description="Severity bucket (errors, warnings...).")
    method: str = Field(default="", description="Definition path or check that failed.")
    description: str = Field(default="", description="What is wrong.")
    link: str = Field(default="", description="Documentation link for the issue.")


class PromotionSuccess(BaseModel):
    kind: Literal["success"] = "success"


class PendingActivation(BaseModel):
    """Promotion accepted but the app still needs public activation."""

    kind: Literal["pending_activation"] = "pending_activation"
    activation_url: str = Field(..., min_length=1)


class ValidationFailure(BaseModel):
    kind: Literal["validation_failure"] = "validation_failure"
    errors: list[Any] = Field(
        ...,
        min_length=1,
        description="Plain strings or structured issue objects, in server order.",
    )


class TransportFailure(BaseModel):
    kind: Literal["transport_failure"] = "transport_failure"
    message: str = Field(..., min_length=1)


class UnrecognizedFailure(BaseModel):
    """Anything raised by the request that is not a known API error shape."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    kind: Literal["unrecognized"] = "unrecognized"
    error: BaseException


PromotionOutcome = Annotated[
    Union[
        PromotionSuccess,
        PendingActivation,
        ValidationFailure,
        TransportFailure,
        UnrecognizedFailure,
    ],
    Field(discriminator="kind"),
]
