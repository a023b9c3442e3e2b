"""
Failure classification for user-visible outcomes.

Every failure that can reach a player is classified and explained.
Catalog authoring errors are NOT in this module: they abort startup
(see parsers.catalog_grammar.CatalogBuildError).

Outcome types:
- Success: Operation completed successfully
- Warning: Operation completed but produced no roster (recoverable)
- KnownFailure: System knows why it failed
"""

from enum import Enum

from pydantic import BaseModel, Field


class FailureKind(str, Enum):
    """Classification of failure types."""

    # Input validation failures
    INVALID_INPUT = "invalid_input"

    # Resource failures
    NOT_FOUND = "not_found"

    # Assignment outcome
    ASSIGNMENT_IMPOSSIBLE = "assignment_impossible"


class FailureDetail(BaseModel):
    """Detailed information about a failure."""

    kind: FailureKind = Field(
        ...,
        description="Classification of the failure",
    )
    message: str = Field(
        ...,
        description="User-appropriate explanation of what went wrong",
    )
    suggestion: str | None = Field(
        default=None,
        description="Suggested action for the user",
    )


# Standard messages
ASSIGNMENT_IMPOSSIBLE_DETAIL = FailureDetail(
    kind=FailureKind.ASSIGNMENT_IMPOSSIBLE,
    message="Too many distinct monsters requested for the enabled content.",
    suggestion="Enable more expansions or remove some slots.",
)


class KnownError(Exception):
    """
    Base class for exceptions that represent known, explainable failures.

    Subclass this for errors where the system knows exactly what went wrong.
    """

    def __init__(
        self,
        kind: FailureKind,
        message: str,
        suggestion: str | None = None,
        status_code: int = 400,
    ):
        self.kind = kind
        self.message = message
        self.suggestion = suggestion
        self.status_code = status_code
        super().__init__(message)

    def to_detail(self) -> FailureDetail:
        return FailureDetail(kind=self.kind, message=self.message, suggestion=self.suggestion)


class InvalidSlotError(KnownError):
    """Raised when a slot mutation is rejected."""

    def __init__(self, message: str, suggestion: str | None = None):
        super().__init__(
            kind=FailureKind.INVALID_INPUT,
            message=message,
            suggestion=suggestion,
            status_code=400,
        )


class NotFoundError(KnownError):
    """Raised when a preset, monster or session does not exist."""

    def __init__(self, message: str):
        super().__init__(kind=FailureKind.NOT_FOUND, message=message, status_code=404)
