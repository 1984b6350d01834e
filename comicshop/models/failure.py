"""
Operation outcome envelope.

Every registry operation that can fail for a business reason returns an
OperationResult instead of raising. The console layer reads the outcome
and prints the explanation; nothing about a refused sale or a missing
comic needs a try/except at the call site.

Outcome types:
- Success: Operation completed (possibly with nothing to change)
- Refusal: Registry chose not to proceed (duplicate key)
- KnownFailure: Registry knows why it failed (not found, unavailable)

Exceptions raised inside the registry are subclasses of KnownError or
RefusalError and convert to an envelope with `to_result()`.
"""

from enum import Enum
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field


class FailureKind(str, Enum):
    """Classification of failure types."""

    # Input validation failures
    INVALID_INPUT = "invalid_input"
    MISSING_REQUIRED = "missing_required"

    # Resource failures
    NOT_FOUND = "not_found"

    # Constraint violations
    ALREADY_UNAVAILABLE = "already_unavailable"
    DUPLICATE_KEY = "duplicate_key"

    # Storage failures
    IO_FAILURE = "io_failure"


class OutcomeType(str, Enum):
    """High-level outcome classification."""

    SUCCESS = "success"
    REFUSAL = "refusal"
    KNOWN_FAILURE = "known_failure"


T = TypeVar("T")


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
    detail: str | None = Field(
        default=None,
        description="Additional technical detail (optional)",
    )
    suggestion: str | None = Field(
        default=None,
        description="Suggested action for the user",
    )


class OperationResult(BaseModel, Generic[T]):
    """
    Result envelope for registry operations.

    Every result is classified into one of three outcome types.
    Successful results may still carry warnings, e.g. when the
    change was applied in memory but could not be written to disk.
    """

    outcome: OutcomeType = Field(
        ...,
        description="High-level classification of the result",
    )
    data: T | None = Field(
        default=None,
        description="Affected entity (present on success)",
    )
    failure: FailureDetail | None = Field(
        default=None,
        description="Failure details (present on non-success)",
    )
    changed: bool = Field(
        default=True,
        description="Whether the operation changed registry state",
    )
    message: str | None = Field(
        default=None,
        description="Notice for the user on success",
    )
    warnings: list[FailureDetail] = Field(
        default_factory=list,
        description="Non-fatal problems, classified IO_FAILURE when a write failed",
    )

    @property
    def ok(self) -> bool:
        return self.outcome == OutcomeType.SUCCESS

    @property
    def kind(self) -> FailureKind | None:
        return self.failure.kind if self.failure else None

    @classmethod
    def success(
        cls,
        data: T | None = None,
        message: str | None = None,
        changed: bool = True,
    ) -> "OperationResult[T]":
        """Create a success result."""
        return cls(outcome=OutcomeType.SUCCESS, data=data, message=message, changed=changed)

    @classmethod
    def refusal(
        cls,
        kind: FailureKind,
        message: str,
        detail: str | None = None,
        suggestion: str | None = None,
    ) -> "OperationResult[Any]":
        """
        Create a refusal result.

        Use when the registry chose not to proceed due to a constraint.
        Example: Comic id already registered.
        """
        return cls(
            outcome=OutcomeType.REFUSAL,
            changed=False,
            failure=FailureDetail(
                kind=kind,
                message=message,
                detail=detail,
                suggestion=suggestion,
            ),
        )

    @classmethod
    def known_failure(
        cls,
        kind: FailureKind,
        message: str,
        detail: str | None = None,
        suggestion: str | None = None,
    ) -> "OperationResult[Any]":
        """
        Create a known failure result.

        Use when the registry knows exactly why the operation failed.
        Example: Comic not found, comic already sold.
        """
        return cls(
            outcome=OutcomeType.KNOWN_FAILURE,
            changed=False,
            failure=FailureDetail(
                kind=kind,
                message=message,
                detail=detail,
                suggestion=suggestion,
            ),
        )


# Standard exception types that map to known failures


class KnownError(Exception):
    """
    Base class for exceptions that represent known, explainable failures.

    Subclass this for errors where the registry knows exactly what went wrong.
    """

    def __init__(
        self,
        kind: FailureKind,
        message: str,
        detail: str | None = None,
        suggestion: str | None = None,
    ):
        self.kind = kind
        self.message = message
        self.detail = detail
        self.suggestion = suggestion
        super().__init__(message)

    def to_result(self) -> OperationResult[Any]:
        """Convert to an OperationResult."""
        return OperationResult.known_failure(
            kind=self.kind,
            message=self.message,
            detail=self.detail,
            suggestion=self.suggestion,
        )


class RefusalError(Exception):
    """
    Exception for constraint-based refusals.

    Use when the registry refuses to proceed due to a uniqueness constraint.
    """

    def __init__(
        self,
        kind: FailureKind,
        message: str,
        detail: str | None = None,
        suggestion: str | None = None,
    ):
        self.kind = kind
        self.message = message
        self.detail = detail
        self.suggestion = suggestion
        super().__init__(message)

    def to_result(self) -> OperationResult[Any]:
        """Convert to an OperationResult."""
        return OperationResult.refusal(
            kind=self.kind,
            message=self.message,
            detail=self.detail,
            suggestion=self.suggestion,
        )


class ComicNotFoundError(KnownError):
    """Raised when no comic in the inventory has the requested id."""

    def __init__(self, comic_id: str):
        self.comic_id = comic_id
        super().__init__(
            kind=FailureKind.NOT_FOUND,
            message=f"The comic with ID '{comic_id}' is not in the inventory.",
        )


class ComicUnavailableError(KnownError):
    """Raised when selling a comic that is already sold or reserved."""

    def __init__(self, comic_id: str, title: str, status: str):
        self.comic_id = comic_id
        super().__init__(
            kind=FailureKind.ALREADY_UNAVAILABLE,
            message=f"The comic '{title}' (ID: {comic_id}) has already been sold or reserved.",
            detail=f"Current status: {status}",
            suggestion="Mark it as available first if it was returned.",
        )


class UserNotFoundError(KnownError):
    """
    Raised when a transition names a customer who is not registered.

    Classified as invalid input: the operator typed an unknown id.
    """

    def __init__(self, user_id: str, kind: FailureKind = FailureKind.INVALID_INPUT):
        self.user_id = user_id
        super().__init__(
            kind=kind,
            message=f"The user with ID '{user_id}' does not exist.",
            suggestion="Register the user first.",
        )


class DuplicateKeyError(RefusalError):
    """Raised when an id or email is already registered."""

    def __init__(self, field_name: str, value: str):
        self.field_name = field_name
        self.value = value
        super().__init__(
            kind=FailureKind.DUPLICATE_KEY,
            message=f"The {field_name} '{value}' is already registered.",
            detail=f"Constraint violated: unique {field_name}",
        )


class MissingFieldError(KnownError):
    """Raised when an entity is entered without one of its required fields."""

    def __init__(self, message: str):
        super().__init__(
            kind=FailureKind.MISSING_REQUIRED,
            message=message,
            suggestion="Fill in every required field.",
        )


def io_failure(message: str, error: OSError) -> FailureDetail:
    """Describe a failed read or write of a data file."""
    return FailureDetail(
        kind=FailureKind.IO_FAILURE,
        message=message,
        detail=str(error),
        suggestion="Check that the data directory is writable.",
    )
