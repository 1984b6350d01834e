from comicshop.models.comic import Comic, ComicStatus
from comicshop.models.failure import (
    ComicNotFoundError,
    ComicUnavailableError,
    DuplicateKeyError,
    FailureDetail,
    FailureKind,
    KnownError,
    MissingFieldError,
    OperationResult,
    OutcomeType,
    RefusalError,
    UserNotFoundError,
    io_failure,
)
from comicshop.models.user import User

__all__ = [
    "Comic",
    "ComicNotFoundError",
    "ComicStatus",
    "ComicUnavailableError",
    "DuplicateKeyError",
    "FailureDetail",
    "FailureKind",
    "KnownError",
    "MissingFieldError",
    "OperationResult",
    "OutcomeType",
    "RefusalError",
    "User",
    "UserNotFoundError",
    "io_failure",
]
