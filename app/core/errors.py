from enum import Enum
from typing import Optional

from fastapi import HTTPException, status


class ErrorKind(str, Enum):
    NOT_AUTHENTICATED = "not_authenticated"
    NOT_FOUND = "not_found"
    OUT_OF_RANGE = "out_of_range"
    ALREADY_CLOSED = "already_closed"
    INVALID_RECIPIENT = "invalid_recipient"
    INVALID_INPUT = "invalid_input"
    NOT_PERMITTED = "not_permitted"
    LOAD_FAILURE = "load_failure"


class MarketplaceError(Exception):
    """Base class for failures reported by the marketplace store."""

    kind: ErrorKind

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class NotAuthenticated(MarketplaceError):
    kind = ErrorKind.NOT_AUTHENTICATED

    def __init__(self, detail: str = "No user is logged in"):
        super().__init__(detail)


class NotFound(MarketplaceError):
    kind = ErrorKind.NOT_FOUND


class OutOfRange(MarketplaceError):
    kind = ErrorKind.OUT_OF_RANGE


class AlreadyClosed(MarketplaceError):
    kind = ErrorKind.ALREADY_CLOSED


class InvalidRecipient(MarketplaceError):
    kind = ErrorKind.INVALID_RECIPIENT


class InvalidInput(MarketplaceError):
    kind = ErrorKind.INVALID_INPUT


class NotPermitted(MarketplaceError):
    kind = ErrorKind.NOT_PERMITTED


class LoadFailure(MarketplaceError):
    """Raised by the bulk loader; absorbed during store initialization."""

    kind = ErrorKind.LOAD_FAILURE


STATUS_FOR_KIND = {
    ErrorKind.NOT_AUTHENTICATED: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.OUT_OF_RANGE: status.HTTP_400_BAD_REQUEST,
    ErrorKind.ALREADY_CLOSED: status.HTTP_409_CONFLICT,
    ErrorKind.INVALID_RECIPIENT: status.HTTP_400_BAD_REQUEST,
    ErrorKind.INVALID_INPUT: status.HTTP_400_BAD_REQUEST,
    ErrorKind.NOT_PERMITTED: status.HTTP_403_FORBIDDEN,
}


def raise_for_result(result):
    """Turn a failed CommandResult into an HTTPException, else return its value."""
    if result.ok:
        return result.value
    kind: Optional[ErrorKind] = result.error
    raise HTTPException(
        status_code=STATUS_FOR_KIND.get(kind, status.HTTP_400_BAD_REQUEST),
        detail=result.detail or "Request could not be completed",
    )
