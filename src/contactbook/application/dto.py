"""Operation results returned by the application layer.

Every use case returns either Success(value) or Failure(error), never both.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Generic, TypeVar

T = TypeVar("T")

INTERNAL_ERROR_MESSAGE = "Sorry, there has been an internal error."


class ErrorStatus(IntEnum):
    """Error classification. Values are the HTTP status codes the API answers with."""

    BAD_REQUEST = 400
    NOT_FOUND = 404
    CONFLICT = 409
    INTERNAL = 500


@dataclass(frozen=True)
class ApiError:
    """A handled error that bubbles up to the API with a user-facing message."""

    message: str = INTERNAL_ERROR_MESSAGE
    status: ErrorStatus = ErrorStatus.INTERNAL


@dataclass(frozen=True)
class Success(Generic[T]):
    value: T


@dataclass(frozen=True)
class Failure:
    error: ApiError


OperationResult = Success[T] | Failure


def bad_request(message: str) -> Failure:
    return Failure(ApiError(message=message, status=ErrorStatus.BAD_REQUEST))


def not_found(message: str) -> Failure:
    return Failure(ApiError(message=message, status=ErrorStatus.NOT_FOUND))


def conflict(message: str) -> Failure:
    return Failure(ApiError(message=message, status=ErrorStatus.CONFLICT))
