"""Application layer: use cases, ports, and result types. Depends only on domain."""

from contactbook.application.contact_service import ContactService
from contactbook.application.dto import (
    ApiError,
    ErrorStatus,
    Failure,
    OperationResult,
    Success,
)
from contactbook.application.ports import (
    ContactNotFoundError,
    ContactRepository,
    DuplicateContactError,
)

__all__ = [
    "ApiError",
    "ContactNotFoundError",
    "ContactRepository",
    "ContactService",
    "DuplicateContactError",
    "ErrorStatus",
    "Failure",
    "OperationResult",
    "Success",
]
