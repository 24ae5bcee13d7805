"""
Contactbook core: clean-architecture layout.

- domain: entities (Contact, Email). No outer dependencies.
- application: use cases (ContactService), ports (ContactRepository), results.
- infrastructure: adapters (InMemoryContactRepository, Neo4jContactRepository)
  and wire date conversion.
"""

from contactbook.application import (
    ApiError,
    ContactNotFoundError,
    ContactRepository,
    ContactService,
    DuplicateContactError,
    ErrorStatus,
    Failure,
    OperationResult,
    Success,
)
from contactbook.domain import Contact, Email
from contactbook.infrastructure import (
    DateConversionError,
    InMemoryContactRepository,
    Neo4jContactRepository,
)

__all__ = [
    "ApiError",
    "Contact",
    "ContactNotFoundError",
    "ContactRepository",
    "ContactService",
    "DateConversionError",
    "DuplicateContactError",
    "Email",
    "ErrorStatus",
    "Failure",
    "InMemoryContactRepository",
    "Neo4jContactRepository",
    "OperationResult",
    "Success",
]
