"""Infrastructure layer: concrete implementations of application ports."""

from contactbook.infrastructure.dates import (
    DateConversionError,
    format_contract_date,
    parse_contract_date,
)
from contactbook.infrastructure.memory_repository import InMemoryContactRepository
from contactbook.infrastructure.persistence.neo4j_repository import (
    Neo4jContactRepository,
    ensure_contact_constraints,
)

__all__ = [
    "DateConversionError",
    "InMemoryContactRepository",
    "Neo4jContactRepository",
    "ensure_contact_constraints",
    "format_contract_date",
    "parse_contract_date",
]
