"""Domain layer: entities and value objects. No dependencies on outer layers."""

from contactbook.domain.entities import Contact, Email

__all__ = ["Contact", "Email"]
