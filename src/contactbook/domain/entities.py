"""Domain entities: Contact and Email."""

from dataclasses import dataclass, field
from datetime import date


@dataclass(frozen=True)
class Email:
    """An email address owned by a single Contact."""

    id: int = 0
    is_primary: bool = False
    address: str = field(default="")


@dataclass(frozen=True)
class Contact:
    """
    Represents a person in the address book.
    id is assigned by the store; a contact that was never stored carries 0.
    """

    id: int = 0
    name: str = field(default="")
    birth_date: date | None = None
    emails: tuple[Email, ...] = ()

    def __post_init__(self):
        if not self.name or not self.name.strip():
            raise ValueError("Contact name must be non-empty.")
        object.__setattr__(self, "emails", tuple(self.emails))

    @property
    def email_addresses(self) -> frozenset[str]:
        return frozenset(e.address for e in self.emails)

    def shares_email_with(self, other: "Contact") -> bool:
        """True if any address of this contact appears among the other's (exact match)."""
        return not self.email_addresses.isdisjoint(other.email_addresses)

    def conflicts_with(self, other: "Contact") -> bool:
        """Same name or at least one shared email address."""
        return self.name == other.name or self.shares_email_with(other)
