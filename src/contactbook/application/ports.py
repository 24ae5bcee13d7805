"""Application ports (interfaces). Implemented by infrastructure adapters."""

from typing import Protocol

from contactbook.domain import Contact


class DuplicateContactError(Exception):
    """Raised by a store that refuses to create a contact clashing with an existing one."""


class ContactNotFoundError(Exception):
    """Raised by a store asked to update a contact id it does not hold."""


class ContactRepository(Protocol):
    """Persists contacts. The store assigns contact and email ids."""

    async def create_contact(self, contact: Contact) -> Contact:
        """Store a new contact and return it with its assigned id.

        May raise DuplicateContactError if the store enforces uniqueness itself.
        """
        ...

    async def get_all_contacts(self) -> list[Contact]:
        """Return a full snapshot of all contacts in a stable order."""
        ...

    async def update_contact(self, contact: Contact) -> Contact:
        """Replace name, birth date and all emails of the contact with contact.id.

        Raises ContactNotFoundError if no such contact exists.
        """
        ...

    async def delete_contact(self, contact_id: int) -> bool:
        """Delete a contact. Returns True if removed, False if not found."""
        ...
