"""In-memory implementation of ContactRepository (no DB)."""

import asyncio
import itertools
from dataclasses import replace

from contactbook.application.ports import ContactNotFoundError, DuplicateContactError
from contactbook.domain import Contact, Email


class InMemoryContactRepository:
    """Stores contacts in memory. Order preserved by insertion.
    Contact and email ids are sequential, starting at 1. Mutations are serialised
    by a lock and create re-checks name/email uniqueness under it.
    """

    def __init__(self) -> None:
        self._by_id: dict[int, Contact] = {}
        self._contact_ids = itertools.count(1)
        self._email_ids = itertools.count(1)
        self._lock = asyncio.Lock()

    def _with_email_ids(
        self, emails: tuple[Email, ...], owned: frozenset[int] = frozenset()
    ) -> tuple[Email, ...]:
        """Keep an email id only if the contact already owns it; otherwise assign a fresh one."""
        out = []
        kept: set[int] = set()
        for e in emails:
            if e.id in owned and e.id not in kept:
                kept.add(e.id)
                out.append(e)
            else:
                out.append(replace(e, id=next(self._email_ids)))
        return tuple(out)

    async def create_contact(self, contact: Contact) -> Contact:
        async with self._lock:
            if any(contact.conflicts_with(c) for c in self._by_id.values()):
                raise DuplicateContactError(contact.name)
            stored = replace(
                contact,
                id=next(self._contact_ids),
                emails=self._with_email_ids(contact.emails),
            )
            self._by_id[stored.id] = stored
            return stored

    async def get_all_contacts(self) -> list[Contact]:
        return list(self._by_id.values())

    async def update_contact(self, contact: Contact) -> Contact:
        async with self._lock:
            if contact.id not in self._by_id:
                raise ContactNotFoundError(contact.id)
            owned = frozenset(e.id for e in self._by_id[contact.id].emails)
            stored = replace(contact, emails=self._with_email_ids(contact.emails, owned))
            self._by_id[contact.id] = stored
            return stored

    async def delete_contact(self, contact_id: int) -> bool:
        async with self._lock:
            return self._by_id.pop(contact_id, None) is not None
