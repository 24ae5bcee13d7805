"""Contact create, get, update, delete and search. Every call re-reads the store."""

import logging
from datetime import date

from contactbook.application.dto import (
    OperationResult,
    Success,
    bad_request,
    conflict,
    not_found,
)
from contactbook.application.ports import ContactRepository, DuplicateContactError
from contactbook.application.search import filter_contacts
from contactbook.domain import Contact

logger = logging.getLogger(__name__)

CONFLICT_MESSAGE = "A contact with this name or email address already exists."
ID_NOT_FOUND_MESSAGE = "A contact with this id was not found."
SEARCH_CRITERIA_MESSAGE = "Please specify the name or date range search parameter."
NO_RESULTS_MESSAGE = "No contacts were found."


def _find_by_id(contacts: list[Contact], contact_id: int) -> Contact | None:
    return next((c for c in contacts if c.id == contact_id), None)


class ContactService:
    """Validates contact operations against the current store contents.

    The read and the mutation are not atomic: two concurrent creates with the
    same name can both pass the conflict check. Stores close that window
    themselves by raising DuplicateContactError, which create reports as a
    conflict too.
    """

    def __init__(self, repository: ContactRepository) -> None:
        self._repo = repository

    async def create_contact(self, candidate: Contact) -> OperationResult[Contact]:
        """Create the contact unless one with the same name or any shared email exists."""
        contacts = await self._repo.get_all_contacts()
        clashing = [c for c in contacts if candidate.conflicts_with(c)]
        if clashing:
            logger.info(
                "Rejected contact %r: conflicts with id(s) %s",
                candidate.name,
                [c.id for c in clashing],
            )
            return conflict(CONFLICT_MESSAGE)

        try:
            created = await self._repo.create_contact(candidate)
        except DuplicateContactError:
            logger.info("Store rejected contact %r as duplicate", candidate.name)
            return conflict(CONFLICT_MESSAGE)
        return Success(created)

    async def get_contact(self, contact_id: int) -> OperationResult[Contact]:
        contact = _find_by_id(await self._repo.get_all_contacts(), contact_id)
        if contact is None:
            return not_found(ID_NOT_FOUND_MESSAGE)
        return Success(contact)

    async def update_contact(self, candidate: Contact) -> OperationResult[Contact]:
        """Replace name, birth date and the whole email set of an existing contact.

        No conflict check against other contacts is made here, unlike create.
        """
        existing = _find_by_id(await self._repo.get_all_contacts(), candidate.id)
        if existing is None:
            return not_found(ID_NOT_FOUND_MESSAGE)
        updated = await self._repo.update_contact(candidate)
        return Success(updated)

    async def delete_contact(self, contact_id: int) -> OperationResult[bool]:
        existing = _find_by_id(await self._repo.get_all_contacts(), contact_id)
        if existing is None:
            return not_found(ID_NOT_FOUND_MESSAGE)
        deleted = await self._repo.delete_contact(contact_id)
        return Success(deleted)

    async def search_contacts(
        self,
        name: str | None = None,
        birth_date_start: date | None = None,
        birth_date_end: date | None = None,
    ) -> OperationResult[list[Contact]]:
        """Search by name and/or birth date range. At least one criterion is required.

        The date range only applies when both bounds are given.
        """
        if name is None and birth_date_start is None and birth_date_end is None:
            return bad_request(SEARCH_CRITERIA_MESSAGE)

        found = filter_contacts(
            await self._repo.get_all_contacts(),
            name=name,
            start=birth_date_start,
            end=birth_date_end,
        )
        if not found:
            return not_found(NO_RESULTS_MESSAGE)
        return Success(found)
