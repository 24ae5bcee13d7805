"""Tests for InMemoryContactRepository."""

import asyncio
from datetime import date

import pytest

from contactbook.application import ContactNotFoundError, ContactService, DuplicateContactError, Success
from contactbook.domain import Contact, Email
from contactbook.infrastructure import InMemoryContactRepository


@pytest.mark.asyncio
async def test_create_assigns_sequential_ids():
    repo = InMemoryContactRepository()
    a = await repo.create_contact(Contact(name="A", emails=(Email(address="a@example.com"),)))
    b = await repo.create_contact(Contact(name="B", emails=(Email(address="b@example.com"),)))
    assert (a.id, b.id) == (1, 2)
    assert (a.emails[0].id, b.emails[0].id) == (1, 2)
    assert [c.id for c in await repo.get_all_contacts()] == [1, 2]


@pytest.mark.asyncio
async def test_create_rejects_duplicates_at_store_level():
    repo = InMemoryContactRepository()
    await repo.create_contact(Contact(name="A", emails=(Email(address="a@example.com"),)))
    with pytest.raises(DuplicateContactError):
        await repo.create_contact(Contact(name="A"))
    with pytest.raises(DuplicateContactError):
        await repo.create_contact(Contact(name="B", emails=(Email(address="a@example.com"),)))


@pytest.mark.asyncio
async def test_concurrent_creates_with_same_name_store_one_contact():
    """Both calls pass the service check; the store lets only one through."""

    class SlowReadRepository(InMemoryContactRepository):
        async def get_all_contacts(self):
            snapshot = await super().get_all_contacts()
            await asyncio.sleep(0)
            return snapshot

    repo = SlowReadRepository()
    service = ContactService(repo)
    results = await asyncio.gather(
        service.create_contact(Contact(name="Alice")),
        service.create_contact(Contact(name="Alice")),
    )
    assert sum(isinstance(r, Success) for r in results) == 1
    assert len(await repo.get_all_contacts()) == 1


@pytest.mark.asyncio
async def test_update_keeps_given_email_ids_and_assigns_new_ones():
    repo = InMemoryContactRepository()
    created = await repo.create_contact(
        Contact(name="A", emails=(Email(address="a@example.com"),))
    )
    kept = created.emails[0]
    updated = await repo.update_contact(
        Contact(
            id=created.id,
            name="A2",
            birth_date=date(1999, 9, 9),
            emails=(kept, Email(address="new@example.com")),
        )
    )
    assert updated.emails[0] == kept
    assert updated.emails[1].id not in (0, kept.id)
    assert (await repo.get_all_contacts())[0] == updated


@pytest.mark.asyncio
async def test_update_unknown_id_raises():
    repo = InMemoryContactRepository()
    with pytest.raises(ContactNotFoundError):
        await repo.update_contact(Contact(id=5, name="Nobody"))


@pytest.mark.asyncio
async def test_delete_reports_whether_removed():
    repo = InMemoryContactRepository()
    created = await repo.create_contact(Contact(name="A"))
    assert await repo.delete_contact(created.id) is True
    assert await repo.delete_contact(created.id) is False
    assert await repo.get_all_contacts() == []


@pytest.mark.asyncio
async def test_create_ignores_client_email_ids():
    repo = InMemoryContactRepository()
    a = await repo.create_contact(Contact(name="A", emails=(Email(address="a@example.com"),)))
    b = await repo.create_contact(
        Contact(name="B", emails=(Email(id=a.emails[0].id, address="b@example.com"),))
    )
    c = await repo.create_contact(
        Contact(name="C", emails=(Email(id=50, address="c@example.com"),))
    )
    ids = [e.id for contact in (a, b, c) for e in contact.emails]
    assert ids == [1, 2, 3]


@pytest.mark.asyncio
async def test_update_does_not_reuse_email_ids_of_other_contacts():
    repo = InMemoryContactRepository()
    a = await repo.create_contact(Contact(name="A", emails=(Email(address="a@example.com"),)))
    b = await repo.create_contact(Contact(name="B", emails=(Email(address="b@example.com"),)))
    foreign_id = a.emails[0].id

    updated = await repo.update_contact(
        Contact(id=b.id, name="B", emails=(Email(id=foreign_id, address="b2@example.com"),))
    )
    assert updated.emails[0].id not in (0, foreign_id, b.emails[0].id)

    all_ids = [e.id for contact in await repo.get_all_contacts() for e in contact.emails]
    assert len(all_ids) == len(set(all_ids))


@pytest.mark.asyncio
async def test_update_keeps_an_owned_email_id_only_once():
    repo = InMemoryContactRepository()
    created = await repo.create_contact(
        Contact(name="A", emails=(Email(address="a@example.com"),))
    )
    owned = created.emails[0].id
    updated = await repo.update_contact(
        Contact(
            id=created.id,
            name="A",
            emails=(Email(id=owned, address="a@example.com"), Email(id=owned, address="x@example.com")),
        )
    )
    assert updated.emails[0].id == owned
    assert updated.emails[1].id not in (0, owned)
