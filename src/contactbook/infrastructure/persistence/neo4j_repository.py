"""Neo4j implementation of ContactRepository.
Graph: (c:Contact {id, name, birth_date})-[:HAS_EMAIL]->(e:Email {id, address, is_primary}).
Integer ids come from (:Sequence {name}) counter nodes, one per label.
"""

from datetime import date

from contactbook.application.ports import ContactNotFoundError, DuplicateContactError
from contactbook.domain import Contact, Email

_CONSTRAINT_QUERIES = (
    """
    CREATE CONSTRAINT contact_id_unique IF NOT EXISTS
    FOR (c:Contact) REQUIRE c.id IS UNIQUE
    """,
    """
    CREATE CONSTRAINT sequence_name_unique IF NOT EXISTS
    FOR (s:Sequence) REQUIRE s.name IS UNIQUE
    """,
)

_NEXT_IDS_QUERY = """
MERGE (s:Sequence {name: $name})
ON CREATE SET s.value = 0
SET s.value = s.value + $count
RETURN s.value AS last
"""

_COUNT_CONFLICTS_QUERY = """
MATCH (c:Contact)
WHERE c.name = $name
   OR EXISTS { MATCH (c)-[:HAS_EMAIL]->(e:Email) WHERE e.address IN $addresses }
RETURN count(c) AS conflicts
"""

_CREATE_QUERY = """
CREATE (c:Contact {id: $id, name: $name, birth_date: $birth_date})
FOREACH (email IN $emails |
    CREATE (c)-[:HAS_EMAIL]->(:Email {
        id: email.id,
        address: email.address,
        is_primary: email.is_primary
    })
)
"""

_LIST_QUERY = """
MATCH (c:Contact)
OPTIONAL MATCH (c)-[:HAS_EMAIL]->(e:Email)
WITH c, e
ORDER BY e.id
RETURN c, collect(e) AS emails
ORDER BY c.id
"""

_REPLACE_QUERY = """
MATCH (c:Contact {id: $id})
OPTIONAL MATCH (c)-[:HAS_EMAIL]->(old:Email)
DETACH DELETE old
WITH DISTINCT c
SET c.name = $name, c.birth_date = $birth_date
FOREACH (email IN $emails |
    CREATE (c)-[:HAS_EMAIL]->(:Email {
        id: email.id,
        address: email.address,
        is_primary: email.is_primary
    })
)
RETURN c.id AS id
"""

_OWNED_EMAIL_IDS_QUERY = """
MATCH (c:Contact {id: $id})
OPTIONAL MATCH (c)-[:HAS_EMAIL]->(e:Email)
RETURN collect(e.id) AS email_ids
"""

_DELETE_QUERY = """
MATCH (c:Contact {id: $id})
OPTIONAL MATCH (c)-[:HAS_EMAIL]->(e:Email)
DETACH DELETE e, c
"""


async def ensure_contact_constraints(driver, database: str | None = None) -> None:
    """Create the Contact.id and Sequence.name uniqueness constraints if missing. Idempotent."""
    async with driver.session(database=database) as session:
        for query in _CONSTRAINT_QUERIES:
            result = await session.run(query)
            await result.consume()


async def _next_ids(tx, name: str, count: int) -> list[int]:
    """Reserve count consecutive ids from the named sequence."""
    if count <= 0:
        return []
    result = await tx.run(_NEXT_IDS_QUERY, name=name, count=count)
    record = await result.single()
    last = record["last"]
    return list(range(last - count + 1, last + 1))


async def _with_email_ids(
    tx, emails: tuple[Email, ...], owned: frozenset[int] = frozenset()
) -> list[dict]:
    """Keep an email id only if the contact already owns it; otherwise reserve a fresh one."""
    kept: set[int] = set()
    ids: list[int | None] = []
    for e in emails:
        if e.id in owned and e.id not in kept:
            kept.add(e.id)
            ids.append(e.id)
        else:
            ids.append(None)
    fresh = iter(await _next_ids(tx, "email", ids.count(None)))
    return [
        {
            "id": email_id if email_id is not None else next(fresh),
            "address": e.address,
            "is_primary": e.is_primary,
        }
        for e, email_id in zip(emails, ids)
    ]


def _to_native_date(value) -> date | None:
    if value is None:
        return None
    if isinstance(value, date):
        return value
    return value.to_native()


def _record_to_contact(record) -> Contact:
    c = record["c"]
    emails = tuple(
        Email(
            id=e["id"],
            address=e["address"],
            is_primary=bool(e.get("is_primary", False)),
        )
        for e in record["emails"]
    )
    return Contact(
        id=c["id"],
        name=c["name"],
        birth_date=_to_native_date(c.get("birth_date")),
        emails=emails,
    )


class Neo4jContactRepository:
    """Stores contacts in Neo4j through the async driver.
    Each call runs in its own managed transaction.
    """

    def __init__(self, driver: object, database: str | None = None) -> None:
        self._driver = driver
        self._database = database

    async def create_contact(self, contact: Contact) -> Contact:
        async with self._driver.session(database=self._database) as session:
            return await session.execute_write(self._create, contact)

    @staticmethod
    async def _create(tx, contact: Contact) -> Contact:
        # Bumping the sequence first takes its write lock, so concurrent creates
        # run the uniqueness check below one at a time.
        (contact_id,) = await _next_ids(tx, "contact", 1)
        result = await tx.run(
            _COUNT_CONFLICTS_QUERY,
            name=contact.name,
            addresses=sorted(contact.email_addresses),
        )
        record = await result.single()
        if record["conflicts"]:
            raise DuplicateContactError(contact.name)

        emails = await _with_email_ids(tx, contact.emails)
        result = await tx.run(
            _CREATE_QUERY,
            id=contact_id,
            name=contact.name,
            birth_date=contact.birth_date,
            emails=emails,
        )
        await result.consume()
        return Contact(
            id=contact_id,
            name=contact.name,
            birth_date=contact.birth_date,
            emails=tuple(Email(**e) for e in emails),
        )

    async def get_all_contacts(self) -> list[Contact]:
        async with self._driver.session(database=self._database) as session:
            return await session.execute_read(self._list_all)

    @staticmethod
    async def _list_all(tx) -> list[Contact]:
        result = await tx.run(_LIST_QUERY)
        return [_record_to_contact(record) async for record in result]

    async def update_contact(self, contact: Contact) -> Contact:
        async with self._driver.session(database=self._database) as session:
            return await session.execute_write(self._replace, contact)

    @staticmethod
    async def _replace(tx, contact: Contact) -> Contact:
        result = await tx.run(_OWNED_EMAIL_IDS_QUERY, id=contact.id)
        record = await result.single()
        if record is None:
            raise ContactNotFoundError(contact.id)
        owned = frozenset(record["email_ids"])
        emails = await _with_email_ids(tx, contact.emails, owned)
        result = await tx.run(
            _REPLACE_QUERY,
            id=contact.id,
            name=contact.name,
            birth_date=contact.birth_date,
            emails=emails,
        )
        if await result.single() is None:
            raise ContactNotFoundError(contact.id)
        return Contact(
            id=contact.id,
            name=contact.name,
            birth_date=contact.birth_date,
            emails=tuple(Email(**e) for e in emails),
        )

    async def delete_contact(self, contact_id: int) -> bool:
        async with self._driver.session(database=self._database) as session:
            return await session.execute_write(self._delete, contact_id)

    @staticmethod
    async def _delete(tx, contact_id: int) -> bool:
        result = await tx.run(_DELETE_QUERY, id=contact_id)
        summary = await result.consume()
        return summary.counters.nodes_deleted > 0
