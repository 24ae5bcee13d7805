#!/usr/bin/env python3
"""Load contacts from a JSON file into the configured store.

The file holds a JSON array of contact contracts, the same shape the REST API
accepts: {"name": ..., "birthDate": "YYYY-MM-DD", "emails": [{"address": ...}]}.
Each one goes through ContactService.create_contact, so duplicates are
rejected exactly as over HTTP. Run from repo root with .env (CONTACTBOOK_STORE,
NEO4J_URI, NEO4J_USER, NEO4J_PASSWORD).
"""
import asyncio
import json
import os
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(REPO_ROOT / "src"))

from dotenv import load_dotenv  # noqa: E402
from neo4j import AsyncGraphDatabase  # noqa: E402
from pydantic import TypeAdapter  # noqa: E402

from api.contracts import ContactContract, contract_to_contact  # noqa: E402
from contactbook.application import ContactService, Failure  # noqa: E402
from contactbook.infrastructure import (  # noqa: E402
    InMemoryContactRepository,
    Neo4jContactRepository,
    ensure_contact_constraints,
)

load_dotenv(REPO_ROOT / ".env")

_CONTRACTS = TypeAdapter(list[ContactContract])


async def seed(service: ContactService, contracts: list[ContactContract]) -> tuple[int, int]:
    """Create each contract. Returns (created, rejected)."""
    created = rejected = 0
    for contract in contracts:
        converted = contract_to_contact(contract)
        if isinstance(converted, Failure):
            print(f"Skipped {contract.name!r}: {converted.error.message}")
            rejected += 1
            continue
        result = await service.create_contact(converted.value)
        if isinstance(result, Failure):
            print(f"Skipped {contract.name!r}: {result.error.message}")
            rejected += 1
        else:
            print(f"Created {result.value.name!r} with id {result.value.id}.")
            created += 1
    return created, rejected


async def _run(path: Path) -> int:
    contracts = _CONTRACTS.validate_json(path.read_bytes())
    backend = os.environ.get("CONTACTBOOK_STORE", "memory").strip().lower()
    if backend != "neo4j":
        created, rejected = await seed(
            ContactService(InMemoryContactRepository()), contracts
        )
        print(f"Dry run against the in-memory store: {created} created, {rejected} rejected.")
        return 0

    uri = os.environ.get("NEO4J_URI", "bolt://localhost:7687").strip()
    user = os.environ.get("NEO4J_USER", "neo4j").strip()
    password = os.environ.get("NEO4J_PASSWORD", "password").strip()
    database = os.environ.get("NEO4J_DATABASE", "").strip() or None
    driver = AsyncGraphDatabase.driver(uri, auth=(user, password))
    try:
        await ensure_contact_constraints(driver, database)
        repo = Neo4jContactRepository(driver, database=database)
        created, rejected = await seed(ContactService(repo), contracts)
        print(f"Seeding complete: {created} created, {rejected} rejected.")
        return 0
    finally:
        await driver.close()


def main() -> int:
    if len(sys.argv) != 2:
        print("Usage: seed_contacts.py <contacts.json>", file=sys.stderr)
        return 2
    try:
        return asyncio.run(_run(Path(sys.argv[1])))
    except Exception as e:
        print(f"Seeding failed: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
