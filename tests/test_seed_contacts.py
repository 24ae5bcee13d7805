"""Tests for scripts/seed_contacts.py against the in-memory store."""

import importlib.util
import json
from pathlib import Path

import pytest

from contactbook.application import ContactService
from contactbook.infrastructure import InMemoryContactRepository

_SCRIPT = Path(__file__).resolve().parent.parent / "scripts" / "seed_contacts.py"


@pytest.fixture(scope="module")
def seed_module():
    spec = importlib.util.spec_from_file_location("seed_contacts", _SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.mark.asyncio
async def test_seed_creates_and_rejects(seed_module):
    contracts = seed_module._CONTRACTS.validate_python(
        [
            {"name": "Alice", "birthDate": "1990-05-01", "emails": [{"address": "a@example.com"}]},
            {"name": "Bob", "emails": [{"address": "a@example.com"}]},
            {"name": "Carol", "birthDate": "not-a-date"},
        ]
    )
    repo = InMemoryContactRepository()
    created, rejected = await seed_module.seed(ContactService(repo), contracts)
    assert (created, rejected) == (1, 2)
    assert [c.name for c in await repo.get_all_contacts()] == ["Alice"]


def test_main_dry_run_with_memory_store(seed_module, tmp_path, monkeypatch, capsys):
    data = tmp_path / "contacts.json"
    data.write_text(json.dumps([{"name": "Alice"}, {"name": "Alice"}]), encoding="utf-8")
    monkeypatch.setenv("CONTACTBOOK_STORE", "memory")
    monkeypatch.setattr("sys.argv", ["seed_contacts.py", str(data)])

    assert seed_module.main() == 0
    assert "1 created, 1 rejected" in capsys.readouterr().out


def test_main_usage_error(seed_module, monkeypatch):
    monkeypatch.setattr("sys.argv", ["seed_contacts.py"])
    assert seed_module.main() == 2
