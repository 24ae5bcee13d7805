"""Contact search filters: birth date range and case-insensitive name match."""

from collections.abc import Iterable
from datetime import date

from contactbook.domain import Contact


def _normalize_name(value: str) -> str:
    return value.strip().lower()


def in_birth_date_range(contact: Contact, start: date, end: date) -> bool:
    """Inclusive on both ends. Contacts without a birth date never match."""
    if contact.birth_date is None:
        return False
    return start <= contact.birth_date <= end


def matches_name(contact: Contact, name: str) -> bool:
    needle = _normalize_name(name)
    candidate = _normalize_name(contact.name)
    return candidate == needle or needle in candidate


def filter_contacts(
    contacts: Iterable[Contact],
    name: str | None = None,
    start: date | None = None,
    end: date | None = None,
) -> list[Contact]:
    """Apply the date range (only when both bounds are given), then the name filter."""
    out = list(contacts)
    if start is not None and end is not None:
        out = [c for c in out if in_birth_date_range(c, start, end)]
    if name is not None:
        out = [c for c in out if matches_name(c, name)]
    return out
