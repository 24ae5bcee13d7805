"""Conversion between wire dates (YYYY-MM-DD strings) and datetime.date."""

from datetime import date


class DateConversionError(ValueError):
    """The string is not a YYYY-MM-DD date."""


def parse_contract_date(raw: str | None) -> date | None:
    """Parse a YYYY-MM-DD string. None, empty or blank input yields None.

    Raises DateConversionError on a wrong number of segments, segments that
    are not plain ASCII digits, or a date that does not exist.
    """
    if raw is None or not str(raw).strip():
        return None
    parts = str(raw).strip().split("-")
    if len(parts) != 3:
        raise DateConversionError(f"Expected a YYYY-MM-DD date, got {raw!r}.")
    # int() alone would accept signs, underscores and padding spaces.
    if not all(p.isascii() and p.isdigit() for p in parts):
        raise DateConversionError(f"Expected a YYYY-MM-DD date, got {raw!r}.")
    try:
        year, month, day = (int(p) for p in parts)
        return date(year, month, day)
    except ValueError as e:
        raise DateConversionError(f"Invalid date {raw!r}: {e}") from e


def format_contract_date(value: date | None) -> str | None:
    if value is None:
        return None
    return f"{value.year:04d}-{value.month:02d}-{value.day:02d}"
