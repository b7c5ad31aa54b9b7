"""Date parsing utilities"""

import re
from datetime import datetime, timezone

DATE_ONLY = re.compile(r"^\d{4}-\d{2}-\d{2}$")
RFC3339 = re.compile(r"^\d{4}-\d{2}-\d{2}[Tt]\d{2}:\d{2}:\d{2}(\.\d+)?([Zz]|[+-]\d{2}:\d{2})$")


def parse_timestamp(value: str) -> datetime:
    """
    Parse an RFC 3339 timestamp or a bare YYYY-MM-DD date.

    A bare date is midnight UTC. Other ISO 8601 forms (no zone, basic
    format, week dates) are rejected.

    Raises:
        ValueError: If the value is not in one of the two accepted formats
    """
    if not isinstance(value, str):
        raise ValueError(f"invalid timestamp: {value!r}")

    if DATE_ONLY.match(value):
        return datetime.strptime(value, "%Y-%m-%d").replace(tzinfo=timezone.utc)

    if not RFC3339.match(value):
        raise ValueError(f"invalid timestamp: {value!r}")
    # fromisoformat wants an upper-case separator and zone
    return datetime.fromisoformat(value.upper())


def parse_optional_timestamp(value: str | None) -> datetime | None:
    """Like parse_timestamp but passes None and empty strings through as None"""
    if value is None or value == "":
        return None
    return parse_timestamp(value)
