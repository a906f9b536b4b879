"""Timestamp checks shared by the domain entities.

All times handled by the monitor are timezone-aware; CIMI timestamps carry an
offset, so a naive value could neither be compared with them nor rendered in
a $filter without guessing its zone.
"""

from datetime import datetime


def require_aware(value: datetime | None, name: str) -> None:
    """Raise ValueError if value is a naive datetime (None is accepted)."""
    if value is not None and (
        value.tzinfo is None or value.tzinfo.utcoffset(value) is None
    ):
        raise ValueError(f"{name} must be timezone-aware, got naive {value.isoformat()}")
