from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from ..errors import DataAccessError


def parse_db_time(value: Optional[str]) -> Optional[datetime]:
    """Store times are UTC text ('YYYY-MM-DD HH:MM:SS.fff'); None stays None."""
    if value is None:
        return None
    try:
        dt = datetime.fromisoformat(str(value))
    except ValueError as e:
        raise DataAccessError(f"malformed timestamp in row: {value!r}") from e
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt
