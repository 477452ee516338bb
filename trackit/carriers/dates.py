"""Date parsing shared by the carrier adapters."""

import logging
from datetime import datetime, timezone
from typing import Iterable, Optional

_LOGGER = logging.getLogger(__name__)


def parse_datetime(date_str: Optional[str], formats: Iterable[str] = ()) -> Optional[datetime]:
    """Parse a carrier timestamp, assuming UTC when no offset is given.

    ISO 8601 is tried first, then each of ``formats`` in order.
    """
    if not date_str or not isinstance(date_str, str):
        return None
    date_str = date_str.strip()
    parsed = None
    try:
        parsed = datetime.fromisoformat(date_str.replace("Z", "+00:00"))
    except ValueError:
        for fmt in formats:
            try:
                parsed = datetime.strptime(date_str, fmt)
                break
            except ValueError:
                continue
    if parsed is None:
        _LOGGER.warning("Failed to parse datetime: %s", date_str)
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed
