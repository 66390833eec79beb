"""Identity and date utilities for trade records.

- new_trade_id: collision-resistant record id
- format_display_date: M/D/YYYY display date derived from a timestamp
- export_filename: dated file name for export downloads
"""

from __future__ import annotations

import uuid
from datetime import date, datetime


def new_trade_id() -> str:
    """Generate a new trade id.

    Random UUID4, so two saves in the same instant never collide.

    Returns:
        36-character UUID string.
    """
    return str(uuid.uuid4())


def format_display_date(timestamp: datetime) -> str:
    """Format a timestamp as a short US display date.

    Args:
        timestamp: Instant to format.

    Returns:
        Date string without zero padding.

    Examples:
        >>> format_display_date(datetime(2026, 3, 7, 15, 30))
        '3/7/2026'
    """
    return f"{timestamp.month}/{timestamp.day}/{timestamp.year}"


def export_filename(day: date) -> str:
    """File name offered for an export download.

    Examples:
        >>> export_filename(date(2026, 10, 19))
        'trade-history-2026-10-19.json'
    """
    return f"trade-history-{day.isoformat()}.json"
