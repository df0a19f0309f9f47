"""
Common/Shared Fixtures

Base factories and generators used across multiple services.
"""
import itertools
from datetime import datetime, timezone
from typing import Optional

# SERIAL-like id source shared by every factory in a test run
_ids = itertools.count(1000)


def make_id() -> int:
    """Generate a unique integer ID"""
    return next(_ids)


def make_timestamp(
    year: int = 2024,
    month: int = 1,
    day: int = 1,
    hour: int = 12,
    minute: int = 0,
) -> datetime:
    """Timezone-aware UTC timestamp"""
    return datetime(year, month, day, hour, minute, tzinfo=timezone.utc)


def make_image_bytes(marker: Optional[str] = None) -> bytes:
    """Minimal PNG signature followed by a marker payload"""
    return b"\x89PNG\r\n\x1a\n" + (marker or "image").encode()
