"""Clock helpers for the configured ``TIMEZONE``: row timestamps and export file names."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from zoneinfo import ZoneInfo

from app.packages.catalog.core.config import get_settings

DISPLAY_FORMAT = "%Y-%m-%d %H:%M:%S"
FILENAME_STAMP_FORMAT = "%Y%m%d%H%M%S"


def get_timezone() -> ZoneInfo:
    return get_settings().timezone_info


def now() -> datetime:
    return datetime.now(get_timezone())


def to_local(value: Optional[datetime]) -> Optional[datetime]:
    """Shift ``value`` into the configured zone.

    SQLite hands back naive datetimes; those are taken to already be local.
    """
    if value is None:
        return None
    tz = get_timezone()
    return value.replace(tzinfo=tz) if value.tzinfo is None else value.astimezone(tz)


def format_datetime(value: Optional[datetime]) -> Optional[str]:
    localized = to_local(value)
    return localized.strftime(DISPLAY_FORMAT) if localized is not None else None


def export_filename(stem: str, extension: str = "xlsx", at: Optional[datetime] = None) -> str:
    """``<stem>-<YYYYmmddHHMMSS>.<extension>`` stamped with the local time."""
    stamp = (to_local(at) if at is not None else now()).strftime(FILENAME_STAMP_FORMAT)
    return f"{stem}-{stamp}.{extension}"
