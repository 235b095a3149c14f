from datetime import date, datetime, timezone
from zoneinfo import ZoneInfo

from dashboard.config import get_settings


def _timezone() -> ZoneInfo:
    return ZoneInfo(get_settings().APP_TIMEZONE)


def now_tz() -> datetime:
    return datetime.now(_timezone())


def today_tz() -> date:
    return now_tz().date()


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def local_day(dt: datetime) -> date:
    """Calendar day of ``dt`` in the configured zone; naive values are taken as local."""
    if dt.tzinfo is None:
        return dt.date()
    return dt.astimezone(_timezone()).date()
