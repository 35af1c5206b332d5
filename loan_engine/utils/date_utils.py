"""Date manipulation utilities"""

from datetime import date, datetime, timedelta, timezone

DAYS_PER_WEEK = 7


def add_weeks(from_date: date, weeks: int) -> date:
    """Date exactly `weeks` * 7 days after from_date"""
    return from_date + timedelta(days=DAYS_PER_WEEK * weeks)


def utc_now() -> datetime:
    """Timezone-aware current UTC time"""
    return datetime.now(timezone.utc)


def utc_today() -> date:
    """Calendar date of utc_now(); the default "now" for due and overdue checks"""
    return utc_now().date()
