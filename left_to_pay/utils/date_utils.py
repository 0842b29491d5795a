"""Date manipulation utilities"""

from datetime import date, datetime, timedelta, timezone
from typing import Optional

from dateutil.parser import isoparse
from dateutil.relativedelta import relativedelta

DATE_FORMAT = "%Y-%m-%d"
UNKNOWN_DATE = "unknown"


def add_months(moment: datetime, months: int) -> datetime:
    """
    Calendar month arithmetic that overflows short months instead of clamping.

    Jan 31 + 1 month is Mar 3 (Mar 2 in a leap year): the day count carries
    past the end of the shorter month.
    """
    first_of_month = moment.replace(day=1) + relativedelta(months=months)
    return first_of_month + timedelta(days=moment.day - 1)


def parse_instant(value: str) -> datetime:
    """
    Parse an API timestamp such as 2022-04-17T19:46:17.663Z.

    Bare dates are accepted and become midnight. Naive values are taken as UTC.
    """
    parsed = isoparse(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def parse_date(value: str) -> date:
    """Parse a YYYY-MM-DD calendar date"""
    return date.fromisoformat(value)


def format_instant(moment: datetime) -> str:
    """Format as UTC with millisecond precision: 2022-04-17T19:46:17.663Z"""
    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


def format_date(value: Optional[date]) -> str:
    """YYYY-MM-DD, or 'unknown' when there is no date"""
    if value is None:
        return UNKNOWN_DATE
    if isinstance(value, datetime):
        value = value.date()
    return value.strftime(DATE_FORMAT)
