"""Date manipulation utilities"""

from calendar import monthrange
from datetime import date, timedelta
from typing import List


def generate_date_range(start: date, end: date) -> List[date]:
    """Generate list of dates from start to end (inclusive)"""
    days = (end - start).days + 1
    return [start + timedelta(days=i) for i in range(days)]


def add_months(from_date: date, months: int) -> date:
    """Add calendar months, clamping the day to the end of the target month (Jan 31 + 1 -> Feb 28/29)"""
    month_index = from_date.month - 1 + months
    year = from_date.year + month_index // 12
    month = month_index % 12 + 1
    day = min(from_date.day, monthrange(year, month)[1])
    return date(year, month, day)


def months_ago(from_date: date, months: int) -> date:
    return add_months(from_date, -months)
