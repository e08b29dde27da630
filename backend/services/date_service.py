"""
Date calculation service.
Weekday indexing (Sunday=0), tracker weeks and trend windows.
"""
from datetime import date, timedelta
from typing import List, Optional


class DateService:
    """Service for date-related operations"""

    @staticmethod
    def today() -> date:
        return date.today()

    @staticmethod
    def weekday_index(target: date) -> int:
        """
        Weekday index with Sunday=0 ... Saturday=6.

        Python's date.weekday() is Monday=0, so it is shifted by one.
        """
        return (target.weekday() + 1) % 7

    @staticmethod
    def week_start(reference: date) -> date:
        """Monday of the week containing the reference date"""
        return reference - timedelta(days=reference.weekday())

    @staticmethod
    def week_days(reference: date) -> List[date]:
        """Seven days of the tracker week (Monday first) containing the reference date"""
        start = DateService.week_start(reference)
        return [start + timedelta(days=offset) for offset in range(7)]

    @staticmethod
    def last_n_days(days: int, until: Optional[date] = None) -> List[date]:
        """
        The last N days ending on `until` (inclusive), oldest first.

        Args:
            days: Window length
            until: Last day of the window (defaults to today)
        """
        end = until or DateService.today()
        return [end - timedelta(days=days - 1 - offset) for offset in range(days)]

    @staticmethod
    def short_weekday(target: date) -> str:
        """Abbreviated weekday name, e.g. 'Mon'"""
        return target.strftime("%a")

    @staticmethod
    def short_month_day(target: date) -> str:
        """Short month/day label, e.g. 'Jan 5'"""
        return f"{target.strftime('%b')} {target.day}"
