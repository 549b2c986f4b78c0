"""Month view model for the calendar grid."""
import calendar
from dataclasses import dataclass
from datetime import date
from typing import List, Optional

from config import UI
from core.day_key import DayKey

# Sunday-first weeks, as shown in the menu
_CALENDAR = calendar.Calendar(firstweekday=calendar.SUNDAY)


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month + 1)[1]


def first_weekday(year: int, month: int) -> int:
    """Column of the 1st of the month, 0 being Sunday."""
    return (date(year, month + 1, 1).weekday() + 1) % 7


def month_grid(year: int, month: int) -> List[List[int]]:
    """Weeks of the month as rows of seven day numbers, 0 for padding."""
    return _CALENDAR.monthdayscalendar(year, month + 1)


def is_today(year: int, month: int, day: int, today: Optional[date] = None) -> bool:
    today = today or date.today()
    return (today.year, today.month - 1, today.day) == (year, month, day)


@dataclass(frozen=True)
class MonthCursor:
    """The month currently shown.

    Attributes:
        year: Displayed year.
        month: Zero-based month index.
    """
    year: int
    month: int

    @classmethod
    def today(cls, today: Optional[date] = None) -> 'MonthCursor':
        today = today or date.today()
        return cls(today.year, today.month - 1)

    def shift(self, months: int) -> 'MonthCursor':
        index = self.year * 12 + self.month + months
        return MonthCursor(index // 12, index % 12)

    def previous(self) -> 'MonthCursor':
        return self.shift(-1)

    def next(self) -> 'MonthCursor':
        return self.shift(1)

    def day_key(self, day: int) -> DayKey:
        return DayKey(self.year, self.month, day)

    @property
    def label(self) -> str:
        return f"{UI.MONTH_NAMES[self.month]} {self.year}"

    @property
    def days(self) -> int:
        return days_in_month(self.year, self.month)
