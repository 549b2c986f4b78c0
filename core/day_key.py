"""Day keys: the string identifiers of calendar cells.

A key is ``"{year}-{month}-{day}"`` with a zero-based month and no padding,
so 15 January 2024 is ``"2024-0-15"``.
"""
import re
from dataclasses import dataclass
from datetime import date

from config.exceptions import InvalidDayKeyError

_KEY_PATTERN = re.compile(r"^(\d+)-(\d{1,2})-(\d{1,2})$")


@dataclass(frozen=True, order=True)
class DayKey:
    """Calendar coordinates of a single day.

    Attributes:
        year: Four digit year.
        month: Zero-based month index (0 = January).
        day: Day of the month, starting at 1.
    """
    year: int
    month: int
    day: int

    def __post_init__(self):
        if not 0 <= self.month <= 11:
            raise InvalidDayKeyError("Month index out of range", {"month": self.month})
        if not 1 <= self.day <= 31:
            raise InvalidDayKeyError("Day out of range", {"day": self.day})

    def __str__(self) -> str:
        return f"{self.year}-{self.month}-{self.day}"

    @classmethod
    def parse(cls, text: str) -> 'DayKey':
        """Parse a key string.

        Raises:
            InvalidDayKeyError: If the text is not a day key.
        """
        match = _KEY_PATTERN.match(text)
        if not match:
            raise InvalidDayKeyError("Not a day key", {"key": text})
        year, month, day = (int(part) for part in match.groups())
        return cls(year, month, day)

    @classmethod
    def from_date(cls, value: date) -> 'DayKey':
        return cls(value.year, value.month - 1, value.day)

    def to_date(self) -> date:
        return date(self.year, self.month + 1, self.day)


def year_prefix(year: int) -> str:
    """Prefix shared by every key of ``year``."""
    return f"{year}-"


def month_prefix(year: int, month: int) -> str:
    """Prefix shared by every key of a month.

    The trailing dash keeps February (``2024-1-``) from matching
    November (``2024-10-``).
    """
    return f"{year}-{month}-"
