"""Text shown in the menu for days, weeks and totals."""
from typing import List, Optional

from config import UI
from core.aggregator import format_total


def truncate(text: str, limit: int = UI.MAX_VALUE_PREVIEW_LENGTH) -> str:
    """Single-line preview of a day value."""
    line = " ".join(text.split())
    if len(line) <= limit:
        return line
    return line[:limit - 1] + "…"


def day_title(day: int, weekday: int, value: Optional[str], today: bool = False) -> str:
    """Menu title for one day, e.g. ``"● Mon 15   120"``.

    Args:
        day: Day of the month.
        weekday: Column in the grid, 0 being Sunday.
        value: The day's note, None when empty.
        today: Mark the current date.
    """
    marker = "●" if today else " "
    title = f"{marker} {UI.WEEKDAY_NAMES[weekday]} {day:>2}"
    if value:
        title += f"   {truncate(value)}"
    return title


def week_title(week: List[int], filled_days: int = 0) -> str:
    """Menu title for a grid row, e.g. ``"1 – 7  (2)"``; padding zeros are skipped."""
    days = [d for d in week if d]
    title = f"{days[0]} – {days[-1]}" if len(days) > 1 else f"{days[0]}"
    if filled_days:
        title += f"  ({filled_days})"
    return title


def month_total_title(total: float) -> str:
    return f"Month total: {format_total(total)}"


def year_total_title(year: int, total: float) -> str:
    return f"Year {year} total: {format_total(total)}"
