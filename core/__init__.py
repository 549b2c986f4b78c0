"""Calendar data: day keys, the value store, totals and the month view."""

from core.aggregator import (
    extract_number,
    format_total,
    month_total,
    monthly_totals,
    prefix_predicate,
    total,
    year_total,
)
from core.calendar_view import MonthCursor, days_in_month, first_weekday, is_today, month_grid
from core.day_key import DayKey, month_prefix, year_prefix
from core.store import DayValueStore, merge

__all__ = [
    "DayKey",
    "DayValueStore",
    "MonthCursor",
    "days_in_month",
    "extract_number",
    "first_weekday",
    "format_total",
    "is_today",
    "merge",
    "month_grid",
    "month_prefix",
    "month_total",
    "monthly_totals",
    "prefix_predicate",
    "total",
    "year_prefix",
    "year_total",
]
