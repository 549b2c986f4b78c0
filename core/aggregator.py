"""Numeric totals over day values.

Values are free text. The number in a value is whatever is left after
removing every character that is not a digit, ``.`` or ``-``. Commas are
removed like any other character, so ``"R$ 100,50"`` counts as 10050.
"""
import math
import re
from typing import Callable, List, Mapping, Optional, Union

from core.day_key import month_prefix, year_prefix
from core.store import DayValueStore

KeyPredicate = Callable[[str], bool]
StoreLike = Union[DayValueStore, Mapping[str, str]]

_NON_NUMERIC = re.compile(r"[^\d.\-]")
_NUMBER = re.compile(r"^-?(\d+\.?\d*|\.\d+)$")


def extract_number(text: str) -> Optional[float]:
    """Number contained in ``text``, or None when there is none.

    Leftovers such as ``"-"``, ``"1-2"`` or ``"1.2.3"`` do not parse.

    Example:
        >>> extract_number("R$ 100.50")
        100.5
        >>> extract_number("no digits") is None
        True
    """
    stripped = _NON_NUMERIC.sub("", text)
    if not _NUMBER.match(stripped):
        return None
    return float(stripped)


def prefix_predicate(prefix: str) -> KeyPredicate:
    return lambda key: key.startswith(prefix)


def month_predicate(year: int, month: int) -> KeyPredicate:
    return prefix_predicate(month_prefix(year, month))


def year_predicate(year: int) -> KeyPredicate:
    return prefix_predicate(year_prefix(year))


def _as_mapping(store: StoreLike) -> Mapping[str, str]:
    if isinstance(store, DayValueStore):
        return store.snapshot()
    return store


def total(store: StoreLike, predicate: KeyPredicate) -> float:
    """Sum the numbers of every value whose key matches ``predicate``.

    Values without a number count as 0. Keys are visited in sorted order
    and summed with ``math.fsum`` so the result does not depend on the
    mapping's iteration order. Sums that overflow, or notes too long to
    be finite, give ``inf`` or ``nan`` instead of raising.
    """
    values = _as_mapping(store)
    numbers = []
    for key in sorted(values):
        if not predicate(key):
            continue
        number = extract_number(values[key])
        if number is not None:
            numbers.append(number)
    try:
        return math.fsum(numbers)
    except (OverflowError, ValueError):
        # fsum refuses intermediate overflow and inf - inf
        return sum(numbers, 0.0)


def month_total(store: StoreLike, year: int, month: int) -> float:
    return total(store, month_predicate(year, month))


def year_total(store: StoreLike, year: int) -> float:
    return total(store, year_predicate(year))


def monthly_totals(store: StoreLike, year: int) -> List[float]:
    """Twelve month totals for ``year``, January first."""
    values = _as_mapping(store)
    return [month_total(values, year, month) for month in range(12)]


def format_total(value: float) -> str:
    """Render a total for display.

    Whole numbers have no decimal part; others keep up to two decimals.
    """
    if not math.isfinite(value):
        return str(value)
    if value == int(value):
        return str(int(value))
    return f"{value:.2f}".rstrip("0").rstrip(".")
