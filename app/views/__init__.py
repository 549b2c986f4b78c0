"""View components for Day Tally UI.

Contains:
- icons: menu bar calendar icon
- labels: menu text for days, weeks and totals
- menu_builder: rumps menu construction
- year_chart: matplotlib overview of monthly totals

The rumps-based menu builder is imported directly by the app so the
other views stay importable without AppKit.
"""
from app.views.icons import IconGenerator
from app.views.year_chart import YearChart

__all__ = [
    "IconGenerator",
    "YearChart",
]
