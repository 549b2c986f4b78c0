"""Menu building for Day Tally.

Constructs the rumps menu: month header and navigation, the days of the
month grouped by week, totals, and the backup actions.

Usage:
    from app.views.menu_builder import MenuBuilder

    builder = MenuBuilder()
    app.menu = builder.build_main_menu(callbacks)
    builder.update_days(cursor, store.snapshot(), callbacks.edit_day)
"""
from dataclasses import dataclass
from datetime import date
from typing import Callable, Dict, List, Mapping, Optional

import rumps

from app.views.labels import day_title, month_total_title, week_title, year_total_title
from config import get_logger
from core.calendar_view import MonthCursor, is_today, month_grid

logger = get_logger(__name__)


@dataclass
class MenuCallbacks:
    """Container for menu item callbacks."""
    previous_month: Optional[Callable] = None
    next_month: Optional[Callable] = None
    go_to_today: Optional[Callable] = None
    edit_day: Optional[Callable[[int], None]] = None
    export_data: Optional[Callable] = None
    import_data: Optional[Callable] = None
    import_any_file: Optional[Callable] = None
    show_year_chart: Optional[Callable] = None
    open_backup_folder: Optional[Callable] = None
    show_about: Optional[Callable] = None
    quit_app: Optional[Callable] = None


class MenuBuilder:
    """Builds and updates the application menu."""

    def __init__(self):
        self._menu_items: Dict[str, rumps.MenuItem] = {}
        self._week_items: List[rumps.MenuItem] = []
        logger.debug("MenuBuilder initialized")

    def build_main_menu(self, callbacks: MenuCallbacks) -> List:
        """Build the complete main menu structure.

        Returns:
            List of menu items for rumps.App.menu
        """
        self._menu_items['month'] = rumps.MenuItem("--")
        self._menu_items['previous'] = rumps.MenuItem("◀ Previous Month", callback=callbacks.previous_month)
        self._menu_items['next'] = rumps.MenuItem("Next Month ▶", callback=callbacks.next_month)
        self._menu_items['today'] = rumps.MenuItem("Today", callback=callbacks.go_to_today)

        self._menu_items['month_total'] = rumps.MenuItem("Month total: --")
        self._menu_items['year_total'] = rumps.MenuItem("Year total: --")
        self._menu_items['year_chart'] = rumps.MenuItem("Year Chart...", callback=callbacks.show_year_chart)

        self._menu_items['backup'] = self._build_backup_menu(callbacks)

        # Week rows are inserted after this placeholder on every update
        self._menu_items['days'] = rumps.MenuItem("Days")

        return [
            self._menu_items['month'],
            self._menu_items['previous'],
            self._menu_items['next'],
            self._menu_items['today'],
            rumps.separator,
            self._menu_items['days'],
            rumps.separator,
            self._menu_items['month_total'],
            self._menu_items['year_total'],
            self._menu_items['year_chart'],
            rumps.separator,
            self._menu_items['backup'],
            rumps.separator,
            rumps.MenuItem("About", callback=callbacks.show_about),
            rumps.MenuItem("Quit", callback=callbacks.quit_app),
        ]

    def _build_backup_menu(self, callbacks: MenuCallbacks) -> rumps.MenuItem:
        """Build the backup submenu."""
        backup = rumps.MenuItem("Backup")
        backup.add(rumps.MenuItem("Export Data...", callback=callbacks.export_data))
        backup.add(rumps.MenuItem("Import Data...", callback=callbacks.import_data))
        backup.add(rumps.MenuItem("Import From Any File...", callback=callbacks.import_any_file))
        backup.add(rumps.separator)
        self._menu_items['backup_folder'] = rumps.MenuItem(
            "Open Backup Folder", callback=callbacks.open_backup_folder
        )
        backup.add(self._menu_items['backup_folder'])
        return backup

    def get_item(self, key: str) -> Optional[rumps.MenuItem]:
        """Get a menu item by key."""
        return self._menu_items.get(key)

    def update_header(self, cursor: MonthCursor) -> None:
        item = self._menu_items.get('month')
        if item:
            item.title = cursor.label

    def update_totals(self, year: int, month_total: float, year_total: float) -> None:
        item = self._menu_items.get('month_total')
        if item:
            item.title = month_total_title(month_total)
        item = self._menu_items.get('year_total')
        if item:
            item.title = year_total_title(year, year_total)

    def update_days(
        self,
        cursor: MonthCursor,
        values: Mapping[str, str],
        on_day: Callable[[int], None],
        today: Optional[date] = None,
    ) -> None:
        """Rebuild the week submenus for ``cursor``.

        Args:
            cursor: Month being shown.
            values: Current store contents.
            on_day: Called with the day number when a day is clicked.
            today: Date to mark (defaults to the real date).
        """
        days_item = self._menu_items.get('days')
        if days_item is None:
            return
        self.safe_menu_clear(days_item)
        self._week_items = []

        for week in month_grid(cursor.year, cursor.month):
            filled = sum(1 for d in week if d and str(cursor.day_key(d)) in values)
            week_item = rumps.MenuItem(week_title(week, filled))
            for weekday, day in enumerate(week):
                if not day:
                    continue
                title = day_title(
                    day,
                    weekday,
                    values.get(str(cursor.day_key(day))),
                    is_today(cursor.year, cursor.month, day, today),
                )
                week_item.add(rumps.MenuItem(title, callback=lambda _, d=day: on_day(d)))
            days_item.add(week_item)
            self._week_items.append(week_item)

    def set_backup_folder_available(self, available: bool) -> None:
        item = self._menu_items.get('backup_folder')
        if item and not available:
            item.set_callback(None)

    @staticmethod
    def safe_menu_clear(menu_item: rumps.MenuItem) -> None:
        """Safely clear a menu item's submenu contents."""
        try:
            if menu_item and hasattr(menu_item, '_menu') and menu_item._menu:
                menu_item.clear()
        except (AttributeError, TypeError):
            pass
