"""Application controller for Day Tally.

Holds the month being viewed and exposes the operations the menu bar UI
performs: navigation, editing a day, totals and import/export.

Usage:
    from app.controller import CalendarController
    from app.dependencies import create_dependencies

    controller = CalendarController(create_dependencies())
    controller.start()
    controller.save_day_value(15, "120")
"""
from datetime import date
from pathlib import Path
from typing import List, Optional

from app.dependencies import AppDependencies
from app.events import Event, EventType
from config import BACKUP, get_logger
from core import aggregator
from core.calendar_view import MonthCursor
from service.gateway import TransferResult, TransferStatus

logger = get_logger(__name__)


class CalendarController:
    """Central controller between the UI and the calendar data.

    Attributes:
        deps: The dependency container.
        current: Month currently displayed.
    """

    def __init__(self, deps: AppDependencies, today: Optional[date] = None):
        self.deps = deps
        self.store = deps.store
        self.event_bus = deps.event_bus
        self.current = MonthCursor.today(today)
        self._running = False

        self.event_bus.subscribe(EventType.EXPORT_REQUESTED, self._on_export_requested)
        self.event_bus.subscribe(EventType.IMPORT_COMPLETED, self._on_import_completed)

        logger.info("CalendarController initialized")

    def start(self) -> None:
        """Load persisted data into the store."""
        logger.info("Starting CalendarController...")
        self.store.load(self.deps.mirror.load())
        self._running = True
        self.event_bus.publish(EventType.APP_STARTING, {"entries": len(self.store)})
        logger.info(f"CalendarController started with {len(self.store)} entries")

    def stop(self) -> None:
        """Give a pending backup write a chance to finish."""
        logger.info("Stopping CalendarController...")
        self._running = False
        self.event_bus.publish(EventType.APP_STOPPING)
        if not self.deps.mirror.wait_idle(BACKUP.SHUTDOWN_WAIT_SECONDS):
            logger.warning("Backup write still running at shutdown")

    # === Navigation ===

    def navigate_month(self, step: int) -> MonthCursor:
        """Move the view ``step`` months (negative goes back)."""
        self._set_month(self.current.shift(step))
        return self.current

    def go_to_today(self, today: Optional[date] = None) -> MonthCursor:
        self._set_month(MonthCursor.today(today))
        return self.current

    def _set_month(self, cursor: MonthCursor) -> None:
        if cursor == self.current:
            return
        self.current = cursor
        self.event_bus.publish(
            EventType.MONTH_CHANGED, {"year": cursor.year, "month": cursor.month}
        )

    # === Editing ===

    def day_key(self, day: int) -> str:
        return str(self.current.day_key(day))

    def get_day_value(self, day: int) -> Optional[str]:
        return self.store.get(self.day_key(day))

    def save_day_value(self, day: int, text: str) -> None:
        """Save the editor text for ``day``; blank text clears the day."""
        self.store.set(self.day_key(day), text)

    def remove_day_value(self, day: int) -> None:
        self.store.remove(self.day_key(day))

    # === Totals ===

    def month_total(self) -> float:
        return aggregator.month_total(self.store, self.current.year, self.current.month)

    def year_total(self) -> float:
        return aggregator.year_total(self.store, self.current.year)

    def monthly_totals(self) -> List[float]:
        return aggregator.monthly_totals(self.store, self.current.year)

    # === Import / export ===

    def export_data(self) -> TransferResult:
        result = self.deps.gateway.export_all(self.store.snapshot())
        self._finish_transfer("export", result)
        return result

    def import_data(self, source: Optional[Path] = None, allow_all_files: bool = False) -> TransferResult:
        """Import a backup, replacing every entry on success."""
        result = self.deps.gateway.import_all(source, allow_all_files=allow_all_files)
        self._apply_import(result)
        return result

    def _apply_import(self, result: TransferResult) -> None:
        if result.status is TransferStatus.SUCCESS:
            self.store.replace_all(result.data or {})
        self._finish_transfer("import", result)

    def _finish_transfer(self, operation: str, result: TransferResult) -> None:
        if result.status is TransferStatus.ERROR:
            logger.error(f"{operation.capitalize()} failed: {result.error}")
        self.event_bus.publish(
            EventType.TRANSFER_FINISHED,
            {"operation": operation, "result": result, "entries": len(self.store)},
        )

    def _on_export_requested(self, event: Event) -> None:
        logger.info("Host requested an export")
        self.export_data()

    def _on_import_completed(self, event: Event) -> None:
        bridge_result = event.data.get("result")
        if bridge_result is None:
            logger.warning("Import notification without a result")
            return
        self._apply_import(TransferResult.from_bridge(bridge_result))

    def get_backup_path(self) -> Optional[str]:
        """Durable backup location, None without a desktop host."""
        if self.deps.bridge is None:
            return None
        return self.deps.bridge.get_backup_path()
