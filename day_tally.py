#!/usr/bin/env python3
"""
Day Tally - macOS Menu Bar Calendar
Keeps a short note per day and totals the numbers in them by month and year.
"""
import atexit
import signal
import subprocess
import sys
import time
from datetime import date
from pathlib import Path

import rumps

# Hide dock icon (menu bar only app)
from Foundation import NSBundle, NSOperationQueue

from app.controller import CalendarController
from app.dependencies import create_dependencies
from app.events import EventBus, EventType
from app.views import IconGenerator, YearChart
from app.views.menu_builder import MenuBuilder, MenuCallbacks
from config import UI, get_logger, resolve_paths, setup_logging
from config.singleton import SingletonLock
from service.gateway import TransferStatus

info = NSBundle.mainBundle().infoDictionary()
info["LSUIElement"] = "1"

logger = get_logger(__name__)


class DayTallyApp(rumps.App):
    """Menu bar calendar application."""

    def __init__(self, paths=None):
        super().__init__(name=UI.APP_NAME, title=None, quit_button=None)

        self._event_bus = EventBus()
        self._deps = create_dependencies(paths=paths, event_bus=self._event_bus)
        self._controller = CalendarController(self._deps)

        self._icons = IconGenerator()
        self._chart = YearChart()
        self._menu_builder = MenuBuilder()
        self._icon_day = None
        self._stopped = False

        atexit.register(self._icons.clear_cache)

        logger.info("DayTallyApp initializing...")

        self._build_menu()
        self._subscribe_to_events()
        self._controller.start()
        self._refresh()

        # Keeps the icon's day number right across midnight
        self._day_timer = rumps.Timer(self._check_day_rollover, 60)
        self._day_timer.start()

    def _build_menu(self):
        """Build the menu structure."""
        callbacks = MenuCallbacks(
            previous_month=lambda _: self._controller.navigate_month(-1),
            next_month=lambda _: self._controller.navigate_month(1),
            go_to_today=lambda _: self._controller.go_to_today(),
            edit_day=self._edit_day,
            export_data=self._export_data,
            import_data=lambda _: self._import_data(allow_all_files=False),
            import_any_file=lambda _: self._import_data(allow_all_files=True),
            show_year_chart=self._show_year_chart,
            open_backup_folder=self._open_backup_folder,
            show_about=self._show_about,
            quit_app=self._quit,
        )
        self.menu = self._menu_builder.build_main_menu(callbacks)
        self._menu_builder.set_backup_folder_available(self._controller.get_backup_path() is not None)

    def _subscribe_to_events(self):
        """Subscribe to controller events for UI updates."""
        self._event_bus.subscribe(EventType.STORE_CHANGED, self._on_data_changed)
        self._event_bus.subscribe(EventType.MONTH_CHANGED, self._on_data_changed)
        self._event_bus.subscribe(EventType.TRANSFER_FINISHED, self._on_transfer_finished)
        self._event_bus.subscribe(EventType.BACKUP_WRITE_FAILED, self._on_backup_write_failed)

    def _on_data_changed(self, event):
        self._refresh()

    def _on_transfer_finished(self, event):
        operation = event.data.get("operation", "transfer")
        result = event.data.get("result")
        if result is None or result.status is TransferStatus.CANCELLED:
            return

        if result.status is TransferStatus.SUCCESS:
            if operation == "export":
                rumps.notification(UI.APP_NAME, "Data Exported", result.path or "")
            else:
                rumps.notification(UI.APP_NAME, "Data Imported", f"{event.data['entries']} days loaded")
        elif result.status is TransferStatus.INVALID_BACKUP:
            rumps.notification(UI.APP_NAME, "Import Failed", result.error or "Invalid backup file")
        else:
            rumps.notification(UI.APP_NAME, f"{operation.capitalize()} Failed", result.error or "Unknown error")

    def _on_backup_write_failed(self, event):
        # Published from the backup writer thread
        message = f"{event.data.get('entries', 0)} days kept in local storage only"

        def notify():
            rumps.notification(UI.APP_NAME, "Backup Not Saved", message)
        NSOperationQueue.mainQueue().addOperationWithBlock_(notify)

    def _refresh(self):
        """Redraw header, days and totals for the current month."""
        cursor = self._controller.current
        self._menu_builder.update_header(cursor)
        self._menu_builder.update_days(cursor, self._deps.store.snapshot(), self._edit_day)
        self._menu_builder.update_totals(
            cursor.year, self._controller.month_total(), self._controller.year_total()
        )
        self._update_icon()

    def _update_icon(self):
        today = date.today()
        if today.day == self._icon_day:
            return
        try:
            self.icon = self._icons.create_calendar_icon(today.day)
            self.title = None
            self._icon_day = today.day
        except OSError as e:
            logger.warning(f"Could not create menu bar icon: {e}")
            self.title = str(today.day)

    def _check_day_rollover(self, _):
        if date.today().day != self._icon_day:
            self._refresh()

    def _edit_day(self, day: int):
        """Show the editor for one day of the current month."""
        current = self._controller.get_day_value(day) or ""
        label = f"{day} {UI.MONTH_NAMES[self._controller.current.month]} {self._controller.current.year}"

        window = rumps.Window(
            title=f"{UI.APP_NAME} - {label}",
            message="Enter a value or note for this day.\nNumbers in the text are added to the totals.",
            default_text=current,
            ok="Save",
            cancel="Cancel",
            dimensions=(320, 80),
        )
        window.add_button("Remove")
        response = window.run()

        # 1 = Save, 0 = Cancel, 2 = Remove
        if response.clicked == 1:
            self._controller.save_day_value(day, response.text)
        elif response.clicked == 2:
            self._controller.remove_day_value(day)

    def _export_data(self, _):
        self._controller.export_data()

    def _import_data(self, allow_all_files: bool):
        if self._deps.bridge is not None:
            self._controller.import_data(allow_all_files=allow_all_files)
            return

        response = rumps.Window(
            title="Import Data",
            message="Path of the backup file to import:",
            default_text=str(self._deps.paths.downloads_dir),
            ok="Import",
            cancel="Cancel",
        ).run()
        if response.clicked and response.text.strip():
            self._controller.import_data(Path(response.text.strip()).expanduser())

    def _show_year_chart(self, _):
        cursor = self._controller.current
        try:
            self._chart.show(cursor.year, self._controller.monthly_totals(), cursor.month)
        except (OSError, subprocess.CalledProcessError) as e:
            logger.error(f"Could not show year chart: {e}")
            rumps.notification(UI.APP_NAME, "Chart Error", str(e))

    def _open_backup_folder(self, _):
        backup_path = self._controller.get_backup_path()
        if backup_path is None:
            return
        folder = Path(backup_path).parent
        folder.mkdir(parents=True, exist_ok=True)
        subprocess.run(['open', str(folder)])

    def _show_about(self, _):
        rumps.alert(
            title=UI.APP_NAME,
            message=(
                "A note per day, totalled by month and year.\n\n"
                f"Entries: {len(self._deps.store)}\n"
                f"Backup: {self._controller.get_backup_path() or 'not available'}"
            ),
            ok="OK",
        )

    def shutdown(self):
        """Stop the controller and let the pending backup finish."""
        if self._stopped:
            return
        self._stopped = True
        logger.info("Application shutting down...")
        self._day_timer.stop()
        self._controller.stop()
        self._event_bus.shutdown()
        logger.info("Shutdown complete")

    def _quit(self, _):
        self.shutdown()
        rumps.quit_application()


def main():
    """Entry point for the application."""
    paths = resolve_paths()

    setup_logging(data_dir=paths.data_dir, debug=False, console_output=True)
    logger.info("Day Tally starting...")

    lock = SingletonLock(paths.data_dir)
    if not lock.acquire():
        # Another instance is running - stop it and take over
        if not lock.kill_existing():
            print("Could not stop existing instance.", file=sys.stderr)
            sys.exit(1)
        time.sleep(0.5)
        if not lock.acquire():
            print("Could not acquire lock after stopping existing instance.", file=sys.stderr)
            sys.exit(1)
    atexit.register(lock.release)

    app = None

    def signal_handler(signum, frame):
        """Handle SIGTERM/SIGINT so the backup write can finish."""
        logger.info(f"Received signal {signum}, quitting...")
        if app:
            app.shutdown()
        rumps.quit_application()

    signal.signal(signal.SIGTERM, signal_handler)
    signal.signal(signal.SIGINT, signal_handler)

    try:
        app = DayTallyApp(paths)
        app.run()
    except Exception as e:
        logger.critical(f"Application crashed: {e}", exc_info=True)
        raise
    finally:
        lock.release()


if __name__ == "__main__":
    main()
