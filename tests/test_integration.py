"""Integration tests for Day Tally.

These tests verify end-to-end behaviour across the store, the persistence
mirror, the desktop host bridge and the import/export gateway. They use
real implementations and real files; only the native dialogs are faked.

Run with: pytest -m integration
"""
import json
from datetime import date

import pytest

from app.controller import CalendarController
from app.dependencies import create_dependencies
from app.events import EventBus
from service.gateway import TransferStatus
from service.host_bridge import DesktopHostBridge
from tests.mocks import FakeDialogs


def launch(paths, dialogs, today):
    """Start the app stack the way the menu bar app does."""
    bus = EventBus()
    bridge = DesktopHostBridge(paths, dialogs, event_bus=bus)
    deps = create_dependencies(paths=paths, event_bus=bus, bridge=bridge)
    controller = CalendarController(deps, today=today)
    controller.start()
    return controller


@pytest.fixture
def dialogs():
    return FakeDialogs()


@pytest.mark.integration
class TestPersistenceIntegration:
    """Data survives restarts through both sinks."""

    def test_edit_restart_restore(self, paths, dialogs):
        today = date(2024, 1, 15)

        app = launch(paths, dialogs, today)
        app.save_day_value(15, "R$ 100,50 texto")
        app.save_day_value(16, "20")
        app.stop()

        backup = json.loads(paths.backup_file.read_text(encoding="utf-8"))
        assert backup["data"]["2024-0-15"] == "R$ 100,50 texto"

        restarted = launch(paths, dialogs, today)
        assert restarted.get_day_value(15) == "R$ 100,50 texto"
        assert restarted.month_total() == 10070

    def test_backup_file_wins_over_local_storage(self, paths, dialogs):
        today = date(2024, 1, 1)

        app = launch(paths, dialogs, today)
        app.save_day_value(1, "10")
        app.stop()

        # Backup edited elsewhere while the app was closed
        doc = json.loads(paths.backup_file.read_text(encoding="utf-8"))
        doc["data"]["2024-0-1"] = "20"
        paths.backup_file.write_text(json.dumps(doc), encoding="utf-8")

        restarted = launch(paths, dialogs, today)
        assert restarted.get_day_value(1) == "20"

    def test_lost_backup_is_rewritten(self, paths, dialogs):
        today = date(2024, 1, 1)

        app = launch(paths, dialogs, today)
        app.save_day_value(1, "10")
        app.stop()
        paths.backup_file.unlink()

        restarted = launch(paths, dialogs, today)
        restarted.stop()
        assert json.loads(paths.backup_file.read_text())["data"] == {"2024-0-1": "10"}


@pytest.mark.integration
class TestTransferIntegration:
    """Export then import through the desktop dialogs."""

    def test_export_import_round_trip(self, paths, dialogs, tmp_path, sample_values):
        app = launch(paths, dialogs, date(2024, 1, 15))
        app.deps.store.replace_all(sample_values)

        dialogs.save_path = tmp_path / "export"
        exported = app.export_data()
        assert exported.ok
        assert exported.path.endswith("export.json")

        app.deps.store.replace_all({"1999-0-1": "other"})
        dialogs.open_path = tmp_path / "export.json"
        imported = app.import_data()

        assert imported.ok
        assert app.deps.store.snapshot() == sample_values
        app.stop()

    def test_foreign_json_rejected(self, paths, dialogs, tmp_path):
        app = launch(paths, dialogs, date(2024, 1, 15))
        app.save_day_value(1, "keep")

        foreign = tmp_path / "foo.json"
        foreign.write_text(json.dumps({"foo": "bar"}))
        dialogs.open_path = foreign
        result = app.import_data(allow_all_files=True)

        assert result.status is TransferStatus.INVALID_BACKUP
        assert app.deps.store.snapshot() == {"2024-0-1": "keep"}
        assert dialogs.open_calls == [None]
        app.stop()
