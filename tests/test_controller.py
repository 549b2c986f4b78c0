"""Tests for app/controller.py"""
import json
from datetime import date

import pytest

from app.controller import CalendarController
from app.dependencies import create_dependencies
from app.events import EventType
from core.calendar_view import MonthCursor
from service.gateway import TransferStatus
from service.host_bridge import BridgeResult
from tests.mocks import FakeHostBridge

TODAY = date(2024, 1, 15)


@pytest.fixture
def bridge():
    return FakeHostBridge()


@pytest.fixture
def deps(paths, event_bus, bridge):
    bridge.event_bus = event_bus
    return create_dependencies(paths=paths, event_bus=event_bus, bridge=bridge)


@pytest.fixture
def controller(deps):
    ctrl = CalendarController(deps, today=TODAY)
    ctrl.start()
    return ctrl


class TestLifecycle:
    """Tests for start/stop."""

    def test_start_loads_merged_data(self, paths, event_bus, recorder):
        bridge = FakeHostBridge(backup={"2024-0-1": "20"}, event_bus=event_bus)
        deps = create_dependencies(paths=paths, event_bus=event_bus, bridge=bridge)
        deps.mirror.local_storage.set_item("calendarValues", json.dumps({"2024-0-1": "10", "2024-0-2": "5"}))

        controller = CalendarController(deps, today=TODAY)
        controller.start()

        assert deps.store.snapshot() == {"2024-0-1": "20", "2024-0-2": "5"}
        assert recorder.of_type(EventType.APP_STARTING)[0].data["entries"] == 2

    def test_start_with_nothing_saved(self, controller, deps):
        assert len(deps.store) == 0

    def test_stop_publishes(self, controller, recorder):
        controller.stop()
        assert len(recorder.of_type(EventType.APP_STOPPING)) == 1


class TestNavigation:
    def test_initial_month(self, controller):
        assert controller.current == MonthCursor(2024, 0)

    def test_navigate(self, controller, recorder):
        controller.navigate_month(-1)
        assert controller.current == MonthCursor(2023, 11)
        event = recorder.of_type(EventType.MONTH_CHANGED)[-1]
        assert event.data == {"year": 2023, "month": 11}

    def test_go_to_today(self, controller):
        controller.navigate_month(5)
        controller.go_to_today(TODAY)
        assert controller.current == MonthCursor(2024, 0)

    def test_same_month_does_not_publish(self, controller, recorder):
        controller.go_to_today(TODAY)
        assert recorder.of_type(EventType.MONTH_CHANGED) == []


class TestEditing:
    def test_save_uses_current_month(self, controller, deps):
        controller.save_day_value(15, "100")
        assert deps.store.get("2024-0-15") == "100"
        assert controller.get_day_value(15) == "100"

    def test_blank_save_removes(self, controller):
        controller.save_day_value(15, "100")
        controller.save_day_value(15, "  ")
        assert controller.get_day_value(15) is None

    def test_remove(self, controller):
        controller.save_day_value(3, "x")
        controller.remove_day_value(3)
        assert controller.get_day_value(3) is None

    def test_edit_after_navigation(self, controller, deps):
        controller.navigate_month(1)
        controller.save_day_value(29, "7")
        assert deps.store.get("2024-1-29") == "7"

    def test_edits_persist(self, controller, deps, bridge):
        controller.save_day_value(15, "100")
        assert deps.mirror.wait_idle(2.0)
        raw = deps.mirror.local_storage.get_item("calendarValues")
        assert json.loads(raw) == {"2024-0-15": "100"}
        assert {"2024-0-15": "100"} in bridge.saved


class TestTotals:
    def test_totals(self, controller, deps, sample_values):
        deps.store.replace_all(sample_values)
        assert controller.month_total() == 125.5
        assert controller.year_total() == 85.5
        assert len(controller.monthly_totals()) == 12


class TestTransfers:
    """Tests for import/export through the controller."""

    def test_export(self, controller, bridge, recorder):
        controller.save_day_value(15, "100")
        result = controller.export_data()
        assert result.ok
        assert bridge.exported == [{"2024-0-15": "100"}]
        finished = recorder.of_type(EventType.TRANSFER_FINISHED)[-1]
        assert finished.data["operation"] == "export"
        assert finished.data["result"] is result

    def test_import_replaces_store(self, controller, deps, backup_file, sample_values):
        controller.save_day_value(1, "old")
        result = controller.import_data(backup_file)
        assert result.ok
        assert deps.store.snapshot() == sample_values

    def test_import_reports_entries_kept(self, controller, deps, tmp_path, recorder):
        path = tmp_path / "mixed.json"
        path.write_text(json.dumps({"data": {
            "2024-0-1": "10",
            "2024-0-2": "   ",
            "2024-0-3": 42,
            "2024-0-4": "lunch",
        }}))

        result = controller.import_data(path)

        assert result.ok
        assert len(deps.store) == 2
        finished = recorder.of_type(EventType.TRANSFER_FINISHED)[-1]
        assert finished.data["entries"] == 2

    def test_invalid_import_leaves_store(self, controller, deps, tmp_path):
        controller.save_day_value(1, "keep")
        path = tmp_path / "foo.json"
        path.write_text(json.dumps({"foo": "bar"}))

        result = controller.import_data(path)

        assert result.status is TransferStatus.INVALID_BACKUP
        assert deps.store.snapshot() == {"2024-0-1": "keep"}

    def test_cancelled_import_leaves_store(self, controller, deps, bridge):
        controller.save_day_value(1, "keep")
        result = controller.import_data()
        assert result.status is TransferStatus.CANCELLED
        assert deps.store.snapshot() == {"2024-0-1": "keep"}

    def test_import_allow_all_files(self, controller, bridge):
        controller.import_data(allow_all_files=True)
        assert bridge.import_calls == [True]

    def test_host_export_request(self, controller, bridge):
        bridge.request_export()
        assert len(bridge.exported) == 1

    def test_host_import_completed(self, controller, deps, bridge):
        bridge.import_result = BridgeResult(success=True, data={"2024-5-5": "9"})
        bridge.run_import()
        assert deps.store.snapshot() == {"2024-5-5": "9"}

    def test_host_import_invalid(self, controller, deps, bridge, recorder):
        controller.save_day_value(1, "keep")
        bridge.import_result = BridgeResult(success=False, invalid=True)
        bridge.run_import()
        assert deps.store.snapshot() == {"2024-0-1": "keep"}
        finished = recorder.of_type(EventType.TRANSFER_FINISHED)[-1]
        assert finished.data["result"].status is TransferStatus.INVALID_BACKUP

    def test_backup_path(self, controller, bridge):
        assert controller.get_backup_path() == bridge.get_backup_path()


class TestWithoutHost:
    def test_export_downloads(self, paths, event_bus):
        deps = create_dependencies(paths=paths, event_bus=event_bus, detect_host=False)
        controller = CalendarController(deps, today=TODAY)
        controller.start()
        controller.save_day_value(15, "100")

        result = controller.export_data()

        assert result.ok
        assert result.path.startswith(str(paths.downloads_dir))
        assert controller.get_backup_path() is None
