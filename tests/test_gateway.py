"""Tests for service/gateway.py"""
import json
from datetime import datetime

from service.gateway import ImportExportGateway, TransferResult, TransferStatus
from service.host_bridge import BridgeResult
from tests.mocks import FakeHostBridge

FIXED_NOW = datetime(2024, 1, 15, 9, 30)


def gateway_without_host(paths):
    return ImportExportGateway(paths, bridge=None, clock=lambda: FIXED_NOW)


class TestTransferResult:
    """Tests for mapping bridge results."""

    def test_success(self):
        result = TransferResult.from_bridge(BridgeResult(success=True, data={"a": "1"}, path="/x"))
        assert result.ok
        assert result.data == {"a": "1"}

    def test_cancelled(self):
        result = TransferResult.from_bridge(BridgeResult(success=False, cancelled=True))
        assert result.status is TransferStatus.CANCELLED
        assert not result.ok

    def test_invalid(self):
        result = TransferResult.from_bridge(BridgeResult(success=False, invalid=True))
        assert result.status is TransferStatus.INVALID_BACKUP
        assert result.error == "Invalid backup file"

    def test_error(self):
        result = TransferResult.from_bridge(BridgeResult(success=False, error="disk full"))
        assert result.status is TransferStatus.ERROR
        assert result.error == "disk full"


class TestExportWithoutHost:
    """Export emulated as a browser download."""

    def test_writes_to_downloads(self, paths, sample_values):
        result = gateway_without_host(paths).export_all(sample_values)

        assert result.ok
        expected = paths.downloads_dir / "day-tally-backup-2024-01-15.json"
        assert result.path == str(expected)
        doc = json.loads(expected.read_text(encoding="utf-8"))
        assert doc["data"] == sample_values
        assert doc["description"]

    def test_name_clash_gets_suffix(self, paths):
        gateway = gateway_without_host(paths)
        first = gateway.export_all({"a": "1"})
        second = gateway.export_all({"a": "2"})
        third = gateway.export_all({"a": "3"})

        assert first.path.endswith("day-tally-backup-2024-01-15.json")
        assert second.path.endswith("day-tally-backup-2024-01-15 (1).json")
        assert third.path.endswith("day-tally-backup-2024-01-15 (2).json")

    def test_write_error(self, paths):
        paths.downloads_dir.parent.mkdir(parents=True, exist_ok=True)
        paths.downloads_dir.write_text("not a folder")
        result = gateway_without_host(paths).export_all({"a": "1"})
        assert result.status is TransferStatus.ERROR
        assert result.error


class TestExportWithHost:
    def test_delegates_to_bridge(self, paths):
        bridge = FakeHostBridge()
        result = ImportExportGateway(paths, bridge).export_all({"a": "1"})
        assert result.ok
        assert bridge.exported == [{"a": "1"}]

    def test_cancel(self, paths):
        bridge = FakeHostBridge()
        bridge.export_result = BridgeResult(success=False, cancelled=True)
        result = ImportExportGateway(paths, bridge).export_all({})
        assert result.status is TransferStatus.CANCELLED


class TestImport:
    """Tests for import_all."""

    def test_from_source(self, paths, backup_file, sample_values):
        result = gateway_without_host(paths).import_all(backup_file)
        assert result.ok
        assert result.data == sample_values

    def test_invalid_document(self, paths, tmp_path):
        path = tmp_path / "foo.json"
        path.write_text(json.dumps({"foo": "bar"}))
        result = gateway_without_host(paths).import_all(path)
        assert result.status is TransferStatus.INVALID_BACKUP
        assert result.data is None

    def test_missing_file(self, paths, tmp_path):
        result = gateway_without_host(paths).import_all(tmp_path / "nope.json")
        assert result.status is TransferStatus.ERROR

    def test_no_source_no_host(self, paths):
        result = gateway_without_host(paths).import_all()
        assert result.status is TransferStatus.ERROR
        assert result.error == "No file selected for import"

    def test_via_bridge(self, paths):
        bridge = FakeHostBridge()
        bridge.import_result = BridgeResult(success=True, data={"2024-0-1": "5"})
        result = ImportExportGateway(paths, bridge).import_all(allow_all_files=True)
        assert result.data == {"2024-0-1": "5"}
        assert bridge.import_calls == [True]

    def test_source_bypasses_bridge(self, paths, backup_file):
        bridge = FakeHostBridge()
        ImportExportGateway(paths, bridge).import_all(backup_file)
        assert bridge.import_calls == []

    def test_export_then_import_round_trip(self, paths, sample_values):
        gateway = gateway_without_host(paths)
        exported = gateway.export_all(sample_values)
        assert gateway.import_all(exported.path).data == sample_values
