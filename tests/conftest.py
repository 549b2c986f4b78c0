"""Pytest configuration and shared fixtures.

This module provides:
- Common test fixtures for data directories, paths and sample data
- A synchronous event bus and an event recorder
- Pytest markers for test categorization (unit, integration, slow)
"""
import json
import tempfile
import warnings
from pathlib import Path
from typing import Generator
from unittest.mock import MagicMock, patch

import pytest

from app.events import EventBus
from config.paths import AppPaths
from tests.mocks import EventRecorder, FakeDialogs, FakeHostBridge

# Filter matplotlib/pyparsing deprecation warnings
warnings.filterwarnings("ignore", category=DeprecationWarning, module="matplotlib")
warnings.filterwarnings("ignore", message=".*deprecated.*", module="pyparsing")


# =============================================================================
# Pytest Configuration
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for test categorization."""
    config.addinivalue_line("markers", "unit: mark test as a unit test (fast, isolated)")
    config.addinivalue_line("markers", "integration: mark test as an integration test")
    config.addinivalue_line("markers", "slow: mark test as slow running")
    config.addinivalue_line("markers", "macos_only: mark test as requiring macOS")


# =============================================================================
# Directory and Path Fixtures
# =============================================================================


@pytest.fixture
def temp_data_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test data."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def temp_db_path(temp_data_dir: Path) -> Path:
    """Path for a temporary local storage database."""
    return temp_data_dir / "test_local_storage.db"


@pytest.fixture
def paths(tmp_path: Path) -> AppPaths:
    """Application paths rooted in a temporary home directory."""
    return AppPaths(
        data_dir=tmp_path / ".day-tally",
        backup_dir=tmp_path / "Documents" / "Day Tally Backups",
        downloads_dir=tmp_path / "Downloads",
    )


# =============================================================================
# Sample Data Fixtures
# =============================================================================


@pytest.fixture
def sample_values() -> dict:
    """A few days across two months and two years."""
    return {
        "2024-0-15": "100",
        "2024-0-20": "lunch 25.5",
        "2024-1-3": "no number here",
        "2024-10-1": "-40",
        "2023-11-31": "1000",
    }


@pytest.fixture
def backup_document(sample_values: dict) -> dict:
    """A valid backup envelope as parsed JSON."""
    return {
        "data": sample_values,
        "timestamp": "2024-01-15T10:30:00+00:00",
        "version": "1.0.0",
    }


@pytest.fixture
def backup_file(tmp_path: Path, backup_document: dict) -> Path:
    """A backup envelope written to disk."""
    path = tmp_path / "backup.json"
    path.write_text(json.dumps(backup_document), encoding="utf-8")
    return path


# =============================================================================
# Mock Fixtures
# =============================================================================


@pytest.fixture
def mock_subprocess() -> Generator[MagicMock, None, None]:
    """Mock subprocess for command execution testing."""
    with patch("subprocess.run") as mock_run:
        mock_run.return_value = MagicMock(
            returncode=0,
            stdout="",
            stderr="",
        )
        yield mock_run


@pytest.fixture
def fake_dialogs() -> FakeDialogs:
    return FakeDialogs()


@pytest.fixture
def fake_bridge() -> FakeHostBridge:
    return FakeHostBridge()


# =============================================================================
# Event Bus Fixtures
# =============================================================================


@pytest.fixture
def event_bus() -> Generator[EventBus, None, None]:
    """Synchronous event bus, as the menu bar app uses."""
    bus = EventBus()
    yield bus
    bus.shutdown()


@pytest.fixture
def recorder(event_bus: EventBus) -> EventRecorder:
    """Records every event published on ``event_bus``."""
    return EventRecorder(event_bus)


@pytest.fixture
def mock_event_bus() -> MagicMock:
    """Create a mock event bus for testing event-driven components."""
    mock_bus = MagicMock()
    mock_bus.publish = MagicMock()
    mock_bus.subscribe = MagicMock()
    mock_bus.unsubscribe = MagicMock()
    return mock_bus
