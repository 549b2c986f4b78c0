"""Dependency injection container for Day Tally.

Creates and wires the store, persistence and host components in one place
so the controller and tests receive them explicitly.

Usage:
    from app.dependencies import create_dependencies

    deps = create_dependencies()
    deps.store.get("2024-0-15")
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from app.events import EventBus
from config import get_logger
from config.paths import AppPaths, resolve_paths

if TYPE_CHECKING:
    from core.store import DayValueStore
    from service.gateway import ImportExportGateway
    from service.host_bridge import HostBridge
    from storage.mirror import PersistenceMirror

logger = get_logger(__name__)


@dataclass
class AppDependencies:
    """Container for all application dependencies.

    ``bridge`` is None when no desktop host is available; it is checked
    once here and never probed again.
    """

    paths: AppPaths
    event_bus: EventBus
    store: "DayValueStore"
    mirror: "PersistenceMirror"
    gateway: "ImportExportGateway"
    bridge: Optional["HostBridge"] = None

    def __post_init__(self):
        logger.debug("AppDependencies container created")


def create_dependencies(
    paths: Optional[AppPaths] = None,
    event_bus: Optional[EventBus] = None,
    bridge: Optional["HostBridge"] = None,
    detect_host: bool = True,
) -> AppDependencies:
    """Create all application dependencies.

    Args:
        paths: Override the resolved application paths.
        event_bus: Provide an existing event bus, or a synchronous one is created.
        bridge: Use this host bridge instead of detecting one.
        detect_host: Look for the desktop host when ``bridge`` is not given.

    Returns:
        AppDependencies with the mirror attached to the bus.
    """
    # Import here to avoid circular imports
    from core.store import DayValueStore
    from service.gateway import ImportExportGateway
    from service.host_bridge import detect_host_bridge
    from storage.local_storage import LocalStorage
    from storage.mirror import PersistenceMirror

    logger.info("Creating application dependencies...")

    paths = paths or resolve_paths()
    event_bus = event_bus or EventBus()

    if bridge is None and detect_host:
        bridge = detect_host_bridge(paths, event_bus)

    local_storage = LocalStorage(paths.local_storage_file)
    mirror = PersistenceMirror(local_storage, bridge)
    mirror.attach(event_bus)

    deps = AppDependencies(
        paths=paths,
        event_bus=event_bus,
        store=DayValueStore(event_bus),
        mirror=mirror,
        gateway=ImportExportGateway(paths, bridge),
        bridge=bridge,
    )

    logger.info("All dependencies created successfully")
    return deps
