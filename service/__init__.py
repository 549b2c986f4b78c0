"""Desktop host integration and file transfer."""

from .dialogs import FileDialogs
from .gateway import ImportExportGateway, TransferResult, TransferStatus
from .host_bridge import BridgeResult, DesktopHostBridge, HostBridge, detect_host_bridge

__all__ = [
    "BridgeResult",
    "DesktopHostBridge",
    "FileDialogs",
    "HostBridge",
    "ImportExportGateway",
    "TransferResult",
    "TransferStatus",
    "detect_host_bridge",
]
