"""
Offline action queue, remote executors and connectivity monitoring.
"""

from .remote import (
    RemoteExecutor,
    RemoteExecutionError,
    RemoteRejectedError,
    SimulatedRemoteExecutor,
    HttpRemoteExecutor,
)
from .queue import OfflineActionQueue, SyncReport
from .connectivity import ConnectivityMonitor

__all__ = [
    "RemoteExecutor",
    "RemoteExecutionError",
    "RemoteRejectedError",
    "SimulatedRemoteExecutor",
    "HttpRemoteExecutor",
    "OfflineActionQueue",
    "SyncReport",
    "ConnectivityMonitor",
]
