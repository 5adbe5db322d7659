"""
Shared fixtures and test doubles.
"""

import asyncio
from typing import Callable, List, Optional, Set, Tuple

import aiosqlite
import pytest
import pytest_asyncio

from dairy_ledger.db import SQLiteDatabase, OfflineAction
from dairy_ledger.notifications import Notifier
from dairy_ledger.sync import RemoteExecutor, RemoteExecutionError


class RecordingNotifier(Notifier):
    """Keeps every notice as (level, message)."""

    def __init__(self):
        self.messages: List[Tuple[str, str]] = []

    def info(self, message: str) -> None:
        self.messages.append(("info", message))

    def success(self, message: str) -> None:
        self.messages.append(("success", message))

    def warning(self, message: str) -> None:
        self.messages.append(("warning", message))

    def error(self, message: str) -> None:
        self.messages.append(("error", message))

    def of_level(self, level: str) -> List[str]:
        return [m for lvl, m in self.messages if lvl == level]


class ScriptedRemote(RemoteExecutor):
    """
    Remote double. Fails actions whose data name is in ``failing_names``
    (or every action when ``always_fail`` is set) and can hold calls on a gate.
    """

    def __init__(self, always_fail: bool = False):
        self.always_fail = always_fail
        self.failing_names: Set[str] = set()
        self.calls: List[str] = []
        self.gate: Optional[asyncio.Event] = None
        self.in_flight = 0
        self.max_in_flight = 0

    async def execute(self, action: OfflineAction) -> None:
        self.calls.append(action.id)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            if self.gate is not None:
                await self.gate.wait()
            name = action.data.get("name") if isinstance(action.data, dict) else None
            if self.always_fail or name in self.failing_names:
                raise RemoteExecutionError(f"rejected {action.id}")
        finally:
            self.in_flight -= 1


class FailingReadDatabase(SQLiteDatabase):
    """Database whose reads fail as if the file were locked."""

    async def get_item(self, key: str) -> Optional[str]:
        raise aiosqlite.OperationalError("database is locked")


async def wait_until(predicate: Callable[[], bool], timeout: float = 2.0) -> None:
    """Yield to the event loop until ``predicate`` holds."""
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    while not predicate():
        if loop.time() > deadline:
            raise AssertionError("condition not met in time")
        await asyncio.sleep(0.001)


@pytest.fixture
def db_path(tmp_path) -> str:
    return str(tmp_path / "data" / "test.db")


@pytest_asyncio.fixture
async def db(db_path):
    database = SQLiteDatabase(db_path)
    await database.initialize()
    yield database
    await database.close()


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def remote() -> ScriptedRemote:
    return ScriptedRemote()
