"""
Write-ahead log of mutations made while offline, replayed in order
when the remote endpoint is reachable.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, List, Optional, Set, Union

from pydantic import ValidationError

from ..db import (
    SQLiteDatabase, ActionType, ActionEntity, OfflineAction,
    MAX_RETRIES, OFFLINE_ACTIONS_KEY, LAST_SUCCESSFUL_SYNC_KEY
)
from ..notifications import Notifier
from ..store.entity_store import STORAGE_ERRORS
from .remote import RemoteExecutor

logger = logging.getLogger(__name__)


@dataclass
class SyncReport:
    """Outcome of one drain pass."""
    started_at: datetime
    finished_at: Optional[datetime] = None
    succeeded: List[str] = field(default_factory=list)
    retrying: List[str] = field(default_factory=list)
    dropped: List[str] = field(default_factory=list)

    @property
    def attempted(self) -> int:
        return len(self.succeeded) + len(self.retrying) + len(self.dropped)


class OfflineActionQueue:
    """
    Pending actions persisted under ``offline_actions``.

    Each action is Pending until a drain pass executes it: success removes
    it, failure bumps ``retryCount`` and keeps it until the count reaches
    ``max_retries``, after which it is dropped without a trace.
    """

    def __init__(
        self,
        db: SQLiteDatabase,
        remote: RemoteExecutor,
        notifier: Optional[Notifier] = None,
        is_online: Optional[Callable[[], bool]] = None,
        max_retries: int = MAX_RETRIES
    ):
        self.db = db
        self.remote = remote
        self.notifier = notifier or Notifier()
        self.is_online = is_online or (lambda: True)
        self.max_retries = max_retries

        self.last_report: Optional[SyncReport] = None
        self._sync_in_progress = False
        self._list_lock = asyncio.Lock()
        self._background: Set[asyncio.Task] = set()

    @property
    def sync_in_progress(self) -> bool:
        return self._sync_in_progress

    # ===== Persistence =====

    async def get_pending_actions(self) -> List[OfflineAction]:
        """Read the pending list. Unreadable content reads as empty."""
        try:
            value = await self.db.get_json(OFFLINE_ACTIONS_KEY)
        except ValueError as e:
            logger.error(f"Error reading pending actions: {e}")
            return []
        except STORAGE_ERRORS as e:
            logger.error(f"Error reading pending actions: {e}")
            return []

        if value is None:
            return []
        if not isinstance(value, list):
            logger.error(f"Unexpected pending actions value ({type(value).__name__})")
            return []

        actions = []
        for item in value:
            try:
                actions.append(OfflineAction.model_validate(item))
            except ValidationError as e:
                logger.error(f"Skipping malformed pending action: {e}")
        return actions

    async def _save_pending_actions(self, actions: List[OfflineAction]) -> None:
        try:
            await self.db.set_json(OFFLINE_ACTIONS_KEY, [a.to_storage() for a in actions])
        except STORAGE_ERRORS as e:
            logger.error(f"Error saving pending actions: {e}")

    async def get_pending_actions_count(self) -> int:
        return len(await self.get_pending_actions())

    async def get_last_successful_sync(self) -> Optional[str]:
        try:
            return await self.db.get_item(LAST_SUCCESSFUL_SYNC_KEY)
        except STORAGE_ERRORS as e:
            logger.error(f"Error reading last sync time: {e}")
            return None

    # ===== Queue Operations =====

    async def queue_action(
        self,
        type: Union[ActionType, str],
        entity: Union[ActionEntity, str],
        data: Any
    ) -> OfflineAction:
        """
        Append an action and persist the list.

        When online, a drain is started right away in the background, so the
        action may reach the remote before the caller looks at the queue.
        """
        action = OfflineAction(type=ActionType(type), entity=ActionEntity(entity), data=data)

        async with self._list_lock:
            actions = await self.get_pending_actions()
            actions.append(action)
            await self._save_pending_actions(actions)

        logger.info(f"Action queued: {action.type.value} {action.entity.value} ({action.id})")

        if self.is_online():
            self.schedule_sync()

        return action

    def schedule_sync(self) -> asyncio.Task:
        """Start a drain without waiting for it."""
        task = asyncio.create_task(self.sync_pending_actions())
        self._background.add(task)
        task.add_done_callback(self._background.discard)
        return task

    async def join(self) -> None:
        """Wait for drains started by ``schedule_sync``."""
        while self._background:
            await asyncio.gather(*list(self._background), return_exceptions=True)

    async def sync_pending_actions(self) -> bool:
        """
        Run one drain pass over the pending list, oldest first.

        Returns False without doing anything if a pass is already running or
        the runtime is offline. Otherwise returns True when the pending list
        is empty afterwards.
        """
        if self._sync_in_progress or not self.is_online():
            return False

        self._sync_in_progress = True
        try:
            actions = await self.get_pending_actions()
            if not actions:
                return True

            logger.info(f"Syncing {len(actions)} pending actions...")
            self.notifier.info(f"Syncing {len(actions)} pending changes...")

            report = SyncReport(started_at=datetime.now(timezone.utc))
            still_pending: List[OfflineAction] = []

            for action in actions:
                try:
                    await self.remote.execute(action)
                    report.succeeded.append(action.id)
                    logger.debug(f"Successfully synced action {action.id}")
                except Exception as e:
                    logger.error(f"Failed to sync action {action.id}: {e}")
                    action.retry_count += 1
                    if action.retry_count < self.max_retries:
                        still_pending.append(action)
                        report.retrying.append(action.id)
                    else:
                        logger.warning(f"Max retries reached for action {action.id}, dropping it")
                        report.dropped.append(action.id)

            attempted = {a.id for a in actions}
            async with self._list_lock:
                # Keep anything enqueued while the pass was running
                current = await self.get_pending_actions()
                still_pending.extend(a for a in current if a.id not in attempted)
                await self._save_pending_actions(still_pending)

            report.finished_at = datetime.now(timezone.utc)
            self.last_report = report
            await self._record_sync_time(report.finished_at)

            if report.succeeded:
                self.notifier.success(f"Synced {len(report.succeeded)} changes")
            if report.retrying:
                self.notifier.error(f"{len(report.retrying)} changes failed to sync")

            logger.info(
                f"Sync pass complete: {len(report.succeeded)} synced, "
                f"{len(report.retrying)} retrying, {len(report.dropped)} dropped"
            )
            return not still_pending
        finally:
            self._sync_in_progress = False

    async def _record_sync_time(self, when: datetime) -> None:
        try:
            await self.db.set_item(LAST_SUCCESSFUL_SYNC_KEY, when.isoformat())
        except STORAGE_ERRORS as e:
            logger.error(f"Error saving last sync time: {e}")

    async def clear_pending_actions(self) -> None:
        """Discard every pending action."""
        async with self._list_lock:
            try:
                await self.db.remove_item(OFFLINE_ACTIONS_KEY)
            except STORAGE_ERRORS as e:
                logger.error(f"Error clearing pending actions: {e}")
                return
        logger.info("Pending actions cleared")
        self.notifier.success("Pending actions cleared")
