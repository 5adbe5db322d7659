"""
Bridges the runtime's online/offline signal to the offline queue.
"""

import asyncio
import logging
from typing import Awaitable, Callable, List, Optional, Set

import httpx

from ..notifications import Notifier

logger = logging.getLogger(__name__)

OnlineCallback = Callable[[], Awaitable[object]]


class ConnectivityMonitor:
    """
    Tracks whether the runtime is online.

    Each offline -> online transition fires every registered callback once,
    as a background task. Going offline only produces a notice.
    """

    def __init__(
        self,
        notifier: Optional[Notifier] = None,
        online: bool = True,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.notifier = notifier or Notifier()
        self._online = online
        self._callbacks: List[OnlineCallback] = []
        self._tasks: Set[asyncio.Task] = set()
        self._watcher: Optional[asyncio.Task] = None
        self._transport = transport

    def is_online(self) -> bool:
        return self._online

    def on_online(self, callback: OnlineCallback) -> None:
        """Register a coroutine function to run on every reconnect."""
        self._callbacks.append(callback)

    def set_online(self, online: bool) -> bool:
        """
        Feed a connectivity reading. Returns True if it was a transition.
        """
        if online == self._online:
            return False

        self._online = online
        if online:
            logger.info("Connection restored")
            self.notifier.info("Back online! Syncing data...")
            for callback in self._callbacks:
                task = asyncio.create_task(self._run_callback(callback))
                self._tasks.add(task)
                task.add_done_callback(self._tasks.discard)
        else:
            logger.info("Connection lost")
            self.notifier.warning("You are now offline. Changes will be saved locally.")
        return True

    async def _run_callback(self, callback: OnlineCallback) -> None:
        try:
            await callback()
        except Exception:
            logger.exception("Reconnect callback failed")

    async def wait_idle(self) -> None:
        """Wait for reconnect callbacks that are still running."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    # ===== Reachability Probe =====

    async def probe(self, url: str, timeout: float = 5.0) -> bool:
        """Single reachability check; any HTTP answer counts as online."""
        try:
            async with httpx.AsyncClient(timeout=timeout, transport=self._transport) as client:
                await client.head(url)
            return True
        except httpx.RequestError as e:
            logger.debug(f"Probe to {url} failed: {e}")
            return False

    async def _watch(self, url: str, interval: float) -> None:
        while True:
            self.set_online(await self.probe(url))
            await asyncio.sleep(interval)

    def start_watching(self, url: str, interval: float = 15.0) -> None:
        """Derive transitions from periodic probes of ``url``."""
        if self._watcher is None or self._watcher.done():
            logger.info(f"Watching connectivity via {url} every {interval:.0f}s")
            self._watcher = asyncio.create_task(self._watch(url, interval))

    async def close(self) -> None:
        """Stop the watcher and let in-flight callbacks finish."""
        if self._watcher:
            self._watcher.cancel()
            try:
                await self._watcher
            except asyncio.CancelledError:
                pass
            self._watcher = None
        await self.wait_idle()
