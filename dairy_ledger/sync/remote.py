"""
Remote execution of queued offline actions.
"""

import asyncio
import logging
from typing import Dict, Optional, Set

import httpx

from ..db import ActionType, OfflineAction

logger = logging.getLogger(__name__)


class RemoteExecutionError(Exception):
    """Base exception for remote execution failures."""
    pass


class RemoteRejectedError(RemoteExecutionError):
    """The remote endpoint answered with an error status."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class RemoteExecutor:
    """Applies one offline action on the remote side. Raises on failure."""

    async def execute(self, action: OfflineAction) -> None:
        raise NotImplementedError

    async def close(self) -> None:
        pass


class SimulatedRemoteExecutor(RemoteExecutor):
    """
    Stand-in for a backend that does not exist yet.

    Every call waits ``latency`` seconds and succeeds, unless the action id
    was registered with ``fail_action``.
    """

    def __init__(self, latency: float = 0.1):
        self.latency = latency
        self.executed: list = []
        self._failing: Set[str] = set()

    def fail_action(self, action_id: str) -> None:
        self._failing.add(action_id)

    async def execute(self, action: OfflineAction) -> None:
        if self.latency > 0:
            await asyncio.sleep(self.latency)

        if action.id in self._failing:
            raise RemoteExecutionError(f"Simulated failure for {action.id}")

        logger.debug(f"Executed {action.type.value} {action.entity.value} ({action.id})")
        self.executed.append(action.id)


class HttpRemoteExecutor(RemoteExecutor):
    """
    Sends actions to a REST backend.

    CREATE -> POST {base_url}/{entity}s, UPDATE -> PUT, DELETE -> DELETE.
    Retries are left to the offline queue.
    """

    METHODS: Dict[ActionType, str] = {
        ActionType.CREATE: "POST",
        ActionType.UPDATE: "PUT",
        ActionType.DELETE: "DELETE",
    }

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout, connect=min(self.timeout, 5.0)),
                headers={"Content-Type": "application/json"},
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    def _url_for(self, action: OfflineAction) -> str:
        """Collection URL for CREATE, record URL otherwise. Raises if the record id is missing."""
        url = f"{self.base_url}/{action.entity.value}s"
        if action.type == ActionType.CREATE:
            return url

        record_id = action.data.get("id") if isinstance(action.data, dict) else None
        if not record_id:
            raise RemoteExecutionError(
                f"{action.type.value} {action.entity.value} ({action.id}) has no record id"
            )
        return f"{url}/{record_id}"

    async def execute(self, action: OfflineAction) -> None:
        url = self._url_for(action)
        client = await self._get_client()
        method = self.METHODS[action.type]

        try:
            response = await client.request(
                method,
                url,
                json=action.to_storage(),
                headers={"Idempotency-Key": action.id},
            )
        except httpx.RequestError as e:
            raise RemoteExecutionError(f"Request error: {e}") from e

        if response.status_code >= 400:
            raise RemoteRejectedError(
                f"{method} {url} returned {response.status_code}",
                status_code=response.status_code,
            )

        logger.debug(f"{method} {url} -> {response.status_code}")

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()
