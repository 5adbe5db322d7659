"""
Tests for remote executors.
"""

import json

import httpx
import pytest

from dairy_ledger.db import OfflineAction
from dairy_ledger.sync import (
    HttpRemoteExecutor, RemoteExecutionError, RemoteRejectedError, SimulatedRemoteExecutor
)


def make_action(type="CREATE", entity="customer", data=None) -> OfflineAction:
    return OfflineAction(type=type, entity=entity, data=data or {"name": "Acme"})


class TestHttpRemoteExecutor:
    """Tests for the REST executor."""

    @pytest.mark.asyncio
    async def test_create_posts_to_collection(self):
        """CREATE posts the action to the collection URL."""
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(201, json={"ok": True})

        action = make_action()
        async with HttpRemoteExecutor("http://api.test/", transport=httpx.MockTransport(handler)) as remote:
            await remote.execute(action)

        assert len(seen) == 1
        assert seen[0].method == "POST"
        assert str(seen[0].url) == "http://api.test/customers"
        assert seen[0].headers["Idempotency-Key"] == action.id
        body = json.loads(seen[0].content)
        assert body["retryCount"] == 0
        assert body["data"] == {"name": "Acme"}

    @pytest.mark.asyncio
    async def test_update_and_delete_target_the_record(self):
        """UPDATE and DELETE address the record URL."""
        seen = []

        def handler(request):
            seen.append((request.method, request.url.path))
            return httpx.Response(200)

        async with HttpRemoteExecutor("http://api.test", transport=httpx.MockTransport(handler)) as remote:
            await remote.execute(make_action("UPDATE", "order", {"id": "o1", "status": "paid"}))
            await remote.execute(make_action("DELETE", "tracksheet", {"id": "track9"}))

        assert seen == [("PUT", "/orders/o1"), ("DELETE", "/tracksheets/track9")]

    @pytest.mark.asyncio
    async def test_error_status_is_rejected(self):
        """Error statuses raise RemoteRejectedError."""
        transport = httpx.MockTransport(lambda request: httpx.Response(500))

        async with HttpRemoteExecutor("http://api.test", transport=transport) as remote:
            with pytest.raises(RemoteRejectedError) as exc_info:
                await remote.execute(make_action())

        assert exc_info.value.status_code == 500

    @pytest.mark.asyncio
    async def test_connection_error(self):
        """Transport errors raise RemoteExecutionError."""
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        async with HttpRemoteExecutor("http://api.test", transport=httpx.MockTransport(handler)) as remote:
            with pytest.raises(RemoteExecutionError):
                await remote.execute(make_action())


    @pytest.mark.asyncio
    async def test_update_without_id_is_not_sent(self):
        """UPDATE and DELETE without a record id raise before any request."""
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200)

        async with HttpRemoteExecutor("http://api.test", transport=httpx.MockTransport(handler)) as remote:
            with pytest.raises(RemoteExecutionError):
                await remote.execute(make_action("UPDATE", "customer", {"name": "no id"}))
            with pytest.raises(RemoteExecutionError):
                await remote.execute(make_action("DELETE", "order", {"id": ""}))

        assert seen == []


class TestSimulatedRemoteExecutor:

    @pytest.mark.asyncio
    async def test_succeeds_unless_marked(self):
        """Only actions marked to fail raise."""
        remote = SimulatedRemoteExecutor(latency=0)
        good = make_action()
        bad = make_action(data={"name": "Bad"})
        remote.fail_action(bad.id)

        await remote.execute(good)
        with pytest.raises(RemoteExecutionError):
            await remote.execute(bad)

        assert remote.executed == [good.id]
