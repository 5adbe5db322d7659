"""
Tests for the HTTP API.
"""

import httpx
import pytest
import pytest_asyncio

from dairy_ledger.context import DataContext
from dairy_ledger.db import SQLiteDatabase
from dairy_ledger.dependencies import init_dependencies, close_dependencies
from dairy_ledger.main import app
from dairy_ledger.sync import SimulatedRemoteExecutor

from .conftest import RecordingNotifier


@pytest_asyncio.fixture
async def context(db_path):
    ctx = DataContext(
        SQLiteDatabase(db_path),
        SimulatedRemoteExecutor(latency=0),
        notifier=RecordingNotifier(),
        online=True
    )
    await ctx.start(seed=False)
    await init_dependencies(ctx)
    yield ctx
    await close_dependencies()


@pytest_asyncio.fixture
async def client(context):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


class TestEntityRoutes:
    """Tests for /api/entities."""

    @pytest.mark.asyncio
    async def test_create_list_get(self, client):
        """Created records can be listed and fetched."""
        response = await client.post("/api/entities/customers", json={"name": "MUNNA"})
        assert response.status_code == 201
        created = response.json()
        assert created["id"].startswith("c")

        response = await client.get("/api/entities/customers")
        assert response.json() == [created]

        response = await client.get(f"/api/entities/customers/{created['id']}")
        assert response.json() == created

    @pytest.mark.asyncio
    async def test_unknown_kind(self, client):
        """Unknown kinds answer 404."""
        response = await client.get("/api/entities/spaceships")
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_get_missing_record(self, client):
        """Missing records answer 404."""
        response = await client.get("/api/entities/products/nonexistent")
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_patch_and_delete(self, client):
        """PATCH and DELETE report ok for existing records."""
        created = (await client.post("/api/entities/track-sheets", json={"route": "A"})).json()

        response = await client.patch(f"/api/entities/track-sheets/{created['id']}", json={"route": "B"})
        assert response.status_code == 200
        assert response.json()["status"] == "ok"
        assert response.json()["record"]["route"] == "B"

        response = await client.delete(f"/api/entities/track-sheets/{created['id']}")
        assert response.json()["status"] == "ok"
        assert (await client.get("/api/entities/track-sheets")).json() == []

    @pytest.mark.asyncio
    async def test_patch_missing_is_not_found_status(self, client):
        """PATCH of a missing id answers 200 with not_found."""
        response = await client.patch("/api/entities/customers/nonexistent", json={"name": "x"})

        assert response.status_code == 200
        assert response.json()["status"] == "not_found"

    @pytest.mark.asyncio
    async def test_duplicate_order(self, client):
        """Duplicated orders are pending and unpaid."""
        order = (await client.post(
            "/api/entities/orders",
            json={"customerId": "c1", "status": "delivered", "paymentStatus": "paid", "date": "2024-01-01"}
        )).json()

        response = await client.post(
            f"/api/entities/orders/{order['id']}/duplicate", json={"date": "2024-02-01"}
        )

        assert response.status_code == 201
        copy = response.json()
        assert copy["id"] != order["id"]
        assert copy["customerId"] == "c1"
        assert copy["status"] == "pending"
        assert copy["paymentStatus"] == "pending"
        assert copy["date"] == "2024-02-01"

    @pytest.mark.asyncio
    async def test_duplicate_missing_order(self, client):
        """Duplicating a missing order answers 404."""
        response = await client.post("/api/entities/orders/nonexistent/duplicate")
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_batch_orders(self, client):
        """A batch creates every order with its own id."""
        response = await client.post(
            "/api/entities/orders/batch",
            json=[{"customerId": "c1", "total": 10}, {"customerId": "c2", "total": 20}]
        )

        assert response.status_code == 201
        created = response.json()
        assert [o["customerId"] for o in created] == ["c1", "c2"]
        assert len({o["id"] for o in created}) == 2
        assert (await client.get("/api/entities/orders")).json() == created

    @pytest.mark.asyncio
    async def test_generate_invoice(self, client):
        """Invoicing an order creates a draft invoice."""
        customer = (await client.post("/api/entities/customers", json={"name": "GUPTA"})).json()
        order = (await client.post(
            "/api/entities/orders",
            json={"customerId": customer["id"], "items": [], "total": 45}
        )).json()

        response = await client.post(f"/api/entities/orders/{order['id']}/invoice")

        assert response.status_code == 201
        invoice = response.json()
        assert invoice["customerName"] == "GUPTA"
        assert invoice["total"] == 45
        assert invoice["status"] == "draft"
        assert (await client.get("/api/entities/invoices")).json() == [invoice]

    @pytest.mark.asyncio
    async def test_generate_invoice_missing_order(self, client):
        """Invoicing a missing order answers 404."""
        response = await client.post("/api/entities/orders/nonexistent/invoice")
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_generate_invoice_missing_customer(self, client):
        """Invoicing an order whose customer is gone answers 404."""
        order = (await client.post("/api/entities/orders", json={"customerId": "c-gone", "total": 5})).json()

        response = await client.post(f"/api/entities/orders/{order['id']}/invoice")

        assert response.status_code == 404
        assert (await client.get("/api/entities/invoices")).json() == []


class TestSettingsRoutes:
    """Tests for /api/settings."""

    @pytest.mark.asyncio
    async def test_update_and_reset(self, client):
        """Settings can be changed and reset."""
        assert (await client.get("/api/settings")).json()["theme"] == "light"

        response = await client.patch("/api/settings", json={"theme": "dark"})
        assert response.json()["theme"] == "dark"
        assert response.json()["currency"] == "INR"

        response = await client.post("/api/settings/reset")
        assert response.json()["theme"] == "light"

    @pytest.mark.asyncio
    async def test_invalid_value_rejected(self, client):
        """Invalid setting values answer 422."""
        response = await client.patch("/api/settings", json={"theme": "neon"})
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_unknown_field_rejected(self, client):
        """Unknown setting fields answer 422."""
        response = await client.patch("/api/settings", json={"wallpaper": "cows"})
        assert response.status_code == 422


class TestSyncRoutes:
    """Tests for /api/sync."""

    @pytest.mark.asyncio
    async def test_offline_queue_then_reconnect(self, client, context):
        """Actions queued offline sync after a reconnect signal."""
        response = await client.post("/api/sync/connectivity", json={"online": False})
        assert response.json() == {"online": False, "transition": True}

        response = await client.post(
            "/api/sync/actions",
            json={"type": "CREATE", "entity": "customer", "data": {"name": "Acme"}}
        )
        assert response.status_code == 201
        assert response.json()["retryCount"] == 0

        status = (await client.get("/api/sync/status")).json()
        assert status["online"] is False
        assert status["pending_actions"] == 1

        response = await client.post("/api/sync/run")
        assert response.json()["success"] is False
        assert response.json()["pending"] == 1

        await client.post("/api/sync/connectivity", json={"online": True})
        await context.connectivity.wait_idle()

        status = (await client.get("/api/sync/status")).json()
        assert status["pending_actions"] == 0
        assert status["last_pass"]["succeeded"] == 1
        assert status["last_successful_sync"] is not None

    @pytest.mark.asyncio
    async def test_invalid_action_rejected(self, client):
        """Unknown action types answer 422."""
        response = await client.post(
            "/api/sync/actions", json={"type": "UPSERT", "entity": "customer", "data": {}}
        )
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_list_and_clear_actions(self, client):
        """Pending actions can be listed and cleared."""
        await client.post("/api/sync/connectivity", json={"online": False})
        await client.post("/api/sync/actions", json={"type": "DELETE", "entity": "order", "data": {"id": "o1"}})

        actions = (await client.get("/api/sync/actions")).json()
        assert [a["type"] for a in actions] == ["DELETE"]

        response = await client.delete("/api/sync/actions")
        assert response.status_code == 200
        assert (await client.get("/api/sync/actions")).json() == []

    @pytest.mark.asyncio
    async def test_run_with_empty_queue(self, client):
        """Running an empty queue succeeds."""
        response = await client.post("/api/sync/run")
        assert response.json() == {"message": "All pending actions synced", "success": True, "pending": 0}


@pytest.mark.asyncio
async def test_health(client):
    """Health endpoint answers ok."""
    response = await client.get("/health")
    assert response.json() == {"status": "ok"}
