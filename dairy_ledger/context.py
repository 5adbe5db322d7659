"""
Wiring of one instance of every store, the queue and the monitor.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Dict, Optional

from .config import Settings
from .db import SQLiteDatabase, ENTITY_KINDS, now_ms
from .notifications import LoggingNotifier, Notifier
from .store import EntityStore, Record, UISettingsStore, InitialDataSeeder
from .sync import (
    ConnectivityMonitor, OfflineActionQueue, RemoteExecutor,
    SimulatedRemoteExecutor, HttpRemoteExecutor
)

logger = logging.getLogger(__name__)

INVOICE_DUE_DAYS = 30


def build_remote(settings: Settings) -> RemoteExecutor:
    """Pick the remote executor named by ``settings.remote_mode``."""
    if settings.remote_mode == "http":
        return HttpRemoteExecutor(settings.remote_base_url, timeout=settings.remote_timeout)
    if settings.remote_mode == "simulated":
        return SimulatedRemoteExecutor(latency=settings.simulated_latency)
    raise ValueError(f"Unknown remote mode: {settings.remote_mode}")


class DataContext:
    """Everything the UI talks to, built once per process."""

    def __init__(
        self,
        db: SQLiteDatabase,
        remote: RemoteExecutor,
        notifier: Optional[Notifier] = None,
        online: bool = True,
        max_retries: int = 3
    ):
        self.db = db
        self.remote = remote
        self.notifier = notifier or LoggingNotifier()

        self.stores: Dict[str, EntityStore] = {
            slug: EntityStore(db, kind) for slug, kind in ENTITY_KINDS.items()
        }
        self.ui_settings = UISettingsStore(db)
        self.seeder = InitialDataSeeder(db)

        self.connectivity = ConnectivityMonitor(self.notifier, online=online)
        self.queue = OfflineActionQueue(
            db,
            remote,
            notifier=self.notifier,
            is_online=self.connectivity.is_online,
            max_retries=max_retries
        )
        self.connectivity.on_online(self.queue.sync_pending_actions)

    @classmethod
    def from_settings(cls, settings: Settings, notifier: Optional[Notifier] = None) -> "DataContext":
        return cls(
            SQLiteDatabase(settings.database_path),
            build_remote(settings),
            notifier=notifier,
            online=settings.start_online,
            max_retries=settings.max_retries
        )

    def store(self, slug: str) -> EntityStore:
        """Store for an entity kind slug, e.g. ``customers``."""
        if slug not in self.stores:
            raise ValueError(f"Unknown entity kind: {slug}")
        return self.stores[slug]

    # ===== Orders =====

    async def generate_invoice_from_order(self, order_id: str) -> Optional[Record]:
        """
        Create a draft invoice from an order and its customer.

        Returns None when the order or its customer does not exist. Item
        descriptions come from the product names; unknown products leave
        the description empty.
        """
        order = self.store("orders").get(order_id)
        if order is None:
            logger.warning(f"Order '{order_id}' not found for invoicing")
            return None

        customer = self.store("customers").get(order.get("customerId") or "")
        if customer is None:
            logger.warning(f"Customer for order '{order_id}' not found for invoicing")
            return None

        products = self.store("products")
        now = datetime.now(timezone.utc)
        total = order.get("total") or 0

        items = []
        for item in order.get("items") or []:
            product = products.get(item.get("productId") or "")
            quantity = item.get("quantity") or 0
            unit_price = item.get("unitPrice") or 0
            items.append({
                "productId": item.get("productId"),
                "description": product["name"] if product else "",
                "quantity": quantity,
                "unitPrice": unit_price,
                "amount": quantity * unit_price,
            })

        invoice = await self.store("invoices").add({
            "customerId": order.get("customerId") or "",
            "customerName": customer.get("name"),
            "number": f"INV-{now_ms()}",
            "date": now.isoformat(),
            "dueDate": (now + timedelta(days=INVOICE_DUE_DAYS)).isoformat(),
            "items": items,
            "subtotal": total,
            "taxRate": 0,
            "taxAmount": 0,
            "total": total,
            "status": "draft",
            "notes": "",
            "termsAndConditions": "",
            "createdAt": now.isoformat(),
            "updatedAt": now.isoformat(),
        })
        logger.info(f"Generated invoice {invoice['number']} from order {order_id}")
        return invoice

    async def start(self, seed: bool = True) -> None:
        await self.db.initialize()
        for store in self.stores.values():
            await store.load()
        await self.ui_settings.load()

        if seed:
            await self.seeder.seed_all(self.stores["customers"], self.stores["products"])

        logger.info(f"Data context ready ({len(self.stores)} stores)")

    async def close(self) -> None:
        await self.connectivity.close()
        await self.queue.join()
        await self.remote.close()
        await self.db.close()
