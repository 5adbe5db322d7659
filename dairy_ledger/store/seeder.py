"""
One-time population of the stores from the bundled catalogs.
"""

import logging
from typing import Dict, Iterable

from ..db import SQLiteDatabase, INITIAL_DATA_LOADED_KEY
from .catalog import customers_list, products_list
from .entity_store import EntityStore, STORAGE_ERRORS

logger = logging.getLogger(__name__)


class InitialDataSeeder:
    """
    Adds reference records that are not yet present.

    The list walk de-duplicates by name on its own; the persisted
    ``initial-data-loaded`` flag only decides whether startup runs it.
    """

    def __init__(self, db: SQLiteDatabase):
        self.db = db

    async def has_loaded_initial_data(self) -> bool:
        try:
            return bool(await self.db.get_item(INITIAL_DATA_LOADED_KEY))
        except STORAGE_ERRORS as e:
            logger.error(f"Failed to read initial data flag: {e}")
            return False

    async def mark_initial_data_as_loaded(self) -> None:
        try:
            await self.db.set_item(INITIAL_DATA_LOADED_KEY, "true")
        except STORAGE_ERRORS as e:
            logger.error(f"Failed to save initial data flag: {e}")

    async def seed(self, store: EntityStore, reference_list: Iterable[dict], key: str = "name") -> int:
        """Add every reference item whose ``key`` is not in the store yet."""
        added = 0
        for item in reference_list:
            if store.find_by(key, item.get(key)) is None:
                await store.add(item)
                added += 1

        if added:
            logger.info(f"Seeded {added} records into '{store.storage_key}'")
        return added

    async def seed_all(self, customers: EntityStore, products: EntityStore) -> Dict[str, int]:
        """Run the catalog walks once per installation."""
        if await self.has_loaded_initial_data():
            logger.debug("Initial data already loaded, skipping seed")
            return {"customers": 0, "products": 0}

        result = {
            "products": await self.seed(products, products_list()),
            "customers": await self.seed(customers, customers_list()),
        }
        await self.mark_initial_data_as_loaded()
        logger.info(
            f"Initial data loaded: {result['products']} products, "
            f"{result['customers']} customers"
        )
        return result
