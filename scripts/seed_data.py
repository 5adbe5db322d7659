#!/usr/bin/env python3
"""
Load the bundled product and customer catalogs into the local database.
Usage: python scripts/seed_data.py [--force]

Without --force the seed only runs on a fresh installation. With --force the
catalog walk runs again; records that already exist by name are skipped.
"""

import asyncio
import logging
import sys
import os

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dairy_ledger.config import settings
from dairy_ledger.context import DataContext
from dairy_ledger.store import customers_list, products_list

logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)


async def main(force: bool):
    context = DataContext.from_settings(settings)
    await context.start(seed=False)

    try:
        customers = context.store("customers")
        products = context.store("products")

        if force:
            result = {
                "products": await context.seeder.seed(products, products_list()),
                "customers": await context.seeder.seed(customers, customers_list()),
            }
            await context.seeder.mark_initial_data_as_loaded()
        else:
            result = await context.seeder.seed_all(customers, products)

        print(f"\nAdded {result['products']} products and {result['customers']} customers")
        print(f"Store now holds {len(products)} products and {len(customers)} customers\n")

    finally:
        await context.close()


if __name__ == "__main__":
    asyncio.run(main("--force" in sys.argv[1:]))
