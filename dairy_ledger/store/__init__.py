"""
Local-first record stores.
"""

from .entity_store import EntityStore, Record
from .settings_store import UISettingsStore
from .seeder import InitialDataSeeder
from .catalog import customers_list, products_list, generate_product_code

__all__ = [
    "EntityStore",
    "Record",
    "UISettingsStore",
    "InitialDataSeeder",
    "customers_list",
    "products_list",
    "generate_product_code",
]
