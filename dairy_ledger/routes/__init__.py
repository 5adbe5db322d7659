"""
Routes package.
"""

from .entities import router as entities_router
from .settings import router as settings_router
from .sync import router as sync_router

__all__ = [
    "entities_router",
    "settings_router",
    "sync_router",
]
