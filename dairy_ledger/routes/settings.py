"""
UI settings routes.
"""

from typing import Any, Dict

from fastapi import APIRouter

from ..dependencies import get_context
from ..db import UISettingsUpdate

router = APIRouter(prefix="/api/settings")


@router.get("")
async def get_settings() -> Dict[str, Any]:
    return get_context().ui_settings.get()


@router.patch("")
async def update_settings(update: UISettingsUpdate) -> Dict[str, Any]:
    """Merge the provided fields over the current settings."""
    store = get_context().ui_settings
    await store.update(update.model_dump(exclude_unset=True))
    return store.get()


@router.post("/reset")
async def reset_settings() -> Dict[str, Any]:
    store = get_context().ui_settings
    await store.reset()
    return store.get()
