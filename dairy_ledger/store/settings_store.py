"""
Single-record store for display preferences.
"""

import copy
import logging
from typing import Any, Dict

from ..db import SQLiteDatabase, DEFAULT_UI_SETTINGS, UI_SETTINGS_KEY
from .entity_store import STORAGE_ERRORS

logger = logging.getLogger(__name__)


class UISettingsStore:
    """UI settings with every field defaulted."""

    def __init__(self, db: SQLiteDatabase):
        self.db = db
        self._settings: Dict[str, Any] = copy.deepcopy(DEFAULT_UI_SETTINGS)

    async def load(self) -> None:
        """Stored values win over defaults; missing fields keep their default."""
        try:
            stored = await self.db.get_json(UI_SETTINGS_KEY)
        except ValueError as e:
            logger.error(f"Corrupt UI settings, using defaults: {e}")
            stored = None
        except STORAGE_ERRORS as e:
            logger.error(f"Failed to read UI settings, using defaults: {e}")
            stored = None

        settings = copy.deepcopy(DEFAULT_UI_SETTINGS)
        if isinstance(stored, dict):
            settings.update(stored)
        elif stored is not None:
            logger.error(f"Unexpected UI settings value ({type(stored).__name__}), using defaults")
        self._settings = settings

    def get(self) -> Dict[str, Any]:
        return copy.deepcopy(self._settings)

    async def _persist(self) -> None:
        try:
            await self.db.set_json(UI_SETTINGS_KEY, self._settings)
        except STORAGE_ERRORS as e:
            logger.error(f"Failed to save UI settings: {e}")

    async def update(self, partial: Dict[str, Any]) -> None:
        self._settings.update(copy.deepcopy(partial))
        await self._persist()

    async def reset(self) -> None:
        self._settings = copy.deepcopy(DEFAULT_UI_SETTINGS)
        await self._persist()
