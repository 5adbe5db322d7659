"""
Database package - SQLite key/value storage.
"""

from .models import (
    ENTITY_KINDS, EntityKind, MutationResult, MutationStatus,
    ActionType, ActionEntity, OfflineAction, UISettingsUpdate,
    DEFAULT_UI_SETTINGS, MAX_RETRIES, UI_SETTINGS_KEY,
    INITIAL_DATA_LOADED_KEY, OFFLINE_ACTIONS_KEY, LAST_SUCCESSFUL_SYNC_KEY,
    generate_id, now_ms
)
from .sqlite import SQLiteDatabase

__all__ = [
    "SQLiteDatabase",
    "ENTITY_KINDS",
    "EntityKind",
    "MutationResult",
    "MutationStatus",
    "ActionType",
    "ActionEntity",
    "OfflineAction",
    "UISettingsUpdate",
    "DEFAULT_UI_SETTINGS",
    "MAX_RETRIES",
    "UI_SETTINGS_KEY",
    "INITIAL_DATA_LOADED_KEY",
    "OFFLINE_ACTIONS_KEY",
    "LAST_SUCCESSFUL_SYNC_KEY",
    "generate_id",
    "now_ms",
]
