"""
Pydantic models and enums shared by the stores and the sync queue.
Records themselves are plain dicts; only the fixed-shape values get models.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional
from pydantic import BaseModel, ConfigDict, Field
import random
import string
import time


# Storage keys owned by single components
UI_SETTINGS_KEY = "uiSettings"
INITIAL_DATA_LOADED_KEY = "initial-data-loaded"
OFFLINE_ACTIONS_KEY = "offline_actions"
LAST_SUCCESSFUL_SYNC_KEY = "lastSuccessfulSync"

MAX_RETRIES = 3

_ID_ALPHABET = string.ascii_lowercase + string.digits


def now_ms() -> int:
    """Current time as epoch milliseconds."""
    return int(time.time() * 1000)


def random_suffix(length: int = 9) -> str:
    """Random base36 string."""
    return "".join(random.choices(_ID_ALPHABET, k=length))


def generate_id(prefix: str) -> str:
    """Time-based identifier with a random suffix, e.g. ``c1718000000000-k3j9x0a2b``."""
    return f"{prefix}{now_ms()}-{random_suffix()}"


@dataclass(frozen=True)
class EntityKind:
    """One kind of record and the storage key that holds its collection."""
    slug: str
    storage_key: str
    id_prefix: str


ENTITY_KINDS: Dict[str, EntityKind] = {
    kind.slug: kind
    for kind in (
        EntityKind("customers", "customers", "c"),
        EntityKind("products", "products", "p"),
        EntityKind("orders", "orders", "o"),
        EntityKind("payments", "payments", "pay"),
        EntityKind("vehicles", "vehicles", "v"),
        EntityKind("salesmen", "salesmen", "s"),
        EntityKind("customer-product-rates", "customerProductRates", "rate"),
        EntityKind("invoices", "invoices", "inv"),
        EntityKind("track-sheets", "trackSheets", "track"),
    )
}


class MutationStatus(str, Enum):
    """Outcome of a store mutation."""
    OK = "ok"
    NOT_FOUND = "not_found"
    STORAGE_ERROR = "storage_error"


class MutationResult(BaseModel):
    """Result of update/remove calls. Callers may ignore it."""
    status: MutationStatus = MutationStatus.OK
    record: Optional[Dict[str, Any]] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == MutationStatus.OK


class ActionType(str, Enum):
    """Kind of mutation an offline action replays."""
    CREATE = "CREATE"
    UPDATE = "UPDATE"
    DELETE = "DELETE"


class ActionEntity(str, Enum):
    """Entities that can be queued for remote sync."""
    CUSTOMER = "customer"
    PRODUCT = "product"
    ORDER = "order"
    TRACKSHEET = "tracksheet"


def generate_action_id() -> str:
    return f"action_{now_ms()}_{random_suffix()}"


class OfflineAction(BaseModel):
    """A queued mutation waiting to reach the remote endpoint."""
    model_config = ConfigDict(populate_by_name=True, use_enum_values=False)

    id: str = Field(default_factory=generate_action_id)
    type: ActionType
    entity: ActionEntity
    data: Any = None
    timestamp: int = Field(default_factory=now_ms)
    retry_count: int = Field(default=0, ge=0, alias="retryCount")

    def to_storage(self) -> Dict[str, Any]:
        """Shape persisted under ``offline_actions``."""
        return self.model_dump(mode="json", by_alias=True)


DEFAULT_UI_SETTINGS: Dict[str, Any] = {
    "theme": "light",
    "language": "en",
    "currency": "INR",
    "sidebarCollapsed": False,
    "fontSize": "medium",
    "tableStyle": "default",
    "sidebarStyle": "default",
    "dateFormat": "DD/MM/YYYY",
    "colorScheme": "default",
    "notificationFrequency": "immediate",
}


class UISettingsUpdate(BaseModel):
    """Input for a partial settings update."""
    model_config = ConfigDict(extra="forbid")

    theme: Optional[str] = Field(None, pattern="^(light|dark|system)$")
    language: Optional[str] = None
    currency: Optional[str] = None
    sidebarCollapsed: Optional[bool] = None
    fontSize: Optional[str] = Field(None, pattern="^(small|medium|large|x-large)$")
    tableStyle: Optional[str] = Field(
        None, pattern="^(default|compact|minimal|bordered|striped)$"
    )
    sidebarStyle: Optional[str] = Field(
        None, pattern="^(default|compact|expanded|gradient|solid|minimal)$"
    )
    dateFormat: Optional[str] = None
    colorScheme: Optional[str] = None
    notificationFrequency: Optional[str] = Field(
        None, pattern="^(weekly|immediate|hourly|daily)$"
    )
