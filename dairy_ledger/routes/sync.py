"""
Offline queue and connectivity API routes.
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter
from pydantic import BaseModel

from ..dependencies import get_context
from ..db import ActionType, ActionEntity

router = APIRouter(prefix="/api/sync")


class QueueActionRequest(BaseModel):
    type: ActionType
    entity: ActionEntity
    data: Any = None


class ConnectivityRequest(BaseModel):
    online: bool


class SyncResponse(BaseModel):
    message: str
    success: bool
    pending: int


@router.get("/status")
async def get_sync_status():
    """Queue size, connectivity and the outcome of the last pass."""
    context = get_context()
    report = context.queue.last_report

    last_pass: Optional[Dict[str, Any]] = None
    if report:
        last_pass = {
            "started_at": report.started_at.isoformat(),
            "finished_at": report.finished_at.isoformat() if report.finished_at else None,
            "succeeded": len(report.succeeded),
            "retrying": len(report.retrying),
            "dropped": len(report.dropped),
        }

    return {
        "online": context.connectivity.is_online(),
        "pending_actions": await context.queue.get_pending_actions_count(),
        "sync_in_progress": context.queue.sync_in_progress,
        "last_successful_sync": await context.queue.get_last_successful_sync(),
        "last_pass": last_pass,
    }


@router.get("/actions")
async def list_actions() -> List[Dict[str, Any]]:
    actions = await get_context().queue.get_pending_actions()
    return [a.to_storage() for a in actions]


@router.post("/actions", status_code=201)
async def queue_action(request: QueueActionRequest) -> Dict[str, Any]:
    """Queue a mutation for the remote endpoint."""
    action = await get_context().queue.queue_action(request.type, request.entity, request.data)
    return action.to_storage()


@router.delete("/actions")
async def clear_actions():
    await get_context().queue.clear_pending_actions()
    return {"message": "Pending actions cleared"}


@router.post("/run", response_model=SyncResponse)
async def run_sync():
    """Run one drain pass now."""
    queue = get_context().queue
    success = await queue.sync_pending_actions()
    pending = await queue.get_pending_actions_count()

    if success:
        message = "All pending actions synced"
    elif queue.sync_in_progress:
        message = "Sync already in progress"
    elif not get_context().connectivity.is_online():
        message = "Offline, sync skipped"
    else:
        message = f"{pending} actions still pending"

    return SyncResponse(message=message, success=success, pending=pending)


@router.post("/connectivity")
async def set_connectivity(request: ConnectivityRequest):
    """Report an online/offline reading from the host runtime."""
    connectivity = get_context().connectivity
    transition = connectivity.set_online(request.online)
    return {"online": connectivity.is_online(), "transition": transition}
