"""
Record CRUD routes, one collection per entity kind.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, HTTPException
from pydantic import BaseModel

from ..dependencies import get_context
from ..db import MutationResult
from ..store import EntityStore

router = APIRouter(prefix="/api/entities")


class DuplicateOrderRequest(BaseModel):
    date: Optional[str] = None


def _get_store(kind: str) -> EntityStore:
    try:
        return get_context().store(kind)
    except ValueError:
        raise HTTPException(status_code=404, detail=f"Unknown entity kind: {kind}")


@router.get("/{kind}")
async def list_records(kind: str) -> List[Dict[str, Any]]:
    """List all records of a kind."""
    return _get_store(kind).get_all()


@router.post("/{kind}", status_code=201)
async def create_record(kind: str, fields: Dict[str, Any] = Body(...)) -> Dict[str, Any]:
    """Create a record; the id is assigned by the store."""
    return await _get_store(kind).add(fields)


@router.get("/{kind}/{record_id}")
async def get_record(kind: str, record_id: str) -> Dict[str, Any]:
    record = _get_store(kind).get(record_id)
    if record is None:
        raise HTTPException(status_code=404, detail="Record not found")
    return record


@router.patch("/{kind}/{record_id}", response_model=MutationResult)
async def update_record(kind: str, record_id: str, fields: Dict[str, Any] = Body(...)):
    """Merge fields into a record. A missing id answers 200 with status not_found."""
    return await _get_store(kind).update(record_id, fields)


@router.delete("/{kind}/{record_id}", response_model=MutationResult)
async def delete_record(kind: str, record_id: str):
    """Delete a record. A missing id answers 200 with status not_found."""
    return await _get_store(kind).remove(record_id)


@router.post("/orders/{record_id}/duplicate", status_code=201)
async def duplicate_order(record_id: str, request: Optional[DuplicateOrderRequest] = None) -> Dict[str, Any]:
    """Copy an order as a new pending, unpaid order."""
    date = request.date if request and request.date else datetime.now(timezone.utc).isoformat()

    order = await _get_store("orders").duplicate(
        record_id,
        {"date": date, "status": "pending", "paymentStatus": "pending"}
    )
    if order is None:
        raise HTTPException(status_code=404, detail="Order not found")
    return order


@router.post("/orders/batch", status_code=201)
async def create_batch_orders(orders: List[Dict[str, Any]] = Body(...)) -> List[Dict[str, Any]]:
    """Create several orders with a single write."""
    return await _get_store("orders").add_many(orders)


@router.post("/orders/{record_id}/invoice", status_code=201)
async def generate_invoice(record_id: str) -> Dict[str, Any]:
    """Create a draft invoice from an order."""
    invoice = await get_context().generate_invoice_from_order(record_id)
    if invoice is None:
        raise HTTPException(status_code=404, detail="Order or customer not found")
    return invoice
