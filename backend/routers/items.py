import logging
import uuid
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from core.ai_client import generate_summary
from core.clock import get_now
from core.reports import generate_item_report_pdf
from core.status import InspectionStatus, WarrantyStatus, inspection_status, warranty_status
from core.warranty import compute_expiry
from db.item import Item
from db.storage import Storage, get_storage
from schemas.inspections import InspectionRead
from schemas.items import ConditionStatus, ItemBatchCreate, ItemBatchRead, ItemRead, ItemUpdate
from schemas.summary import SummaryRequest

logger = logging.getLogger(__name__)

router = APIRouter()


def _item_row(payload: ItemBatchCreate) -> dict:
    item_id = uuid.uuid4()
    return {
        "id": item_id,
        "item_type": payload.item_type,
        "vendor_name": payload.vendor_name,
        "supply_date": payload.supply_date,
        "warranty_period": payload.warranty_period,
        "warranty_expiry_date": compute_expiry(payload.supply_date, payload.warranty_period),
        "last_inspection_date": None,
        "condition_status": "good",
        "inspection_notes": None,
        "qr_code_url": f"/api/qr/{item_id}",
        "is_active": True,
    }


async def create_item_batch(storage: Storage, payload: ItemBatchCreate) -> List[Item]:
    """Get-or-create the vendor, then insert ``quantity`` identical items at once."""
    vendor = await storage.get_vendor_by_name(payload.vendor_name)
    if not vendor:
        vendor = await storage.create_vendor({"name": payload.vendor_name, "contact_info": None})
        logger.info("Created vendor %r", vendor.name)

    rows = [_item_row(payload) for _ in range(payload.quantity)]
    items = await storage.create_items(rows)
    logger.info(
        "Created %d %s item(s) for vendor %r", len(items), payload.item_type, payload.vendor_name
    )
    return items


def _matches_search(item: Item, term: str) -> bool:
    term = term.lower()
    return (
        term in str(item.id).lower()
        or term in item.item_type.lower()
        or term in item.vendor_name.lower()
    )


async def _get_item_or_404(storage: Storage, item_id: UUID) -> Item:
    item = await storage.get_item(item_id)
    if not item:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Item not found")
    return item


@router.get("/", response_model=List[ItemRead])
async def list_items(
    search: Optional[str] = None,
    item_type: Optional[str] = None,
    condition: Optional[ConditionStatus] = None,
    warranty: Optional[WarrantyStatus] = Query(None, alias="warranty_status"),
    inspection: Optional[InspectionStatus] = Query(None, alias="inspection_status"),
    vendor: Optional[str] = None,
    storage: Storage = Depends(get_storage),
    now: datetime = Depends(get_now),
):
    """
    List active items with optional filters.

    - search matches id, item type or vendor name (case-insensitive).
    - warranty_status / inspection_status are evaluated against the current time.
    """
    items = await storage.get_items()
    out = []
    for it in items:
        if search and search.strip() and not _matches_search(it, search.strip()):
            continue
        if item_type and it.item_type != item_type:
            continue
        if condition and (it.condition_status or "good").lower() != condition:
            continue
        if warranty and warranty_status(it.warranty_expiry_date, now) != warranty:
            continue
        if inspection and inspection_status(it.last_inspection_date, now) != inspection:
            continue
        if vendor and it.vendor_name != vendor:
            continue
        out.append(it)
    return out


@router.post("/", response_model=ItemBatchRead, status_code=status.HTTP_201_CREATED)
async def create_items(
    payload: ItemBatchCreate,
    storage: Storage = Depends(get_storage),
):
    items = await create_item_batch(storage, payload)
    return ItemBatchRead(items=[ItemRead.model_validate(i) for i in items], count=len(items))


@router.get("/{item_id}", response_model=ItemRead)
async def get_item(item_id: UUID, storage: Storage = Depends(get_storage)):
    return await _get_item_or_404(storage, item_id)


@router.put("/{item_id}", response_model=ItemRead)
async def update_item(
    item_id: UUID,
    payload: ItemUpdate,
    storage: Storage = Depends(get_storage),
):
    # warranty_expiry_date is never recomputed here, even if supply_date or
    # warranty_period change; clients send it explicitly when needed.
    data = payload.model_dump(exclude_unset=True)
    item = await storage.update_item(item_id, data)
    if not item:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Item not found")
    return item


@router.delete("/{item_id}")
async def delete_item(item_id: UUID, storage: Storage = Depends(get_storage)):
    if not await storage.delete_item(item_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Item not found")
    logger.info("Retired item %s", item_id)
    return {"ok": True}


@router.get("/{item_id}/inspections", response_model=List[InspectionRead])
async def list_item_inspections(item_id: UUID, storage: Storage = Depends(get_storage)):
    await _get_item_or_404(storage, item_id)
    return await storage.get_inspections_by_item_id(item_id)


@router.get("/{item_id}/report", response_class=Response)
async def item_report(
    item_id: UUID,
    include_summary: bool = False,
    storage: Storage = Depends(get_storage),
    now: datetime = Depends(get_now),
):
    """PDF report for one item, optionally with the AI (or local) summary."""
    item = await _get_item_or_404(storage, item_id)

    summary_text = None
    if include_summary:
        summary = await generate_summary(
            SummaryRequest(
                item_id=str(item.id),
                item_type=item.item_type,
                vendor=item.vendor_name,
                supply_date=item.supply_date,
                warranty_period=item.warranty_period,
                last_inspection=item.last_inspection_date,
                condition=item.condition_status,
            ),
            now=now,
        )
        summary_text = summary.summary

    pdf = generate_item_report_pdf(item, now=now, summary=summary_text)
    return Response(
        content=pdf,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="item-report-{item.id}.pdf"'},
    )
