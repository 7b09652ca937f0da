import logging

from fastapi import APIRouter, Depends, HTTPException, status

from db.storage import Storage, get_storage
from schemas.inspections import InspectionCreate, InspectionRead

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/", response_model=InspectionRead, status_code=status.HTTP_201_CREATED)
async def create_inspection(
    payload: InspectionCreate,
    storage: Storage = Depends(get_storage),
):
    """Record an inspection; the item's last inspection date follows it."""
    item = await storage.get_item(payload.item_id)
    if not item:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Item with id {payload.item_id} not found"
        )

    inspection = await storage.create_inspection(payload.model_dump())
    logger.info("Recorded %s inspection for item %s", payload.condition, payload.item_id)
    return inspection
