from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from core.qr import qr_archive, qr_data_url, qr_payload
from db.storage import Storage, get_storage
from schemas.analytics import QRCodeRead

router = APIRouter()


@router.get("/archive", response_class=Response)
async def download_qr_archive(
    ids: List[UUID] = Query(...),
    storage: Storage = Depends(get_storage),
):
    """ZIP of QR code PNGs for the given items. Unknown ids are skipped."""
    items = []
    for item_id in ids:
        item = await storage.get_item(item_id)
        if item:
            items.append(item)
    if not items:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No matching items")

    return Response(
        content=qr_archive(items),
        media_type="application/zip",
        headers={"Content-Disposition": 'attachment; filename="qr-codes.zip"'},
    )


@router.get("/{item_id}", response_model=QRCodeRead)
async def get_qr_code(item_id: UUID, storage: Storage = Depends(get_storage)):
    item = await storage.get_item(item_id)
    if not item:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Item not found")
    payload = qr_payload(item)
    return QRCodeRead(qr_code=qr_data_url(payload), data=payload)
