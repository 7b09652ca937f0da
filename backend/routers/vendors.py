from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status

from db.storage import Storage, get_storage
from schemas.vendors import VendorRead

router = APIRouter()


@router.get("/", response_model=List[VendorRead])
async def list_vendors(storage: Storage = Depends(get_storage)):
    return await storage.get_vendors()


@router.get("/{vendor_id}", response_model=VendorRead)
async def get_vendor(vendor_id: UUID, storage: Storage = Depends(get_storage)):
    vendor = await storage.get_vendor(vendor_id)
    if not vendor:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Vendor not found")
    return vendor
