from datetime import datetime
from typing import List

from fastapi import APIRouter, Depends, Query

from core.analytics import TOP_VENDORS, type_distribution, vendor_performance
from core.anomalies import MAX_ANOMALIES, detect_anomalies
from core.clock import get_now
from db.storage import Storage, get_storage
from schemas.analytics import AnomalyRead, StatsRead, TypeDistributionRead, VendorPerformanceRead

router = APIRouter()


@router.get("/stats", response_model=StatsRead)
async def get_stats(
    storage: Storage = Depends(get_storage),
    now: datetime = Depends(get_now),
):
    return await storage.get_stats(now)


@router.get("/analytics/anomalies", response_model=List[AnomalyRead])
async def list_anomalies(
    limit: int = Query(MAX_ANOMALIES, ge=1, le=100),
    storage: Storage = Depends(get_storage),
    now: datetime = Depends(get_now),
):
    items = await storage.get_items()
    return detect_anomalies(items, now, limit=limit)


@router.get("/analytics/distribution", response_model=List[TypeDistributionRead])
async def get_type_distribution(storage: Storage = Depends(get_storage)):
    return type_distribution(await storage.get_items())


@router.get("/analytics/vendors", response_model=List[VendorPerformanceRead])
async def get_vendor_performance(
    limit: int = Query(TOP_VENDORS, ge=1, le=100),
    storage: Storage = Depends(get_storage),
):
    return vendor_performance(await storage.get_items(), limit=limit)
