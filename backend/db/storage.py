"""
Storage handle over one AsyncSession.

Every read skips retired items (is_active = false). Writes commit before
returning, so a request sees its own changes on the next call.
"""

import logging
from datetime import datetime
from typing import Dict, List, Optional, Sequence
from uuid import UUID

from fastapi import Depends
from sqlalchemy import func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from core.stats import stats_window
from db.database import get_async_session
from db.inspection import Inspection
from db.item import Item
from db.vendor import Vendor

logger = logging.getLogger(__name__)


class Storage:
    def __init__(self, session: AsyncSession):
        self.session = session

    # ---------------- ITEMS ----------------
    async def get_items(self) -> List[Item]:
        res = await self.session.execute(
            select(Item).where(Item.is_active.is_(True)).order_by(Item.created_at.asc(), Item.id.asc())
        )
        return list(res.scalars().all())

    async def get_item(self, item_id: UUID) -> Optional[Item]:
        res = await self.session.execute(
            select(Item).where(Item.id == item_id, Item.is_active.is_(True))
        )
        return res.scalar_one_or_none()

    async def create_items(self, rows: Sequence[Dict]) -> List[Item]:
        """Insert all rows in one transaction; nothing is kept if any insert fails."""
        models = [Item(**row) for row in rows]
        self.session.add_all(models)
        try:
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise
        return models

    async def create_item(self, fields: Dict) -> Item:
        [item] = await self.create_items([fields])
        return item

    async def update_item(self, item_id: UUID, fields: Dict) -> Optional[Item]:
        item = await self.get_item(item_id)
        if not item:
            return None
        for key, value in fields.items():
            setattr(item, key, value)
        await self.session.commit()
        await self.session.refresh(item)
        return item

    async def delete_item(self, item_id: UUID) -> bool:
        """Retire an item. It stays in the table for its inspection history."""
        item = await self.get_item(item_id)
        if not item:
            return False
        item.is_active = False
        await self.session.commit()
        return True

    # ---------------- VENDORS ----------------
    async def get_vendors(self) -> List[Vendor]:
        res = await self.session.execute(select(Vendor).order_by(func.lower(Vendor.name).asc()))
        return list(res.scalars().all())

    async def get_vendor(self, vendor_id: UUID) -> Optional[Vendor]:
        res = await self.session.execute(select(Vendor).where(Vendor.id == vendor_id))
        return res.scalar_one_or_none()

    async def get_vendor_by_name(self, name: str) -> Optional[Vendor]:
        res = await self.session.execute(select(Vendor).where(Vendor.name == name))
        return res.scalar_one_or_none()

    async def create_vendor(self, fields: Dict) -> Vendor:
        """Create a vendor; if a concurrent request won the unique name, return theirs."""
        vendor = Vendor(**fields)
        self.session.add(vendor)
        try:
            await self.session.commit()
        except IntegrityError:
            await self.session.rollback()
            existing = await self.get_vendor_by_name(fields["name"])
            if existing is None:
                raise
            logger.info("Vendor %r created concurrently, reusing it", fields["name"])
            return existing
        await self.session.refresh(vendor)
        return vendor

    # ---------------- INSPECTIONS ----------------
    async def create_inspection(self, fields: Dict) -> Inspection:
        """Record an inspection and stamp the item's last inspection date."""
        inspection = Inspection(**fields)
        self.session.add(inspection)
        item = await self.session.get(Item, fields["item_id"])
        if item is not None:
            item.last_inspection_date = fields["inspection_date"]
        await self.session.commit()
        await self.session.refresh(inspection)
        return inspection

    async def get_inspections_by_item_id(self, item_id: UUID) -> List[Inspection]:
        res = await self.session.execute(
            select(Inspection)
            .where(Inspection.item_id == item_id)
            .order_by(Inspection.inspection_date.desc())
        )
        return list(res.scalars().all())

    # ---------------- STATISTICS ----------------
    async def get_stats(self, now: datetime) -> Dict[str, int]:
        window = stats_window(now)
        active = Item.is_active.is_(True)

        total = await self.session.scalar(select(func.count()).select_from(Item).where(active))
        expiring = await self.session.scalar(
            select(func.count()).select_from(Item).where(
                active,
                Item.warranty_expiry_date > window.today,
                Item.warranty_expiry_date <= window.expiring_until,
            )
        )
        overdue = await self.session.scalar(
            select(func.count()).select_from(Item).where(
                active,
                or_(
                    Item.last_inspection_date.is_(None),
                    Item.last_inspection_date < window.inspected_before,
                ),
            )
        )
        vendors = await self.session.scalar(select(func.count()).select_from(Vendor))
        return {
            "total_items": int(total or 0),
            "warranty_expiring": int(expiring or 0),
            "inspections_overdue": int(overdue or 0),
            "active_vendors": int(vendors or 0),
        }


async def get_storage(db: AsyncSession = Depends(get_async_session)) -> Storage:
    return Storage(db)
