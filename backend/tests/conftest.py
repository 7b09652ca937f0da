"""
Pytest fixtures for the API tests.

Routes run against an in-memory storage and a fixed clock, injected through
FastAPI dependency overrides; no database or network is needed.
"""

import sys
import uuid
from datetime import date, datetime, timedelta, timezone
from pathlib import Path
from typing import Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

BACKEND_DIR = Path(__file__).resolve().parents[1]
if str(BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(BACKEND_DIR))

from core.clock import get_now  # noqa: E402
from core.config import settings  # noqa: E402
from core.stats import compute_stats  # noqa: E402
from db.inspection import Inspection  # noqa: E402
from db.item import Item  # noqa: E402
from db.storage import get_storage  # noqa: E402
from db.vendor import Vendor  # noqa: E402
from main import app  # noqa: E402

FIXED_NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


class InMemoryStorage:
    """Same interface as db.storage.Storage, backed by dicts."""

    def __init__(self, now: datetime = FIXED_NOW):
        self.now = now
        self.items: Dict[uuid.UUID, Item] = {}
        self.vendors: Dict[uuid.UUID, Vendor] = {}
        self.inspections: List[Inspection] = []
        self.fail_item_inserts = False

    async def get_items(self) -> List[Item]:
        return [i for i in self.items.values() if i.is_active]

    async def get_item(self, item_id) -> Optional[Item]:
        item = self.items.get(item_id)
        return item if item is not None and item.is_active else None

    async def create_items(self, rows) -> List[Item]:
        if self.fail_item_inserts:
            raise RuntimeError("insert failed")
        models = [Item(created_at=self.now, updated_at=self.now, **row) for row in rows]
        for m in models:
            self.items[m.id] = m
        return models

    async def create_item(self, fields) -> Item:
        [item] = await self.create_items([fields])
        return item

    async def update_item(self, item_id, fields) -> Optional[Item]:
        item = await self.get_item(item_id)
        if item is None:
            return None
        for key, value in fields.items():
            setattr(item, key, value)
        return item

    async def delete_item(self, item_id) -> bool:
        item = await self.get_item(item_id)
        if item is None:
            return False
        item.is_active = False
        return True

    async def get_vendors(self) -> List[Vendor]:
        return sorted(self.vendors.values(), key=lambda v: v.name.lower())

    async def get_vendor(self, vendor_id) -> Optional[Vendor]:
        return self.vendors.get(vendor_id)

    async def get_vendor_by_name(self, name: str) -> Optional[Vendor]:
        return next((v for v in self.vendors.values() if v.name == name), None)

    async def create_vendor(self, fields) -> Vendor:
        vendor = Vendor(id=uuid.uuid4(), created_at=self.now, **fields)
        self.vendors[vendor.id] = vendor
        return vendor

    async def create_inspection(self, fields) -> Inspection:
        inspection = Inspection(id=uuid.uuid4(), created_at=self.now, **fields)
        self.inspections.append(inspection)
        item = self.items.get(fields["item_id"])
        if item is not None:
            item.last_inspection_date = fields["inspection_date"]
        return inspection

    async def get_inspections_by_item_id(self, item_id) -> List[Inspection]:
        found = [i for i in self.inspections if i.item_id == item_id]
        return sorted(found, key=lambda i: i.inspection_date, reverse=True)

    async def get_stats(self, now: datetime) -> Dict[str, int]:
        return compute_stats(await self.get_items(), list(self.vendors.values()), now)


def make_item(
    *,
    vendor_name: str = "Acme Rail",
    item_type: str = "concrete-sleeper",
    supply_date: date = date(2025, 1, 1),
    warranty_period: int = 24,
    warranty_expiry_date: Optional[date] = None,
    last_inspection_date: Optional[date] = None,
    condition_status: str = "good",
) -> Item:
    """Transient Item with every column filled, for pure-function tests."""
    from core.warranty import compute_expiry

    item_id = uuid.uuid4()
    return Item(
        id=item_id,
        item_type=item_type,
        vendor_name=vendor_name,
        supply_date=supply_date,
        warranty_period=warranty_period,
        warranty_expiry_date=warranty_expiry_date or compute_expiry(supply_date, warranty_period),
        last_inspection_date=last_inspection_date,
        condition_status=condition_status,
        inspection_notes=None,
        qr_code_url=f"/api/qr/{item_id}",
        is_active=True,
    )


@pytest.fixture
def now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def today(now: datetime) -> date:
    return now.date()


@pytest.fixture
def days(today: date):
    """Date ``n`` days from the fixed clock's date (negative for the past)."""
    def _days(n: int) -> date:
        return today + timedelta(days=n)
    return _days


@pytest.fixture
def storage() -> InMemoryStorage:
    return InMemoryStorage()


@pytest.fixture
def no_ai_service(monkeypatch):
    """Disable the external summary call so the local template is used."""
    monkeypatch.setattr(settings, "ai_summary_url", "")


@pytest.fixture
def client(storage: InMemoryStorage, no_ai_service):
    app.dependency_overrides[get_storage] = lambda: storage
    app.dependency_overrides[get_now] = lambda: FIXED_NOW
    # No context manager: the lifespan (database engine) is not started.
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()


@pytest.fixture
def batch_payload() -> dict:
    return {
        "item_type": "concrete-sleeper",
        "vendor_name": "Bharat Concrete Works",
        "supply_date": "2024-01-15",
        "warranty_period": 12,
        "quantity": 5,
    }


@pytest.fixture
def item_factory():
    return make_item
