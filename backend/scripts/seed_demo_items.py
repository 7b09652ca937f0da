import argparse
import asyncio
import sys
from dataclasses import dataclass
from datetime import date
from pathlib import Path

"""
Seed demo track-fitting batches (vendors + items + a few inspections).

Run from either:
- backend/: `python scripts/seed_demo_items.py`
- repo root: `python backend/scripts/seed_demo_items.py --reset`
"""

# Allow running from repo root by ensuring `backend/` is on sys.path
BACKEND_DIR = Path(__file__).resolve().parents[1]
if str(BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(BACKEND_DIR))

from sqlalchemy import delete  # noqa: E402

from db.database import create_db_and_tables, create_engine, create_session_maker  # noqa: E402
from db.inspection import Inspection  # noqa: E402
from db.item import Item  # noqa: E402
from db.storage import Storage  # noqa: E402
from db.vendor import Vendor  # noqa: E402
from routers.items import create_item_batch  # noqa: E402
from schemas.items import ItemBatchCreate  # noqa: E402


@dataclass(frozen=True)
class SeedBatch:
    item_type: str
    vendor_name: str
    supply_date: date
    warranty_period: int
    quantity: int
    inspected_on: date | None = None
    condition: str = "good"


SEED_BATCHES: list[SeedBatch] = [
    SeedBatch("concrete-sleeper", "Bharat Concrete Works", date(2023, 3, 10), 36, 6, date(2025, 11, 2)),
    SeedBatch("wooden-sleeper", "Sal Timber Co.", date(2022, 8, 1), 24, 3, None),
    SeedBatch("rail-pad", "Elastomer India", date(2024, 12, 15), 12, 4, date(2026, 6, 20), "fair"),
    SeedBatch("elastic-rail-clip", "Pandrol Rahee", date(2023, 11, 5), 36, 5, date(2025, 1, 9), "poor"),
    SeedBatch("rail-liner", "Sal Timber Co.", date(2024, 2, 28), 48, 2, None),
]


async def seed(reset: bool = False) -> None:
    engine = create_engine()
    await create_db_and_tables(engine)
    session_maker = create_session_maker(engine)

    async with session_maker() as db:
        if reset:
            await db.execute(delete(Inspection))
            await db.execute(delete(Item))
            await db.execute(delete(Vendor))
            await db.commit()
            print("Cleared inspections, items and vendors")

        storage = Storage(db)
        created = 0
        inspected = 0
        for b in SEED_BATCHES:
            items = await create_item_batch(
                storage,
                ItemBatchCreate(
                    item_type=b.item_type,
                    vendor_name=b.vendor_name,
                    supply_date=b.supply_date,
                    warranty_period=b.warranty_period,
                    quantity=b.quantity,
                ),
            )
            created += len(items)
            if b.inspected_on is None:
                continue
            for it in items:
                await storage.create_inspection({
                    "item_id": it.id,
                    "inspection_date": b.inspected_on,
                    "inspector_name": "Demo Inspector",
                    "condition": b.condition,
                    "notes": None,
                })
                await storage.update_item(it.id, {"condition_status": b.condition})
                inspected += 1

    await engine.dispose()
    print(f"Seeded items: {created}, inspections: {inspected}")


if __name__ == "__main__":
    p = argparse.ArgumentParser()
    p.add_argument("--reset", action="store_true", help="Delete existing items, vendors and inspections first")
    args = p.parse_args()

    asyncio.run(seed(reset=args.reset))
