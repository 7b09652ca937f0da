import uuid
from datetime import date


def _add(storage, item):
    storage.items[item.id] = item
    return item


class TestCreateBatch:
    def test_creates_vendor_and_items(self, client, storage, batch_payload):
        r = client.post("/api/items/", json=batch_payload)
        assert r.status_code == 201
        body = r.json()
        assert body["count"] == 5
        assert len(body["items"]) == 5
        assert [v.name for v in storage.vendors.values()] == ["Bharat Concrete Works"]
        assert len(storage.items) == 5
        for it in body["items"]:
            assert it["warranty_expiry_date"] == "2025-01-15"
            assert it["condition_status"] == "good"
            assert it["last_inspection_date"] is None
            assert it["qr_code_url"] == f"/api/qr/{it['id']}"
        assert len({it["id"] for it in body["items"]}) == 5

    def test_reuses_existing_vendor(self, client, storage, batch_payload):
        client.post("/api/items/", json=batch_payload)
        r = client.post("/api/items/", json={**batch_payload, "quantity": 2})
        assert r.status_code == 201
        assert len(storage.vendors) == 1
        assert len(storage.items) == 7

    def test_strips_vendor_name(self, client, storage, batch_payload):
        r = client.post("/api/items/", json={**batch_payload, "vendor_name": "  Sal Timber Co. "})
        assert r.status_code == 201
        assert r.json()["items"][0]["vendor_name"] == "Sal Timber Co."

    def test_warranty_out_of_range(self, client, storage, batch_payload):
        r = client.post("/api/items/", json={**batch_payload, "warranty_period": 60})
        assert r.status_code == 400
        assert "warranty_period" in r.json()["detail"]
        assert storage.items == {}

    def test_quantity_zero(self, client, storage, batch_payload):
        r = client.post("/api/items/", json={**batch_payload, "quantity": 0})
        assert r.status_code == 400
        assert "quantity" in r.json()["detail"]
        assert storage.vendors == {}

    def test_blank_vendor(self, client, batch_payload):
        r = client.post("/api/items/", json={**batch_payload, "vendor_name": "   "})
        assert r.status_code == 400

    def test_missing_supply_date(self, client, batch_payload):
        payload = dict(batch_payload)
        del payload["supply_date"]
        assert client.post("/api/items/", json=payload).status_code == 400

    def test_failed_insert_keeps_no_items(self, client, storage, batch_payload):
        storage.fail_item_inserts = True
        r = client.post("/api/items/", json=batch_payload)
        assert r.status_code == 500
        assert r.json() == {"detail": "Internal server error"}
        assert storage.items == {}


class TestReadItems:
    def test_get_one(self, client, storage, item_factory):
        item = _add(storage, item_factory())
        r = client.get(f"/api/items/{item.id}")
        assert r.status_code == 200
        assert r.json()["id"] == str(item.id)

    def test_get_unknown(self, client):
        r = client.get(f"/api/items/{uuid.uuid4()}")
        assert r.status_code == 404
        assert r.json() == {"detail": "Item not found"}

    def test_get_malformed_id(self, client):
        assert client.get("/api/items/not-a-uuid").status_code == 400

    def test_list_all(self, client, storage, item_factory):
        for _ in range(3):
            _add(storage, item_factory())
        assert len(client.get("/api/items/").json()) == 3

    def test_filters(self, client, storage, days, item_factory):
        expiring = _add(storage, item_factory(
            vendor_name="Pandrol Rahee", item_type="elastic-rail-clip",
            warranty_expiry_date=days(30), last_inspection_date=days(-10),
        ))
        never = _add(storage, item_factory(
            vendor_name="Sal Timber Co.", item_type="wooden-sleeper",
            warranty_expiry_date=days(400), condition_status="poor",
        ))
        expired = _add(storage, item_factory(
            vendor_name="Sal Timber Co.", warranty_expiry_date=days(-1),
            last_inspection_date=days(-300),
        ))

        def ids(**params):
            return {row["id"] for row in client.get("/api/items/", params=params).json()}

        assert ids(warranty_status="expiring-soon") == {str(expiring.id)}
        assert ids(warranty_status="expired") == {str(expired.id)}
        assert ids(inspection_status="never") == {str(never.id)}
        assert ids(inspection_status="overdue") == {str(expired.id)}
        assert ids(item_type="wooden-sleeper") == {str(never.id)}
        assert ids(condition="poor") == {str(never.id)}
        assert ids(vendor="Sal Timber Co.") == {str(never.id), str(expired.id)}
        assert ids(search="pandrol") == {str(expiring.id)}
        assert ids(search=str(never.id)[:8]) == {str(never.id)}

    def test_unknown_filter_value(self, client):
        assert client.get("/api/items/", params={"warranty_status": "soon"}).status_code == 400


class TestUpdateItem:
    def test_partial_update(self, client, storage, item_factory):
        item = _add(storage, item_factory())
        r = client.put(
            f"/api/items/{item.id}",
            json={"condition_status": "poor", "inspection_notes": "cracked fastening"},
        )
        assert r.status_code == 200
        body = r.json()
        assert body["condition_status"] == "poor"
        assert body["inspection_notes"] == "cracked fastening"
        assert body["vendor_name"] == "Acme Rail"

    def test_expiry_not_recomputed(self, client, storage, item_factory):
        item = _add(storage, item_factory(supply_date=date(2025, 1, 1), warranty_period=24))
        r = client.put(f"/api/items/{item.id}", json={"supply_date": "2025-06-01", "warranty_period": 36})
        assert r.status_code == 200
        assert r.json()["warranty_expiry_date"] == "2027-01-01"

    def test_clear_last_inspection(self, client, storage, days, item_factory):
        item = _add(storage, item_factory(last_inspection_date=days(-5)))
        r = client.put(f"/api/items/{item.id}", json={"last_inspection_date": None})
        assert r.status_code == 200
        assert r.json()["last_inspection_date"] is None

    def test_required_field_cannot_be_null(self, client, storage, item_factory):
        item = _add(storage, item_factory())
        r = client.put(f"/api/items/{item.id}", json={"supply_date": None})
        assert r.status_code == 400

    def test_condition_cannot_be_null(self, client, storage, item_factory):
        item = _add(storage, item_factory(condition_status="fair"))
        r = client.put(f"/api/items/{item.id}", json={"condition_status": None})
        assert r.status_code == 400
        assert "condition_status" in r.json()["detail"]
        assert storage.items[item.id].condition_status == "fair"

    def test_invalid_values(self, client, storage, item_factory):
        item = _add(storage, item_factory())
        assert client.put(f"/api/items/{item.id}", json={"warranty_period": 60}).status_code == 400
        assert client.put(f"/api/items/{item.id}", json={"condition_status": "broken"}).status_code == 400

    def test_unknown_item(self, client):
        r = client.put(f"/api/items/{uuid.uuid4()}", json={"condition_status": "fair"})
        assert r.status_code == 404


class TestDeleteItem:
    def test_soft_delete_hides_item(self, client, storage, item_factory):
        item = _add(storage, item_factory())
        r = client.delete(f"/api/items/{item.id}")
        assert r.status_code == 200
        assert r.json() == {"ok": True}
        assert item.id in storage.items
        assert client.get(f"/api/items/{item.id}").status_code == 404
        assert client.get("/api/items/").json() == []
        assert client.get(f"/api/qr/{item.id}").status_code == 404

    def test_delete_unknown(self, client):
        assert client.delete(f"/api/items/{uuid.uuid4()}").status_code == 404


class TestInspections:
    def test_record_updates_item(self, client, storage, item_factory):
        item = _add(storage, item_factory())
        r = client.post("/api/inspections/", json={
            "item_id": str(item.id),
            "inspection_date": "2026-10-01",
            "inspector_name": "  R. Kumar ",
            "condition": "fair",
            "notes": "minor wear",
        })
        assert r.status_code == 201
        body = r.json()
        assert body["inspector_name"] == "R. Kumar"
        assert body["condition"] == "fair"
        assert storage.items[item.id].last_inspection_date == date(2026, 10, 1)

        listed = client.get(f"/api/items/{item.id}/inspections").json()
        assert [i["id"] for i in listed] == [body["id"]]

    def test_history_newest_first(self, client, storage, item_factory):
        item = _add(storage, item_factory())
        for d in ("2026-01-10", "2026-09-01", "2026-05-05"):
            client.post("/api/inspections/", json={
                "item_id": str(item.id), "inspection_date": d, "condition": "good",
            })
        listed = client.get(f"/api/items/{item.id}/inspections").json()
        assert [i["inspection_date"] for i in listed] == ["2026-09-01", "2026-05-05", "2026-01-10"]

    def test_unknown_item(self, client):
        missing = uuid.uuid4()
        r = client.post("/api/inspections/", json={
            "item_id": str(missing), "inspection_date": "2026-10-01", "condition": "good",
        })
        assert r.status_code == 404
        assert r.json() == {"detail": f"Item with id {missing} not found"}

    def test_invalid_condition(self, client, storage, item_factory):
        item = _add(storage, item_factory())
        r = client.post("/api/inspections/", json={
            "item_id": str(item.id), "inspection_date": "2026-10-01", "condition": "broken",
        })
        assert r.status_code == 400

    def test_list_for_unknown_item(self, client):
        assert client.get(f"/api/items/{uuid.uuid4()}/inspections").status_code == 404


class TestItemReport:
    def test_pdf(self, client, storage, item_factory):
        item = _add(storage, item_factory())
        r = client.get(f"/api/items/{item.id}/report")
        assert r.status_code == 200
        assert r.headers["content-type"] == "application/pdf"
        assert r.content.startswith(b"%PDF")

    def test_pdf_with_local_summary(self, client, storage, item_factory):
        item = _add(storage, item_factory(condition_status="poor"))
        r = client.get(f"/api/items/{item.id}/report", params={"include_summary": "true"})
        assert r.status_code == 200
        assert r.content.startswith(b"%PDF")

    def test_unknown_item(self, client):
        assert client.get(f"/api/items/{uuid.uuid4()}/report").status_code == 404
