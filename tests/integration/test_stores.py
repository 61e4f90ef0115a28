from datetime import date, datetime, time, timedelta
from fastapi import status
from gelato_ops.models.inventory.category import Category
from gelato_ops.models.inventory.item import Item
from gelato_ops.models.shared.enums import DeliveryPlanStatus


class TestStores:
    async def test_list_in_delivery_order_with_hub_flag(self, client, catalog, headers_for):
        response = await client.get("/api/stores", headers=headers_for("stores:read"))
        stores = response.json()
        assert [s["slug"] for s in stores] == ["factory", "north", "south"]
        assert [s["isHub"] for s in stores] == [True, False, False]

    async def test_create_and_reject_duplicate_slug(self, client, catalog, headers_for):
        headers = headers_for("stores:create")
        payload = {"name": "Harbour", "slug": "harbour", "deliveryPriority": 5}
        created = await client.post("/api/stores", json=payload, headers=headers)
        assert created.status_code == status.HTTP_201_CREATED
        assert created.json()["kind"] == "RETAIL"

        duplicate = await client.post("/api/stores", json=payload, headers=headers)
        assert duplicate.status_code == status.HTTP_409_CONFLICT

    async def test_invalid_slug(self, client, catalog, headers_for):
        response = await client.post(
            "/api/stores",
            json={"name": "Bad", "slug": "Bad Slug"},
            headers=headers_for("stores:create"),
        )
        assert response.status_code == status.HTTP_400_BAD_REQUEST


class TestStoreInventory:
    async def test_upsert_replaces_target_and_delete_deactivates(self, client, catalog, headers_for):
        headers = headers_for("stores:read", "stores:manage_inventory")
        url = "/api/stores/north/inventory"

        first = await client.post(url, json={"itemId": catalog.milk, "targetQuantity": 10, "unit": "L"}, headers=headers)
        assert first.status_code == status.HTTP_200_OK
        second = await client.post(url, json={"itemId": catalog.milk, "targetQuantity": 14}, headers=headers)
        assert second.json()["id"] == first.json()["id"]

        targets = (await client.get(url, headers=headers)).json()
        assert [(t["itemId"], t["targetQuantity"]) for t in targets] == [(catalog.milk, 14)]
        assert targets[0]["item"]["name"] == "Milk"

        removed = await client.request("DELETE", url, json={"itemId": catalog.milk}, headers=headers)
        assert removed.status_code == status.HTTP_200_OK
        assert (await client.get(url, headers=headers)).json() == []

    async def test_unknown_store_or_item(self, client, catalog, headers_for):
        headers = headers_for("stores:manage_inventory")
        missing_store = await client.post(
            "/api/stores/nowhere/inventory", json={"itemId": catalog.milk, "targetQuantity": 1}, headers=headers
        )
        assert missing_store.status_code == status.HTTP_404_NOT_FOUND

        missing_item = await client.post(
            "/api/stores/north/inventory", json={"itemId": 9999, "targetQuantity": 1}, headers=headers
        )
        assert missing_item.status_code == status.HTTP_404_NOT_FOUND

    async def test_reading_targets_does_not_allow_changes(self, client, catalog, headers_for):
        response = await client.post(
            "/api/stores/north/inventory",
            json={"itemId": catalog.milk, "targetQuantity": 1},
            headers=headers_for("stores:read"),
        )
        assert response.status_code == status.HTTP_403_FORBIDDEN


class TestStoreDeliveries:
    async def test_lists_confirmed_and_sent_plans_newest_first(
        self, client, catalog, db_session, make_delivery_plan, headers_for
    ):
        flavours = Category(name="Gelato Flavors", sort_order=0)
        db_session.add(flavours)
        await db_session.flush()
        pistachio = Item(name="Pistachio", category_id=flavours.id)
        db_session.add(pistachio)
        await db_session.commit()

        today = datetime.combine(date.today(), time(8, 0))
        older = await make_delivery_plan(
            {pistachio.id: 2, catalog.milk: 5}, today - timedelta(days=2),
            status=DeliveryPlanStatus.SENT, store_id=catalog.north,
        )
        newer = await make_delivery_plan({pistachio.id: 4}, today, store_id=catalog.north)
        await make_delivery_plan({pistachio.id: 9}, today, status=DeliveryPlanStatus.DRAFT, store_id=catalog.north)
        await make_delivery_plan({pistachio.id: 7}, today, store_id=catalog.south)
        headers = headers_for("deliveries:read")

        response = await client.get("/api/stores/north/deliveries", headers=headers)
        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert body["store"]["slug"] == "north"
        assert [(d["id"], d["status"]) for d in body["deliveries"]] == [(newer, "CONFIRMED"), (older, "SENT")]
        assert [(line["name"], line["quantity"], line["unit"]) for line in body["deliveries"][1]["items"]] == [
            ("Pistachio", 2, "tubs"),
            ("Milk", 5, "L"),
        ]

        flavours_only = (await client.get(
            "/api/stores/north/deliveries", params={"category": "Gelato Flavors"}, headers=headers
        )).json()
        assert [line["name"] for line in flavours_only["deliveries"][1]["items"]] == ["Pistachio"]

    async def test_unknown_store_is_404(self, client, catalog, headers_for):
        response = await client.get("/api/stores/nowhere/deliveries", headers=headers_for("deliveries:read"))
        assert response.status_code == status.HTTP_404_NOT_FOUND
