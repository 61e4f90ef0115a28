import csv
from datetime import date, datetime, time, timedelta
from io import BytesIO, StringIO
import pytest
from fastapi import status
from openpyxl import load_workbook
from gelato_ops.services.inventory.inventory_dashboard_service import EXPORT_COLUMNS
from gelato_ops.services.inventory.stocktake_service import StocktakeService

TODAY = date.today()
MORNING = datetime.combine(TODAY, time(9, 0))
YESTERDAY = MORNING - timedelta(days=1)


@pytest.fixture
async def stocked(catalog, make_stocktake, make_order, make_delivery_plan, make_production):
    """Master count yesterday, a newer plain count today and one movement of each kind today"""
    await make_stocktake(catalog.hub, YESTERDAY, {catalog.milk: 8, catalog.cream: 5}, is_master=True)
    await make_stocktake(catalog.north, MORNING, {catalog.milk: 100})
    await make_order({catalog.milk: 5}, MORNING)
    await make_delivery_plan({catalog.milk: 3}, MORNING)
    await make_production({catalog.milk: 2}, MORNING)
    return catalog


def rows_by_name(body):
    return {row["name"]: row for row in body["inventory"]}


class TestDashboard:
    async def test_master_mode_ignores_newer_plain_counts(self, client, stocked, headers_for):
        response = await client.get(
            "/api/inventory/dashboard",
            params={"baselineMode": "master"},
            headers=headers_for("stocktakes:read"),
        )
        assert response.status_code == status.HTTP_200_OK
        body = response.json()

        assert body["baseline"] == "master"
        assert body["baselineDate"].startswith(YESTERDAY.date().isoformat())
        assert body["partialWindow"] is False
        assert body["from"] == TODAY.isoformat()
        assert body["to"] == TODAY.isoformat()

        rows = rows_by_name(body)
        assert [row["name"] for row in body["inventory"]] == ["Milk", "Cream", "Cones"]
        milk = rows["Milk"]
        assert milk["baselineQuantity"] == 8
        assert (milk["incoming"], milk["outgoing"], milk["production"]) == (5, 3, 2)
        assert milk["netMovement"] == 4
        assert milk["derivedCurrent"] == 12
        assert milk["status"] == "normal"
        assert rows["Cream"]["derivedCurrent"] == 5
        assert rows["Cream"]["status"] == "low"
        assert rows["Cones"]["derivedCurrent"] == 0
        assert rows["Cones"]["status"] == "critical"
        assert rows["Cones"]["unit"] == "units"
        assert rows["Cones"]["targetStock"] == 10

    async def test_derived_current_matches_baseline_plus_movements(self, client, stocked, headers_for):
        response = await client.get("/api/inventory/dashboard", headers=headers_for("stocktakes:read"))
        body = response.json()
        for row in body["inventory"]:
            expected = row["baselineQuantity"] + row["incoming"] - row["outgoing"] + row["production"]
            assert row["derivedCurrent"] == pytest.approx(expected)

        summary = body["summary"]
        assert summary["totalItems"] == 3
        assert summary["incomingTotal"] == 5
        assert summary["outgoingTotal"] == 3
        assert summary["productionTotal"] == 2
        assert body["movementSummary"] == {"incoming": 5, "outgoing": 3, "production": 2, "net": 4}

    async def test_latest_mode_takes_newest_value_per_item(self, client, stocked, headers_for):
        response = await client.get(
            "/api/inventory/dashboard",
            params={"baselineMode": "latest"},
            headers=headers_for("stocktakes:read"),
        )
        body = response.json()
        rows = rows_by_name(body)

        assert body["baseline"] == "latest"
        assert rows["Milk"]["baselineQuantity"] == 100
        assert rows["Cream"]["baselineQuantity"] == 5
        assert rows["Milk"]["status"] == "high"
        assert body["partialWindow"] is True

    async def test_latest_mode_without_any_counts_is_all_zero(self, client, catalog, headers_for):
        response = await client.get(
            "/api/inventory/dashboard",
            params={"baselineMode": "latest"},
            headers=headers_for("stocktakes:read"),
        )
        body = response.json()
        assert body["baseline"] == "latest"
        assert body["baselineDate"] is None
        assert all(row["baselineQuantity"] == 0 for row in body["inventory"])
        assert body["summary"]["outOfStockItems"] == 3

    async def test_master_mode_without_master_reports_none(self, client, catalog, make_stocktake, headers_for):
        await make_stocktake(catalog.north, MORNING, {catalog.milk: 9})
        response = await client.get(
            "/api/inventory/dashboard",
            params={"baselineMode": "master"},
            headers=headers_for("stocktakes:read"),
        )
        body = response.json()
        assert body["baseline"] == "none"
        assert rows_by_name(body)["Milk"]["baselineQuantity"] == 0

    async def test_auto_mode_seeds_master_once(self, client, catalog, make_stocktake, headers_for):
        await make_stocktake(catalog.north, YESTERDAY, {catalog.milk: 7, catalog.cream: 30})
        headers = headers_for("stocktakes:read")

        first = (await client.get("/api/inventory/dashboard", headers=headers)).json()
        assert first["baseline"] == "latest"
        assert first["baselineRepair"] == "created"
        assert rows_by_name(first)["Milk"]["baselineQuantity"] == 7

        second = (await client.get("/api/inventory/dashboard", headers=headers)).json()
        assert second["baseline"] == "master"
        assert second["baselineRepair"] is None
        assert rows_by_name(second)["Milk"]["baselineQuantity"] == 7
        assert rows_by_name(second)["Cream"]["baselineQuantity"] == 30

    async def test_auto_mode_falls_back_when_seeding_fails(
        self, client, catalog, make_stocktake, headers_for, monkeypatch
    ):
        async def broken_add_stocktake(self, *args, **kwargs):
            raise RuntimeError("disk full")

        monkeypatch.setattr(StocktakeService, "add_stocktake", broken_add_stocktake)
        await make_stocktake(catalog.north, YESTERDAY, {catalog.milk: 7})
        headers = headers_for("stocktakes:read")

        response = await client.get("/api/inventory/dashboard", headers=headers)
        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert body["baseline"] == "latest"
        assert body["baselineRepair"] == "failed"
        assert rows_by_name(body)["Milk"]["baselineQuantity"] == 7

        export = await client.get("/api/inventory/export", headers=headers)
        assert export.status_code == status.HTTP_200_OK

        monkeypatch.undo()
        master = (await client.get(
            "/api/inventory/dashboard", params={"baselineMode": "master"}, headers=headers
        )).json()
        assert master["baseline"] == "none"

    async def test_auto_mode_survives_master_lookup_failure(
        self, client, catalog, make_stocktake, headers_for, monkeypatch
    ):
        original = StocktakeService.get_latest_master
        calls = []

        async def flaky_get_latest_master(self, hub_store_id):
            calls.append(hub_store_id)
            # the first lookup picks the baseline, the second happens inside the repair step
            if len(calls) == 2:
                raise RuntimeError("connection reset")
            return await original(self, hub_store_id)

        monkeypatch.setattr(StocktakeService, "get_latest_master", flaky_get_latest_master)
        await make_stocktake(catalog.north, YESTERDAY, {catalog.milk: 7})

        response = await client.get("/api/inventory/dashboard", headers=headers_for("stocktakes:read"))
        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert body["baseline"] == "latest"
        assert body["baselineRepair"] == "failed"
        assert rows_by_name(body)["Milk"]["baselineQuantity"] == 7
        assert len(calls) == 2

    async def test_to_before_from_is_rejected(self, client, catalog, headers_for):
        response = await client.get(
            "/api/inventory/dashboard",
            params={"from": TODAY.isoformat(), "to": (TODAY - timedelta(days=1)).isoformat()},
            headers=headers_for("stocktakes:read"),
        )
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "error" in response.json()

    async def test_invalid_date_is_rejected(self, client, catalog, headers_for):
        response = await client.get(
            "/api/inventory/dashboard",
            params={"from": "yesterday-ish"},
            headers=headers_for("stocktakes:read"),
        )
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    async def test_invalid_baseline_mode_is_rejected(self, client, catalog, headers_for):
        response = await client.get(
            "/api/inventory/dashboard",
            params={"baselineMode": "oldest"},
            headers=headers_for("stocktakes:read"),
        )
        assert response.status_code == status.HTTP_400_BAD_REQUEST


class TestItemHistory:
    async def test_daily_sums_equal_dashboard_totals(self, client, stocked, make_order, headers_for):
        await make_order({stocked.milk: 4}, YESTERDAY)
        params = {"from": YESTERDAY.date().isoformat(), "to": TODAY.isoformat()}
        headers = headers_for("stocktakes:read")

        history = (await client.get(
            "/api/inventory/item-history",
            params={**params, "itemId": stocked.milk},
            headers=headers,
        )).json()
        dashboard = (await client.get("/api/inventory/dashboard", params=params, headers=headers)).json()
        milk = rows_by_name(dashboard)["Milk"]

        assert [day["date"] for day in history["days"]] == [YESTERDAY.date().isoformat(), TODAY.isoformat()]
        assert history["days"][0]["incoming"] == 4
        assert sum(day["incoming"] for day in history["days"]) == milk["incoming"] == 9
        assert sum(day["outgoing"] for day in history["days"]) == milk["outgoing"]
        assert sum(day["production"] for day in history["days"]) == milk["production"]
        assert sum(day["net"] for day in history["days"]) == milk["netMovement"]

    async def test_unknown_item_is_404(self, client, catalog, headers_for):
        response = await client.get(
            "/api/inventory/item-history",
            params={"itemId": 9999},
            headers=headers_for("stocktakes:read"),
        )
        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json() == {"error": "Item not found"}

    async def test_item_id_is_required(self, client, catalog, headers_for):
        response = await client.get("/api/inventory/item-history", headers=headers_for("stocktakes:read"))
        assert response.status_code == status.HTTP_400_BAD_REQUEST


class TestExport:
    async def test_csv_rows_match_dashboard(self, client, stocked, headers_for):
        headers = headers_for("stocktakes:read")
        params = {"baselineMode": "master"}
        dashboard = (await client.get("/api/inventory/dashboard", params=params, headers=headers)).json()

        response = await client.get("/api/inventory/export", params=params, headers=headers)
        assert response.status_code == status.HTTP_200_OK
        assert response.headers["content-type"].startswith("text/csv")
        assert response.headers["content-disposition"].startswith("attachment; filename=")

        reader = csv.DictReader(StringIO(response.text))
        assert reader.fieldnames == EXPORT_COLUMNS
        exported = {row["Item"]: row for row in reader}

        assert set(exported) == {row["name"] for row in dashboard["inventory"]}
        for row in dashboard["inventory"]:
            line = exported[row["name"]]
            assert float(line["Derived Current"]) == row["derivedCurrent"]
            assert float(line["Baseline"]) == row["baselineQuantity"]
            assert line["Status"] == row["status"]
            assert line["From"] == dashboard["from"]

        assert sum(float(r["Incoming"]) for r in exported.values()) == dashboard["summary"]["incomingTotal"]

    async def test_xlsx_has_header_and_total_row(self, client, stocked, headers_for):
        response = await client.get(
            "/api/inventory/export",
            params={"format": "xlsx", "baselineMode": "master"},
            headers=headers_for("stocktakes:read"),
        )
        assert response.status_code == status.HTTP_200_OK
        assert ".xlsx" in response.headers["content-disposition"]

        sheet = load_workbook(BytesIO(response.content)).active
        rows = list(sheet.iter_rows(values_only=True))
        assert list(rows[0]) == EXPORT_COLUMNS
        assert rows[-1][0] == "TOTAL"
        assert rows[-1][EXPORT_COLUMNS.index("Incoming")] == 5


class TestMasterBaselineEndpoint:
    async def test_creates_then_reports_existing(self, client, catalog, make_stocktake, headers_for):
        await make_stocktake(catalog.south, MORNING, {catalog.cream: 12})
        headers = headers_for("stocktakes:create")

        first = (await client.post("/api/inventory/master-baseline", headers=headers)).json()
        assert first["result"] == "created"
        second = (await client.post("/api/inventory/master-baseline", headers=headers)).json()
        assert second == {"result": "already_exists", "snapshotId": first["snapshotId"], "reason": None}

    async def test_nothing_to_seed_from(self, client, catalog, headers_for):
        response = await client.post("/api/inventory/master-baseline", headers=headers_for("stocktakes:create"))
        body = response.json()
        assert body["result"] == "failed"
        assert body["reason"]
