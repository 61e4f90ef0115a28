from datetime import timedelta
from fastapi import status
from gelato_ops.core.security import create_access_token


class TestAccess:
    async def test_missing_token_is_401(self, client, catalog):
        response = await client.get("/api/inventory/dashboard")
        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json() == {"error": "Unauthorized"}

    async def test_garbage_token_is_401(self, client, catalog):
        response = await client.get("/api/items", headers={"Authorization": "Bearer not-a-jwt"})
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    async def test_expired_token_is_401(self, client, catalog):
        token = create_access_token(
            {"sub": "user-1", "permissions": ["system:admin"]},
            expires_delta=timedelta(minutes=-5),
        )
        response = await client.get("/api/items", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    async def test_missing_permission_is_403_without_side_effects(self, client, catalog, headers_for):
        response = await client.post(
            "/api/stocktakes",
            json={"storeSlug": "north", "date": "2026-01-01T09:00:00", "items": []},
            headers=headers_for("stocktakes:read"),
        )
        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert "error" in response.json()

        count = await client.get("/api/stocktakes/count", headers=headers_for("stocktakes:read"))
        assert count.json() == {"count": 0}

    async def test_cookie_session_is_accepted(self, client, catalog):
        token = create_access_token({"sub": "user-2", "permissions": ["items:read"]})
        client.cookies.set("authToken", token)
        response = await client.get("/api/items")
        assert response.status_code == status.HTTP_200_OK
        assert [item["name"] for item in response.json()] == ["Milk", "Cream", "Cones"]

    async def test_resource_admin_grants_actions(self, client, catalog, headers_for):
        response = await client.get("/api/orders", headers=headers_for("orders:admin"))
        assert response.status_code == status.HTTP_200_OK

    async def test_health_is_public(self, client):
        response = await client.get("/health")
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["status"] in ("healthy", "degraded")

    async def test_missing_token_wins_over_malformed_body(self, client, catalog, make_order):
        order_id = await make_order({catalog.milk: 1}, None)
        response = await client.post(
            f"/api/orders/{order_id}/receive",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json() == {"error": "Unauthorized"}

        garbage = await client.post(
            f"/api/orders/{order_id}/receive",
            content=b"{not json",
            headers={"Content-Type": "application/json", "Authorization": "Bearer not-a-jwt"},
        )
        assert garbage.status_code == status.HTTP_401_UNAUTHORIZED

    async def test_malformed_body_with_session_is_400(self, client, catalog, make_order, headers_for):
        order_id = await make_order({catalog.milk: 1}, None)
        response = await client.post(
            f"/api/orders/{order_id}/receive",
            content=b"{not json",
            headers={"Content-Type": "application/json", **headers_for("orders:update")},
        )
        assert response.status_code == status.HTTP_400_BAD_REQUEST
