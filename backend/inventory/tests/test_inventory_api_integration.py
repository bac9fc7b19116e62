"""
Inventory API Integration Tests

Tests the /api/cafe-items endpoints end to end through the DRF stack.
"""
import uuid
from decimal import Decimal

import pytest

from inventory.models import CafeItem


@pytest.mark.django_db
class TestCafeItemCRUD:
    """Test CRUD endpoints"""

    def test_create_item(self, api_client):
        response = api_client.post(
            "/api/cafe-items",
            {"name": "Flat White", "price": "4.50", "category": "Coffee", "quantity": 12},
            format="json",
        )

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["data"]["name"] == "Flat White"
        assert body["data"]["inStock"] is True
        assert CafeItem.objects.filter(name="Flat White").exists()

    def test_create_item_validation_error(self, api_client):
        response = api_client.post("/api/cafe-items", {"name": "Freebie", "price": "0"}, format="json")

        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["error"] == "Validation failed"
        assert "price" in body["details"]

    def test_list_items(self, api_client, make_cafe_item):
        make_cafe_item(name="Americano")
        make_cafe_item(name="Brownie", category="Pastry")

        response = api_client.get("/api/cafe-items")

        assert response.status_code == 200
        names = [item["name"] for item in response.json()["data"]]
        assert names == ["Americano", "Brownie"]

    def test_retrieve_unknown_item(self, api_client):
        response = api_client.get(f"/api/cafe-items/{uuid.uuid4()}")

        assert response.status_code == 404
        assert response.json() == {"success": False, "error": "Cafe item not found"}

    def test_update_item(self, api_client, cafe_item):
        response = api_client.put(
            f"/api/cafe-items/{cafe_item.id}",
            {"name": "Double Espresso", "price": "4.00", "category": "Coffee"},
            format="json",
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["name"] == "Double Espresso"
        assert Decimal(str(data["price"])) == Decimal("4.00")
        assert data["quantity"] == 20
        assert data["inStock"] is True

    def test_update_ignores_quantity(self, api_client, cafe_item):
        """Stock only moves through reservations and restocks"""
        response = api_client.put(
            f"/api/cafe-items/{cafe_item.id}",
            {"name": "Espresso", "price": "3.50", "category": "Coffee", "quantity": 999},
            format="json",
        )

        assert response.status_code == 200
        assert response.json()["data"]["quantity"] == 20
        cafe_item.refresh_from_db()
        assert cafe_item.quantity == 20

    def test_update_keeps_reservation_made_after_load(self, cafe_item):
        """An edit of a stale row must not write its old stock count back"""
        from inventory.serializers import CafeItemUpdateSerializer
        from inventory.services import InventoryLedger

        stale = CafeItem.objects.get(pk=cafe_item.pk)
        InventoryLedger().check_and_reserve(cafe_item.pk, 5)

        serializer = CafeItemUpdateSerializer(stale, data={"name": "Renamed", "price": "3.50"})
        assert serializer.is_valid(), serializer.errors
        updated = serializer.save()

        assert updated.quantity == 15
        stored = CafeItem.objects.get(pk=cafe_item.pk)
        assert stored.name == "Renamed"
        assert stored.quantity == 15
        assert stored.in_stock is True

    def test_edit_of_stale_sold_out_row_keeps_in_stock_flag(self, make_cafe_item):
        from inventory.serializers import CafeItemUpdateSerializer
        from inventory.services import InventoryLedger

        item = make_cafe_item(name="Scone", quantity=2)
        stale = CafeItem.objects.get(pk=item.pk)
        InventoryLedger().check_and_reserve(item.pk, 2)

        serializer = CafeItemUpdateSerializer(stale, data={"name": "Scone", "price": "2.75"})
        assert serializer.is_valid(), serializer.errors
        serializer.save()

        stored = CafeItem.objects.get(pk=item.pk)
        assert stored.quantity == 0
        assert stored.in_stock is False

    def test_delete_item(self, api_client, cafe_item):
        response = api_client.delete(f"/api/cafe-items/{cafe_item.id}")

        assert response.status_code == 200
        assert response.json() == {"success": True, "message": "Cafe item deleted successfully"}
        assert not CafeItem.objects.filter(pk=cafe_item.pk).exists()


@pytest.mark.django_db
class TestCafeItemStockEndpoints:
    """Test low-stock, category and restock endpoints"""

    def test_low_stock(self, api_client, make_cafe_item):
        make_cafe_item(name="Bagel", quantity=2)
        make_cafe_item(name="Latte", quantity=50)

        response = api_client.get("/api/cafe-items/low-stock")

        assert response.status_code == 200
        assert [item["name"] for item in response.json()["data"]] == ["Bagel"]

    def test_by_category(self, api_client, make_cafe_item):
        make_cafe_item(name="Scone", category="Pastry")
        make_cafe_item(name="Mocha", category="Coffee")

        response = api_client.get("/api/cafe-items/category/Pastry")

        assert response.status_code == 200
        assert [item["name"] for item in response.json()["data"]] == ["Scone"]

    def test_restock(self, api_client, make_cafe_item):
        item = make_cafe_item(quantity=0)

        response = api_client.post(f"/api/cafe-items/{item.id}/restock", {"quantity": 6}, format="json")

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["quantity"] == 6
        assert data["inStock"] is True

    def test_restock_rejects_zero(self, api_client, cafe_item):
        response = api_client.post(f"/api/cafe-items/{cafe_item.id}/restock", {"quantity": 0}, format="json")

        assert response.status_code == 400
        assert response.json()["error"] == "Validation failed"

    def test_restock_unknown_item(self, api_client):
        response = api_client.post(f"/api/cafe-items/{uuid.uuid4()}/restock", {"quantity": 1}, format="json")

        assert response.status_code == 404
        assert response.json()["success"] is False
