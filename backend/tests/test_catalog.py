"""
Products, inventory items and stock ledger
"""
from decimal import Decimal

from acaia.models import Product, StockLedger


def test_list_products_nests_inventory_item(client, server_headers, product, untracked_product):
    response = client.get("/api/products", headers=server_headers)

    assert response.status_code == 200
    products = {item["name"]: item for item in response.json()["data"]}
    assert products["Caipiroska"]["salePrice"] == "15.00"
    assert products["Caipiroska"]["deductionAmountInSmallestUnit"] == "5.000"
    assert products["Caipiroska"]["inventoryItem"]["name"] == "Vodka"
    assert products["Hookah"]["inventoryItem"] is None


def test_get_missing_product_is_not_found(client, server_headers):
    assert client.get("/api/products/77", headers=server_headers).status_code == 404


def test_create_product_defaults_deduction_to_one(client, db_session, admin_headers, inventory_item):
    response = client.post(
        "/api/products",
        json={"name": "Vodka Shot", "type": "DRINK", "salePrice": "12.00", "inventoryItemId": inventory_item.id},
        headers=admin_headers,
    )

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["costPrice"] == "0.00"
    assert data["deductionAmountInSmallestUnit"] == "1.000"

    product = db_session.query(Product).filter(Product.name == "Vodka Shot").one()
    assert product.deduction_amount_in_smallest_unit == Decimal("1")


def test_create_product_validations(client, admin_headers, server_headers):
    assert client.post(
        "/api/products", json={"name": "Free", "type": "DRINK", "salePrice": "0"}, headers=admin_headers
    ).status_code == 400
    assert client.post(
        "/api/products", json={"name": "Odd", "type": "GADGET", "salePrice": "5"}, headers=admin_headers
    ).status_code == 400
    assert client.post(
        "/api/products",
        json={"name": "Ghost", "type": "DRINK", "salePrice": "5", "inventoryItemId": 404},
        headers=admin_headers,
    ).status_code == 404
    assert client.post(
        "/api/products", json={"name": "Nope", "type": "DRINK", "salePrice": "5"}, headers=server_headers
    ).status_code == 403


def test_update_product(client, db_session, admin_headers, product):
    response = client.put(
        f"/api/products/{product.id}",
        json={"salePrice": "18.50", "deductionAmount": "7.5"},
        headers=admin_headers,
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["salePrice"] == "18.50"
    assert data["deductionAmountInSmallestUnit"] == "7.500"
    assert client.put(f"/api/products/{product.id}", json={}, headers=admin_headers).status_code == 400


def test_price_change_does_not_touch_past_sales(client, admin_headers, server_headers, seating_area, product):
    client.post(
        "/api/orders",
        json={"seatingAreaId": seating_area.id, "cart": [{"productId": product.id, "quantity": 1}]},
        headers=server_headers,
    )
    client.put(f"/api/products/{product.id}", json={"salePrice": "20.00"}, headers=admin_headers)

    history = client.get("/api/clients", headers=admin_headers).json()["data"]
    detail = client.get(f"/api/clients/{history[0]['id']}", headers=admin_headers).json()["data"]

    assert detail["visits"][0]["sales"][0]["priceAtSale"] == "15.00"


def test_inventory_items(client, admin_headers, server_headers, inventory_item):
    listed = client.get("/api/inventory/items", headers=server_headers)
    assert [item["name"] for item in listed.json()["data"]] == ["Vodka"]

    created = client.post(
        "/api/inventory/items",
        json={"name": "Mint", "smallestUnit": "g", "reorderThresholdInSmallest": "100"},
        headers=admin_headers,
    )
    assert created.status_code == 201
    assert created.json()["data"]["smallestUnit"] == "g"

    duplicate = client.post("/api/inventory/items", json={"name": "Vodka"}, headers=admin_headers)
    assert duplicate.status_code == 409

    bad_unit = client.post("/api/inventory/items", json={"name": "Ice", "smallestUnit": "kg"}, headers=admin_headers)
    assert bad_unit.status_code == 400


def test_stock_levels_sum_ledger_and_flag_threshold(
    client, db_session, server_headers, bartender_headers, seating_area, inventory_item, product
):
    purchase = client.post(
        "/api/stock/movements",
        json={"inventoryItemId": inventory_item.id, "movementType": "purchase", "quantityChange": "1000"},
        headers=bartender_headers,
    )
    assert purchase.status_code == 201

    client.post(
        "/api/orders",
        json={"seatingAreaId": seating_area.id, "cart": [{"productId": product.id, "quantity": 2}]},
        headers=server_headers,
    )

    stock = client.get("/api/stock", headers=server_headers).json()["data"]
    assert stock == [{
        "inventoryItemId": inventory_item.id,
        "name": "Vodka",
        "smallestUnit": "ml",
        "totalStock": "990.000",
        "reorderThreshold": "500.000",
        "belowThreshold": False,
    }]

    waste = client.post(
        "/api/stock/movements",
        json={"inventoryItemId": inventory_item.id, "movementType": "waste", "quantityChange": "600"},
        headers=bartender_headers,
    )
    assert waste.status_code == 201
    assert waste.json()["data"]["quantityChange"] == "-600.000"

    stock = client.get("/api/stock", headers=server_headers).json()["data"]
    assert stock[0]["totalStock"] == "390.000"
    assert stock[0]["belowThreshold"] is True
    assert db_session.query(StockLedger).count() == 3


def test_stock_without_movements_reports_zero(client, server_headers, inventory_item):
    stock = client.get("/api/stock", headers=server_headers).json()["data"]

    assert stock[0]["totalStock"] == "0.000"
    assert stock[0]["belowThreshold"] is True


def test_stock_movement_rules(client, server_headers, bartender_headers, inventory_item):
    def move(movement_type, quantity, headers=bartender_headers, item_id=inventory_item.id):
        return client.post(
            "/api/stock/movements",
            json={"inventoryItemId": item_id, "movementType": movement_type, "quantityChange": quantity},
            headers=headers,
        )

    assert move("sale", "-1").status_code == 400
    assert move("purchase", "-5").status_code == 400
    assert move("adjustment", "0").status_code == 400
    assert move("adjustment", "-3").status_code == 201
    assert move("purchase", "5", item_id=999).status_code == 404
    assert move("purchase", "5", headers=server_headers).status_code == 403
