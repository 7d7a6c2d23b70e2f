"""
Seating areas, public menu and the visit endpoints
"""
from decimal import Decimal

from sqlalchemy import event

from acaia.models import Client, SeatingArea, Visit
from acaia.models.enums import VisitStatus
from tests.conftest import engine


def test_create_seating_area_generates_token(client, db_session, admin_headers):
    response = client.post(
        "/api/seating-areas",
        json={"name": "Lounge Couch A", "type": "LOUNGE_SEAT", "capacity": 6, "reservationCost": "25.00"},
        headers=admin_headers,
    )

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["name"] == "Lounge Couch A"
    assert data["reservationCost"] == "25.00"
    assert len(data["qrCodeToken"]) == 20
    assert data["isActive"] is True
    assert data["activeVisit"] is None


def test_duplicate_seating_area_name_conflicts(client, admin_headers, seating_area):
    response = client.post(
        "/api/seating-areas",
        json={"name": seating_area.name, "type": "TABLE"},
        headers=admin_headers,
    )

    assert response.status_code == 409
    assert response.json()["error"] == "This seating area name is already in use"


def test_invalid_seating_area_type_is_rejected(client, admin_headers):
    response = client.post("/api/seating-areas", json={"name": "Roof", "type": "ROOFTOP"}, headers=admin_headers)

    assert response.status_code == 400


def test_server_cannot_create_seating_area(client, server_headers):
    response = client.post("/api/seating-areas", json={"name": "T9", "type": "TABLE"}, headers=server_headers)

    assert response.status_code == 403


def test_list_shows_active_visit(client, server_headers, seating_area, other_seating_area, product):
    client.post(
        "/api/orders",
        json={"seatingAreaId": seating_area.id, "cart": [{"productId": product.id, "quantity": 1}]},
        headers=server_headers,
    )

    response = client.get("/api/seating-areas", headers=server_headers)

    assert response.status_code == 200
    areas = {area["id"]: area for area in response.json()["data"]}
    assert areas[seating_area.id]["activeVisit"]["clientName"].startswith("Patron #")
    assert areas[other_seating_area.id]["activeVisit"] is None


def test_update_and_soft_delete(client, db_session, admin_headers, seating_area):
    response = client.patch(
        f"/api/seating-areas/{seating_area.id}",
        json={"capacity": 8, "reservationCost": "12.50"},
        headers=admin_headers,
    )
    assert response.status_code == 200
    assert response.json()["data"]["capacity"] == 8
    assert response.json()["data"]["reservationCost"] == "12.50"

    assert client.patch(f"/api/seating-areas/{seating_area.id}", json={}, headers=admin_headers).status_code == 400
    assert client.patch("/api/seating-areas/999", json={"capacity": 2}, headers=admin_headers).status_code == 404

    response = client.delete(f"/api/seating-areas/{seating_area.id}", headers=admin_headers)
    assert response.status_code == 200

    db_session.expire_all()
    assert db_session.query(SeatingArea).filter(SeatingArea.id == seating_area.id).one().is_active is False
    listed = client.get("/api/seating-areas", headers=admin_headers).json()["data"]
    assert listed == []


def test_public_menu_by_qr_token(client, seating_area, product, untracked_product):
    response = client.get(f"/api/menu/{seating_area.qr_code_token}")

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["seatingArea"]["name"] == seating_area.name
    categories = {category["name"]: category["products"] for category in data["categories"]}
    assert categories["Cocktails"][0]["salePrice"] == "15.00"
    assert "Hookah" in categories


def test_menu_with_unknown_token_is_not_found(client):
    response = client.get("/api/menu/nope")

    assert response.status_code == 404
    assert response.json() == {"success": False, "error": "Invalid QR code"}


def test_open_visit_endpoint_is_idempotent(client, db_session, server_headers, seating_area):
    first = client.post(f"/api/seating-areas/{seating_area.id}/visit", headers=server_headers)
    second = client.post(f"/api/seating-areas/{seating_area.id}/visit", headers=server_headers)

    assert first.status_code == 200
    assert first.json()["data"]["id"] == second.json()["data"]["id"]
    assert first.json()["data"]["seatingAreaName"] == seating_area.name
    assert db_session.query(Visit).count() == 1


def test_close_visit_frees_the_area(client, db_session, server_headers, seating_area, product):
    order = client.post(
        "/api/orders",
        json={"seatingAreaId": seating_area.id, "cart": [{"productId": product.id, "quantity": 1}]},
        headers=server_headers,
    ).json()["data"]

    response = client.post(f"/api/visits/{order['visitId']}/close", headers=server_headers)

    assert response.status_code == 200
    assert response.json()["data"]["status"] == "closed"
    assert response.json()["data"]["exitTime"] is not None

    again = client.post(f"/api/visits/{order['visitId']}/close", headers=server_headers)
    assert again.status_code == 400

    next_order = client.post(
        "/api/orders",
        json={"seatingAreaId": seating_area.id, "cart": [{"productId": product.id, "quantity": 1}]},
        headers=server_headers,
    ).json()["data"]
    assert next_order["visitId"] != order["visitId"]
    assert db_session.query(Visit).filter(Visit.status == VisitStatus.OPEN).count() == 1


def test_check_in_creates_client_and_visit(client, db_session):
    response = client.post("/api/check-in", json={"name": "Maria", "phoneNumber": "+5511999990000"})

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["clientName"] == "Maria"

    visit = db_session.query(Visit).one()
    assert visit.id == data["visitId"]
    assert visit.seating_area_id is None
    assert visit.entry_fee_paid == Decimal("50.00")


def test_check_in_reuses_client_by_phone(client, db_session):
    client.post("/api/check-in", json={"name": "Maria", "phoneNumber": "+5511999990000", "entryFeePaid": "0"})
    response = client.post("/api/check-in", json={"phoneNumber": "+5511999990000", "entryFeePaid": "20"})

    assert response.status_code == 201
    assert response.json()["data"]["clientName"] == "Maria"
    assert db_session.query(Client).count() == 1
    assert db_session.query(Visit).count() == 2


def test_check_in_rejects_negative_fee(client):
    response = client.post("/api/check-in", json={"name": "Maria", "entryFeePaid": "-1"})

    assert response.status_code == 400


def test_active_visits_and_live_view(client, server_headers, seating_area, product):
    client.post("/api/check-in", json={"name": "Maria", "phoneNumber": "555-0101"})
    client.post("/api/seating-areas/%d/visit" % seating_area.id, headers=server_headers)

    active = client.get("/api/visits/active", headers=server_headers)
    assert active.status_code == 200
    assert len(active.json()["data"]) == 2

    filtered = client.get("/api/visits/active", params={"query": "555-01"}, headers=server_headers)
    assert [visit["clientName"] for visit in filtered.json()["data"]] == ["Maria"]

    live = client.get("/api/live", headers=server_headers)
    assert live.status_code == 200
    data = live.json()["data"]
    assert {entry["name"] for entry in data["clients"]} >= {"Maria"}
    assert data["products"][0]["salePrice"] == "15.00"


def count_queries(client, path, headers):
    statements = []

    def record(conn, cursor, statement, parameters, context, executemany):
        if statement.lstrip().upper().startswith("SELECT"):
            statements.append(statement)

    event.listen(engine, "before_cursor_execute", record)
    try:
        response = client.get(path, headers=headers)
    finally:
        event.remove(engine, "before_cursor_execute", record)
    assert response.status_code == 200
    return len(statements)


def test_listing_loads_visit_clients_in_one_query(
    client, server_headers, seating_area, other_seating_area, product
):
    cart = [{"productId": product.id, "quantity": 1}]
    client.post("/api/orders", json={"seatingAreaId": seating_area.id, "cart": cart}, headers=server_headers)
    one_occupied = count_queries(client, "/api/seating-areas", server_headers)

    client.post("/api/orders", json={"seatingAreaId": other_seating_area.id, "cart": cart}, headers=server_headers)
    two_occupied = count_queries(client, "/api/seating-areas", server_headers)

    assert two_occupied == one_occupied
    areas = client.get("/api/seating-areas", headers=server_headers).json()["data"]
    assert all(area["activeVisit"]["clientName"].startswith("Patron #") for area in areas)
