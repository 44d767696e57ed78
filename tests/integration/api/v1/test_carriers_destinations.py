"""
Test di integrazione per vettori e destinazioni (stesso CRUD dei fornitori)
"""
from datetime import datetime, timezone

import pytest
from fastapi import status

from tests.factories.contact_factory import create_carrier, create_contact_data
from tests.factories.order_factory import create_order, create_order_data, create_relations
from tests.helpers.asserts import assert_error_response, assert_pagination_response, assert_success_response


@pytest.mark.integration
@pytest.mark.parametrize("base_url", ["/api/v1/carriers", "/api/v1/destinations"])
def test_crud_round(user_client, base_url):
    """✅ create, update, delete confermato"""
    created = assert_success_response(
        user_client.post(f"{base_url}/", json=create_contact_data("Primeiro")), status.HTTP_201_CREATED
    )

    updated = assert_success_response(
        user_client.put(f"{base_url}/{created['id']}", json={"name": "Segundo"})
    )
    assert updated["name"] == "Segundo"

    data = assert_pagination_response(user_client.get(f"{base_url}/", params={"search": "seg"}), expected_total=1)
    assert data["items"][0]["id"] == created["id"]

    assert_success_response(user_client.delete(f"{base_url}/{created['id']}", params={"confirm": True}))
    assert_pagination_response(user_client.get(f"{base_url}/"), expected_total=0)


@pytest.mark.integration
@pytest.mark.parametrize("base_url,relation", [
    ("/api/v1/carriers", "carrier_id"),
    ("/api/v1/destinations", "destination_id"),
])
def test_delete_referenced_entity_is_rejected(user_client, db_session, base_url, relation):
    """❌ DELETE su un'anagrafica usata da un ordine - 409"""
    order = create_order(db_session)

    response = user_client.delete(f"{base_url}/{getattr(order, relation)}", params={"confirm": True})

    assert_error_response(response, status.HTTP_409_CONFLICT, "REFERENTIAL_INTEGRITY")


@pytest.mark.integration
def test_container_types_are_seeded(user_client):
    """✅ GET /container-types - lista controllata predefinita"""
    data = assert_success_response(user_client.get("/api/v1/container-types/"))

    assert {"name": "40' HC"} in data
    assert len(data) == 6


@pytest.mark.integration
def test_user_cannot_add_container_type(user_client):
    """❌ POST /container-types come USER - 403"""
    response = user_client.post("/api/v1/container-types/", json={"name": "53' HC"})

    assert_error_response(response, 403, "FORBIDDEN")
    data = assert_success_response(user_client.get("/api/v1/container-types/"))
    assert {"name": "53' HC"} not in data


@pytest.mark.integration
def test_admin_adds_container_type_once(admin_client):
    """✅ POST /container-types come ADMIN - 201; ❌ duplicato - 409"""
    assert_success_response(admin_client.post("/api/v1/container-types/", json={"name": "53' HC"}), 201)
    assert_error_response(admin_client.post("/api/v1/container-types/", json={"name": "53' HC"}), 409)


@pytest.mark.integration
def test_carrier_stats(user_client, db_session):
    """✅ GET /carriers/stats - trasporti, attivi, prezzo medio; aggiornate dopo un nuovo ordine"""
    relations = create_relations(db_session)
    now = datetime.now(timezone.utc)
    create_order(db_session, relations, order_date=now, transport_price=2000.0)
    create_order(db_session, relations, order_date=now, transport_price=3000.0, status="in_transit")
    idle = create_carrier(db_session, name="Zeta Line")

    data = assert_success_response(user_client.get("/api/v1/carriers/stats"))

    assert [entry["carrier_name"] for entry in data] == ["Maersk", "Zeta Line"]
    maersk = data[0]
    assert maersk["carrier_id"] == relations["carrier_id"]
    assert maersk["total_transports"] == 2
    assert maersk["active_transports"] == 1
    assert maersk["average_price"] == 2500.0
    assert maersk["price_variation"] == 0.0
    assert data[1] == {
        "carrier_id": idle.id,
        "carrier_name": "Zeta Line",
        "total_transports": 0,
        "active_transports": 0,
        "average_price": 0.0,
        "price_variation": 0.0,
    }

    assert_success_response(
        user_client.post("/api/v1/orders/", json=create_order_data(relations)), status.HTTP_201_CREATED
    )

    refreshed = assert_success_response(user_client.get("/api/v1/carriers/stats"))
    assert refreshed[0]["total_transports"] == 3
