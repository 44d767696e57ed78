"""
Test di integrazione per gli endpoint Supplier
Testa sia i casi OK che gli errori (404, 409, 422, 428)
"""
import pytest
from fastapi import status

from tests.factories.contact_factory import create_contact_data, create_supplier
from tests.factories.order_factory import create_order
from tests.helpers.asserts import (
    assert_error_response,
    assert_field_error,
    assert_pagination_response,
    assert_success_response,
)

BASE_URL = "/api/v1/suppliers"


@pytest.mark.integration
def test_create_then_search_returns_row_once(user_client):
    """✅ POST + GET /suppliers?search= - il fornitore compare una sola volta"""
    # Arrange
    response = user_client.post(f"{BASE_URL}/", json=create_contact_data("Acme Lda"))
    created = assert_success_response(response, status.HTTP_201_CREATED, ["id", "name"])

    # Act
    response = user_client.get(f"{BASE_URL}/", params={"search": "acme"})

    # Assert
    data = assert_pagination_response(response, expected_total=1)
    assert [item["id"] for item in data["items"]] == [created["id"]]


@pytest.mark.integration
def test_list_is_ordered_by_name(user_client, db_session):
    """✅ GET /suppliers - ordinamento per nome"""
    create_supplier(db_session, "Zeta")
    create_supplier(db_session, "Alfa")
    create_supplier(db_session, "Meio")

    data = assert_pagination_response(user_client.get(f"{BASE_URL}/"), expected_total=3)

    assert [item["name"] for item in data["items"]] == ["Alfa", "Meio", "Zeta"]


@pytest.mark.integration
def test_search_treats_wildcards_literally(user_client, db_session):
    """✅ GET /suppliers?search=% - i caratteri jolly non fanno match su tutto"""
    create_supplier(db_session, "Acme")
    create_supplier(db_session, "100% Cork")

    data = assert_pagination_response(user_client.get(f"{BASE_URL}/", params={"search": "%"}), expected_total=1)

    assert data["items"][0]["name"] == "100% Cork"


@pytest.mark.integration
def test_list_reflects_new_supplier_after_cached_read(user_client):
    """✅ GET /suppliers dopo una creazione - la cache della lista viene invalidata"""
    assert_pagination_response(user_client.get(f"{BASE_URL}/"), expected_total=0)

    user_client.post(f"{BASE_URL}/", json=create_contact_data("Nova"))

    data = assert_pagination_response(user_client.get(f"{BASE_URL}/"), expected_total=1)
    assert data["items"][0]["name"] == "Nova"


@pytest.mark.integration
def test_blank_optional_fields_are_stored_as_null(user_client):
    """✅ POST /suppliers - campi facoltativi vuoti diventano null, il nome viene ripulito"""
    response = user_client.post(f"{BASE_URL}/", json={"name": "  Acme  ", "email": "", "phone": "   "})

    data = assert_success_response(response, status.HTTP_201_CREATED)
    assert data["name"] == "Acme"
    assert data["email"] is None
    assert data["phone"] is None


@pytest.mark.integration
def test_update_with_blank_email(user_client, db_session):
    """✅ PUT /suppliers/{id} - 'Acme' con email vuota resta modificabile con email vuota"""
    supplier = create_supplier(db_session, "Acme", email=None)

    response = user_client.put(f"{BASE_URL}/{supplier.id}", json={"name": "Acme", "email": "", "country": "Spain"})

    data = assert_success_response(response)
    assert data["email"] is None
    assert data["country"] == "Spain"
    # I campi non inviati vengono azzerati
    assert data["address"] is None


@pytest.mark.integration
def test_invalid_email_is_rejected(user_client):
    """❌ POST /suppliers - email non valida - 422 sul campo email"""
    response = user_client.post(f"{BASE_URL}/", json=create_contact_data(email="not-an-email"))

    assert_field_error(response, "email")


@pytest.mark.integration
def test_blank_name_is_rejected(user_client):
    """❌ POST /suppliers - nome vuoto - 422"""
    response = user_client.post(f"{BASE_URL}/", json={"name": "   "})

    assert_field_error(response, "name")


@pytest.mark.integration
def test_get_unknown_supplier_returns_404(user_client):
    """❌ GET /suppliers/{id} - 404"""
    response = user_client.get(f"{BASE_URL}/6f1c2f4e-4a38-4d8e-9a61-9c2b2f0d1a11")

    assert_error_response(response, status.HTTP_404_NOT_FOUND, "ENTITY_NOT_FOUND")


@pytest.mark.integration
def test_non_uuid_id_is_rejected(user_client):
    """❌ GET /suppliers/abc - 422"""
    response = user_client.get(f"{BASE_URL}/abc")

    assert_error_response(response, 422, "VALIDATION_ERROR")


@pytest.mark.integration
def test_delete_requires_confirmation(user_client, db_session):
    """❌ DELETE /suppliers/{id} senza conferma - 428 con il nome"""
    supplier = create_supplier(db_session, "Acme")

    response = user_client.delete(f"{BASE_URL}/{supplier.id}")

    data = assert_error_response(response, 428, "CONFIRMATION_REQUIRED", "Acme")
    assert data["details"]["name"] == "Acme"
    assert_success_response(user_client.get(f"{BASE_URL}/{supplier.id}"))


@pytest.mark.integration
def test_delete_with_confirmation_removes_from_list(user_client, db_session):
    """✅ DELETE /suppliers/{id}?confirm=true - non compare più nelle liste"""
    supplier = create_supplier(db_session, "Acme")
    assert_pagination_response(user_client.get(f"{BASE_URL}/"), expected_total=1)

    response = user_client.delete(f"{BASE_URL}/{supplier.id}", params={"confirm": "true"})

    assert_success_response(response)
    assert_pagination_response(user_client.get(f"{BASE_URL}/"), expected_total=0)
    assert_error_response(user_client.get(f"{BASE_URL}/{supplier.id}"), 404)


@pytest.mark.integration
def test_delete_referenced_supplier_is_rejected(user_client, db_session):
    """❌ DELETE /suppliers/{id} usato da un ordine - 409 integrità referenziale"""
    order = create_order(db_session)
    supplier_id = order.supplier_id

    response = user_client.delete(f"{BASE_URL}/{supplier_id}", params={"confirm": "true"})

    data = assert_error_response(response, status.HTTP_409_CONFLICT, "REFERENTIAL_INTEGRITY")
    assert "foreign key" in data["details"]["database_message"].lower()
    assert_success_response(user_client.get(f"{BASE_URL}/{supplier_id}"))


@pytest.mark.integration
def test_requires_authentication(client):
    """❌ GET /suppliers senza token - 401"""
    response = client.get(f"{BASE_URL}/")

    assert response.status_code == status.HTTP_401_UNAUTHORIZED
