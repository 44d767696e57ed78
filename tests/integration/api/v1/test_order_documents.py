"""
Test di integrazione per i documenti degli ordini
"""
import pytest
from fastapi import status

from tests.factories.order_factory import create_order
from tests.helpers.asserts import assert_error_response, assert_field_error, assert_success_response


def _upload(client, order_id, filename="invoice.pdf", content=b"%PDF-1.4", name=None):
    data = {"name": name} if name is not None else None
    return client.post(
        f"/api/v1/orders/{order_id}/documents",
        files={"file": (filename, content, "application/pdf")},
        data=data,
    )


@pytest.mark.integration
def test_upload_document(user_client, db_session, document_storage):
    """✅ POST /orders/{id}/documents - file salvato in <order_id>/<nome file>"""
    order = create_order(db_session)

    data = assert_success_response(_upload(user_client, order.id, "fatura marco.pdf"), status.HTTP_201_CREATED)

    assert data["file_url"] == f"{order.id}/fatura_marco.pdf"
    assert data["name"] == "fatura_marco.pdf"
    assert data["public_url"] == f"/media/documents/{order.id}/fatura_marco.pdf"
    assert document_storage.exists(data["file_url"])


@pytest.mark.integration
def test_uploaded_document_is_served_at_public_url(user_client, db_session, document_storage):
    """✅ GET public_url - il file è servito come static file"""
    order = create_order(db_session)
    document = assert_success_response(_upload(user_client, order.id, content=b"hello"), 201)

    response = user_client.get(document["public_url"])

    assert response.status_code == 200
    assert response.content == b"hello"


@pytest.mark.integration
def test_duplicate_file_name_is_rejected(user_client, db_session, document_storage):
    """❌ POST /orders/{id}/documents - stesso nome file per lo stesso ordine - 409"""
    order = create_order(db_session)
    assert_success_response(_upload(user_client, order.id, content=b"first"), 201)

    response = _upload(user_client, order.id, content=b"second")

    assert_error_response(response, status.HTTP_409_CONFLICT, "ALREADY_EXISTS")
    assert (document_storage.root / order.id / "invoice.pdf").read_bytes() == b"first"
    documents = assert_success_response(user_client.get(f"/api/v1/orders/{order.id}/documents"))
    assert len(documents) == 1


@pytest.mark.integration
def test_empty_file_is_rejected(user_client, db_session):
    """❌ POST /orders/{id}/documents - file vuoto - 400"""
    order = create_order(db_session)

    data = assert_error_response(_upload(user_client, order.id, content=b""), 400, "VALIDATION_ERROR")

    assert data["details"]["field"] == "file"


@pytest.mark.integration
def test_upload_for_unknown_order(user_client):
    """❌ POST /orders/{id}/documents - ordine inesistente - 404"""
    response = _upload(user_client, "4a1b2c3d-5e6f-4a7b-8c9d-0e1f2a3b4c5d")

    assert_error_response(response, 404, "ENTITY_NOT_FOUND")


@pytest.mark.integration
def test_rename_document(user_client, db_session, document_storage):
    """✅ PATCH /order-documents/{id} - rinomina senza toccare il file"""
    order = create_order(db_session)
    document = assert_success_response(_upload(user_client, order.id, name="Fatura"), 201)

    data = assert_success_response(
        user_client.patch(f"/api/v1/order-documents/{document['id']}", json={"name": "  Fatura final "})
    )

    assert data["name"] == "Fatura final"
    assert data["file_url"] == document["file_url"]
    detail = assert_success_response(user_client.get(f"/api/v1/orders/{order.id}"))
    assert [d["name"] for d in detail["documents"]] == ["Fatura final"]


@pytest.mark.integration
def test_rename_document_with_blank_name(user_client, db_session, document_storage):
    """❌ PATCH /order-documents/{id} - nome vuoto - 422"""
    order = create_order(db_session)
    document = assert_success_response(_upload(user_client, order.id), 201)

    response = user_client.patch(f"/api/v1/order-documents/{document['id']}", json={"name": "  "})

    assert_field_error(response, "name")


@pytest.mark.integration
def test_delete_document(user_client, db_session, document_storage):
    """✅ DELETE /order-documents/{id} - riga e file eliminati"""
    order = create_order(db_session)
    document = assert_success_response(_upload(user_client, order.id), 201)

    assert_success_response(user_client.delete(f"/api/v1/order-documents/{document['id']}"))

    assert not document_storage.exists(document["file_url"])
    assert assert_success_response(user_client.get(f"/api/v1/orders/{order.id}/documents")) == []


@pytest.mark.integration
def test_delete_document_with_missing_file(user_client, db_session, document_storage):
    """✅ DELETE /order-documents/{id} - il file già assente non blocca l'eliminazione"""
    order = create_order(db_session)
    document = assert_success_response(_upload(user_client, order.id), 201)
    (document_storage.root / document["file_url"]).unlink()

    assert_success_response(user_client.delete(f"/api/v1/order-documents/{document['id']}"))

    assert_error_response(user_client.delete(f"/api/v1/order-documents/{document['id']}"), 404)
