"""
Test di integrazione per autenticazione e sessioni (token reali)
"""
import pytest
from fastapi import status

from logitrack.core.settings import get_app_settings
from logitrack.models.user import UserRole
from tests.helpers.asserts import assert_error_response, assert_success_response
from tests.helpers.auth import create_account, get_auth_headers, login


@pytest.mark.integration
def test_signup_then_login(client):
    """✅ POST /auth/signup + /auth/login - account confermato e token valido"""
    response = client.post("/api/v1/auth/signup", json={"email": "ana@example.com", "password": "secret123"})
    data = assert_success_response(response, status.HTTP_201_CREATED)
    assert data["status"] == "confirmed"
    assert data["role"] == "USER"

    token = assert_success_response(login(client, "ana@example.com", "secret123"))

    assert token["token_type"] == "bearer"
    assert token["current_user"] == "ana@example.com"


@pytest.mark.integration
def test_signup_disabled(client, monkeypatch):
    """❌ POST /auth/signup con registrazione disabilitata - 403"""
    monkeypatch.setattr(get_app_settings(), "allow_signup", False)

    response = client.post("/api/v1/auth/signup", json={"email": "ana@example.com", "password": "secret123"})

    assert_error_response(response, status.HTTP_403_FORBIDDEN, "FORBIDDEN")


@pytest.mark.integration
def test_login_with_wrong_password(client, db_session):
    """❌ POST /auth/login - password errata - 401"""
    create_account(db_session, "ana@example.com")

    response = login(client, "ana@example.com", "wrong-password")

    assert_error_response(response, status.HTTP_401_UNAUTHORIZED, "INVALID_CREDENTIALS")


@pytest.mark.integration
def test_login_is_case_insensitive_on_email(client, db_session):
    """✅ POST /auth/login - email con maiuscole"""
    create_account(db_session, "ana@example.com")

    assert_success_response(login(client, "Ana@Example.com"))


@pytest.mark.integration
def test_session_endpoint(client, db_session):
    """✅ GET /auth/session - utente e sessione del token"""
    account = create_account(db_session, "ana@example.com")
    token = login(client, "ana@example.com").json()["access_token"]

    data = assert_success_response(client.get("/api/v1/auth/session", headers=get_auth_headers(token)))

    assert data["user"]["id"] == account.id
    assert data["user"]["role"] == "USER"
    assert data["session"]["id"]


@pytest.mark.integration
def test_token_grants_access_to_protected_routes(client, db_session):
    """✅ GET /suppliers con token reale - 200"""
    create_account(db_session, "ana@example.com")
    token = login(client, "ana@example.com").json()["access_token"]

    assert_success_response(client.get("/api/v1/suppliers/", headers=get_auth_headers(token)))


@pytest.mark.integration
def test_logout_revokes_token(client, db_session, event_bus_spy):
    """✅ POST /auth/logout - lo stesso token viene poi rifiutato"""
    account = create_account(db_session, "ana@example.com")
    token = login(client, "ana@example.com").json()["access_token"]
    headers = get_auth_headers(token)

    assert_success_response(client.post("/api/v1/auth/logout", headers=headers))

    assert_error_response(client.get("/api/v1/auth/session", headers=headers), 401, "SESSION_REVOKED")
    signed_in = event_bus_spy.get_events_by_type("session_signed_in")
    signed_out = event_bus_spy.get_events_by_type("session_signed_out")
    assert len(signed_in) == 1 and len(signed_out) == 1
    assert signed_out[0].data["user_id"] == account.id
    assert signed_out[0].data["session_id"] == signed_in[0].data["session_id"]


@pytest.mark.integration
def test_deleted_user_token_is_rejected(client, db_session, event_bus_spy):
    """✅ DELETE /users/{id} - le sessioni dell'utente eliminato vengono revocate"""
    admin = create_account(db_session, "admin@example.com", role=UserRole.ADMIN)
    create_account(db_session, "ana@example.com")
    admin_token = login(client, admin.email).json()["access_token"]
    user_token = login(client, "ana@example.com").json()["access_token"]
    user_id = client.get("/api/v1/auth/session", headers=get_auth_headers(user_token)).json()["user"]["id"]

    response = client.delete(f"/api/v1/users/{user_id}", params={"confirm": "true"},
                             headers=get_auth_headers(admin_token))

    assert_success_response(response)
    assert_error_response(client.get("/api/v1/auth/session", headers=get_auth_headers(user_token)), 401)
    reasons = [e.data["reason"] for e in event_bus_spy.get_events_by_type("session_signed_out")]
    assert reasons == ["user_deleted"]


@pytest.mark.integration
def test_missing_token(client):
    """❌ GET /auth/session senza token - 401"""
    assert_error_response(client.get("/api/v1/auth/session"), 401, "UNAUTHORIZED")


@pytest.mark.integration
def test_invalid_token(client):
    """❌ GET /auth/session con token non valido - 401"""
    assert_error_response(client.get("/api/v1/auth/session", headers=get_auth_headers("not-a-jwt")), 401)
