"""
Test unitari per la traduzione degli errori del database
"""
import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from logitrack.core.exceptions import (
    AlreadyExistsError,
    AuthorizationException,
    DocumentUploadException,
    ErrorCode,
    InfrastructureException,
    NotFoundException,
    ReferentialIntegrityException,
    ValidationException,
    map_database_error,
)


class FakePgError(Exception):
    def __init__(self, message, pgcode):
        super().__init__(message)
        self.pgcode = pgcode


def integrity_error(orig):
    return IntegrityError("INSERT ...", {}, orig)


@pytest.mark.unit
class TestMapDatabaseError:

    def test_sqlite_unique_violation(self):
        error = map_database_error(integrity_error(Exception("UNIQUE constraint failed: users.email")), "User")

        assert isinstance(error, AlreadyExistsError)
        assert error.status_code == 409
        assert error.details["entity_type"] == "User"
        assert "users.email" in error.details["database_message"]

    def test_sqlite_foreign_key_violation(self):
        error = map_database_error(integrity_error(Exception("FOREIGN KEY constraint failed")))

        assert isinstance(error, ReferentialIntegrityException)
        assert error.error_code == ErrorCode.REFERENTIAL_INTEGRITY.value

    def test_postgres_codes(self):
        assert isinstance(map_database_error(integrity_error(FakePgError("x", "23505"))), AlreadyExistsError)
        assert isinstance(map_database_error(integrity_error(FakePgError("x", "23503"))),
                          ReferentialIntegrityException)
        assert isinstance(map_database_error(integrity_error(FakePgError("x", "42501"))), AuthorizationException)

    def test_unknown_error_is_generic(self):
        error = map_database_error(OperationalError("SELECT 1", {}, Exception("disk I/O error")))

        assert isinstance(error, InfrastructureException)
        assert error.status_code == 500
        assert error.message == "An unexpected database error occurred. Please try again."

    def test_application_exception_is_returned_unchanged(self):
        original = ValidationException("bad")

        assert map_database_error(original) is original


@pytest.mark.unit
def test_not_found_payload():
    error = NotFoundException("Supplier", "abc")

    assert error.to_dict() == {
        "error_code": "ENTITY_NOT_FOUND",
        "message": "Supplier with id 'abc' not found",
        "details": {"entity_id": "abc", "entity_type": "Supplier"},
        "status_code": 404,
    }


@pytest.mark.unit
def test_document_upload_exception_carries_retry_path():
    error = DocumentUploadException("o-1", InfrastructureException("down", ErrorCode.STORAGE_ERROR))

    assert error.status_code == 502
    assert error.details["retry_path"] == "/api/v1/orders/o-1/documents"
    assert error.details["cause"] == {"error_code": "STORAGE_ERROR", "message": "down"}
