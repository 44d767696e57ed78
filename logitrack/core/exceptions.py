"""
Sistema di gestione errori centralizzato seguendo i principi SOLID
"""
from abc import ABC
from typing import Optional, Dict, Any
from enum import Enum

from sqlalchemy.exc import DBAPIError, SQLAlchemyError


class ErrorCode(Enum):
    """Codici errore standardizzati"""
    # Validation errors
    VALIDATION_ERROR = "VALIDATION_ERROR"
    REQUIRED_FIELD_MISSING = "REQUIRED_FIELD_MISSING"
    INVALID_CONTAINER_TYPE = "INVALID_CONTAINER_TYPE"

    # Business logic errors
    BUSINESS_RULE_VIOLATION = "BUSINESS_RULE_VIOLATION"
    ALREADY_EXISTS = "ALREADY_EXISTS"
    REFERENTIAL_INTEGRITY = "REFERENTIAL_INTEGRITY"
    CONFIRMATION_REQUIRED = "CONFIRMATION_REQUIRED"

    # Not found errors
    ENTITY_NOT_FOUND = "ENTITY_NOT_FOUND"

    # Infrastructure errors
    DATABASE_ERROR = "DATABASE_ERROR"
    STORAGE_ERROR = "STORAGE_ERROR"
    DOCUMENT_UPLOAD_FAILED = "DOCUMENT_UPLOAD_FAILED"

    # Authentication/Authorization errors
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    TOKEN_EXPIRED = "TOKEN_EXPIRED"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    SESSION_REVOKED = "SESSION_REVOKED"


class BaseApplicationException(Exception, ABC):
    """Base exception per l'applicazione"""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.VALIDATION_ERROR,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = 400
    ):
        self.message = message
        self.error_code = error_code.value
        self.details = details or {}
        self.status_code = status_code
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Converte l'eccezione in dizionario per la risposta API"""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
            "status_code": self.status_code
        }


class DomainException(BaseApplicationException):
    """Eccezioni del dominio business"""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.BUSINESS_RULE_VIOLATION,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, error_code, details, 400)


class ValidationException(DomainException):
    """Errori di validazione"""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.VALIDATION_ERROR,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, error_code, details)


class BusinessRuleException(DomainException):
    """Violazione regole business"""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.BUSINESS_RULE_VIOLATION,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, error_code, details)


class NotFoundException(BaseApplicationException):
    """Entità non trovata"""

    def __init__(
        self,
        entity_type: str,
        entity_id: Any = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if entity_id is not None:
            message = f"{entity_type} with id '{entity_id}' not found"
        else:
            message = f"{entity_type} not found"

        error_details = details or {}
        if entity_id is not None:
            error_details["entity_id"] = entity_id
        error_details["entity_type"] = entity_type

        super().__init__(
            message,
            ErrorCode.ENTITY_NOT_FOUND,
            error_details,
            404
        )


class InfrastructureException(BaseApplicationException):
    """Errori di infrastruttura"""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.DATABASE_ERROR,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, error_code, details, 500)


class AuthenticationException(BaseApplicationException):
    """Errori di autenticazione"""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.UNAUTHORIZED,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, error_code, details, 401)


class AuthorizationException(BaseApplicationException):
    """Errori di autorizzazione"""

    def __init__(
        self,
        message: str = "You do not have permission to perform this operation",
        error_code: ErrorCode = ErrorCode.FORBIDDEN,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, error_code, details, 403)


class AlreadyExistsError(BaseApplicationException):
    """Errore quando un'entità esiste già"""

    def __init__(
        self,
        message: str,
        entity_type: str = None,
        entity_id: Any = None,
        details: Optional[Dict[str, Any]] = None
    ):
        error_details = details or {}
        if entity_type:
            error_details["entity_type"] = entity_type
        if entity_id is not None:
            error_details["entity_id"] = entity_id

        super().__init__(
            message,
            ErrorCode.ALREADY_EXISTS,
            error_details,
            409
        )


class ReferentialIntegrityException(BaseApplicationException):
    """Operazione rifiutata perché il record è referenziato (o referenzia un record inesistente)"""

    def __init__(
        self,
        message: str = "This record is linked to other data and cannot be changed or deleted",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, ErrorCode.REFERENTIAL_INTEGRITY, details, 409)


class ConfirmationRequiredException(BaseApplicationException):
    """Operazione distruttiva richiesta senza conferma esplicita"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, ErrorCode.CONFIRMATION_REQUIRED, details, 428)


class DocumentUploadException(BaseApplicationException):
    """L'ordine è stato salvato ma il caricamento del documento è fallito"""

    def __init__(self, order_id: str, cause: Optional[BaseApplicationException] = None):
        details: Dict[str, Any] = {
            "order_id": order_id,
            "retry_path": f"/api/v1/orders/{order_id}/documents",
        }
        if cause is not None:
            details["cause"] = {"error_code": cause.error_code, "message": cause.message}
        super().__init__(
            "Order saved, but the document upload failed. Retry the upload from the order page.",
            ErrorCode.DOCUMENT_UPLOAD_FAILED,
            details,
            502
        )


# Messaggi fissi mostrati all'utente per errori dello store
UNIQUE_VIOLATION_MESSAGE = "A record with these values already exists"
FOREIGN_KEY_VIOLATION_MESSAGE = "This record is linked to other data and cannot be changed or deleted"
PERMISSION_DENIED_MESSAGE = "You do not have permission to perform this operation"
DATABASE_FALLBACK_MESSAGE = "An unexpected database error occurred. Please try again."

_UNIQUE_CODES = {"23505"}
_FOREIGN_KEY_CODES = {"23503"}
_PERMISSION_CODES = {"42501"}


def map_database_error(exc: Exception, entity_type: Optional[str] = None) -> BaseApplicationException:
    """
    Traduce un errore dello store in un'eccezione applicativa.

    Riconosce il codice SQLSTATE (PostgreSQL) quando disponibile, altrimenti
    il testo dell'errore (SQLite/MySQL). Il messaggio originale resta nei details.
    """
    if isinstance(exc, BaseApplicationException):
        return exc

    original = getattr(exc, "orig", exc)
    pgcode = getattr(original, "pgcode", None) or getattr(original, "sqlstate", None)
    text = str(original).lower()
    details: Dict[str, Any] = {"database_message": str(original)}
    if entity_type:
        details["entity_type"] = entity_type

    if pgcode in _UNIQUE_CODES or "unique constraint" in text or "duplicate entry" in text or "duplicate key" in text:
        return AlreadyExistsError(UNIQUE_VIOLATION_MESSAGE, details=details)
    if pgcode in _FOREIGN_KEY_CODES or "foreign key constraint" in text:
        return ReferentialIntegrityException(FOREIGN_KEY_VIOLATION_MESSAGE, details=details)
    if pgcode in _PERMISSION_CODES or "permission denied" in text or "row-level security" in text:
        return AuthorizationException(PERMISSION_DENIED_MESSAGE, details=details)

    if not isinstance(exc, (DBAPIError, SQLAlchemyError)):
        details["error_type"] = type(exc).__name__
    return InfrastructureException(DATABASE_FALLBACK_MESSAGE, details=details)
