import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, String, DateTime


def generate_uuid() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ContactMixin:
    """
        Colonne comuni alle anagrafiche (fornitori, vettori, destinazioni).

        Attributes:
            id (Column): UUID in forma stringa, generato all'inserimento.
            name (Column): Nome obbligatorio, usato per ordinamento e ricerca.
            address, country, email, phone (Column): Campi facoltativi; vuoti salvati come NULL.
            created_at, updated_at (Column): Timestamp UTC.
    """
    id = Column(String(36), primary_key=True, default=generate_uuid)
    name = Column(String(255), nullable=False, index=True)
    address = Column(String(500), nullable=True)
    country = Column(String(100), nullable=True)
    email = Column(String(255), nullable=True)
    phone = Column(String(50), nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)
