from enum import Enum

from sqlalchemy import Column, String, DateTime
from sqlalchemy.orm import relationship

from logitrack.database import Base
from logitrack.models.contact import generate_uuid, utcnow


class UserRole(str, Enum):
    ADMIN = "ADMIN"
    USER = "USER"


class User(Base):
    """
        Modello SQLAlchemy per la tabella 'users'.

        Attributes:
            id (Column): UUID dell'account.
            email (Column): Email usata per l'accesso, unica.
            password_hash (Column): Hash bcrypt della password.
            role (Column): ADMIN può gestire gli utenti, USER solo i dati operativi.
            confirmed_at (Column): Data di conferma dell'account; NULL se in attesa.
            last_sign_in_at (Column): Ultimo accesso riuscito.
            created_at (Column): Data di creazione dell'account.
    """
    __tablename__ = 'users'

    id = Column(String(36), primary_key=True, default=generate_uuid)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(15), nullable=False, default=UserRole.USER.value)
    confirmed_at = Column(DateTime(timezone=True), nullable=True)
    last_sign_in_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    sessions = relationship("AuthSession", back_populates="user", cascade="all, delete-orphan")

    @property
    def is_confirmed(self) -> bool:
        return self.confirmed_at is not None
