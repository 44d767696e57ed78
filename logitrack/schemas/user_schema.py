from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from logitrack.models.user import UserRole
from logitrack.schemas.common_schema import UTCDateTime


class UserSchema(BaseModel):
    """
        Schema di validazione per la creazione di un account.

        Attributes:
            email (EmailStr): Indirizzo email valido, usato come credenziale di accesso.
            password (str): Almeno 6 caratteri.
    """
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=72)

    model_config = ConfigDict(extra='forbid')


class UserResponseSchema(BaseModel):
    id: str
    email: str
    role: UserRole
    status: str
    status_label: str
    confirmed_at: Optional[UTCDateTime] = None
    last_sign_in_at: Optional[UTCDateTime] = None
    created_at: UTCDateTime


class AllUsersResponseSchema(BaseModel):
    items: list[UserResponseSchema]
    total: int
    page: int
    limit: int


class Token(BaseModel):
    """
        Schema per i token di autenticazione.

        Attributes:
            access_token (str): Il token di accesso JWT generato.
            token_type (str): Il tipo di token, "bearer".
            current_user (str): Email dell'utente autenticato.
            expires_at (datetime): Scadenza della sessione.
    """
    access_token: str
    token_type: str
    current_user: str
    expires_at: datetime


class SessionUserSchema(BaseModel):
    id: str
    email: str
    role: UserRole


class SessionInfoSchema(BaseModel):
    id: str
    created_at: UTCDateTime
    expires_at: UTCDateTime


class SessionResponseSchema(BaseModel):
    user: SessionUserSchema
    session: SessionInfoSchema
