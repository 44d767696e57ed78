from datetime import datetime, timedelta, timezone
from typing import Annotated

from fastapi import APIRouter, Depends, status
from fastapi.security import OAuth2PasswordRequestForm

from logitrack.core.exceptions import AuthenticationException, ErrorCode
from logitrack.core.settings import get_app_settings
from logitrack.models.auth_session import AuthSession
from logitrack.repository.auth_session_repository import AuthSessionRepository
from logitrack.repository.user_repository import UserRepository
from logitrack.schemas.user_schema import SessionResponseSchema, Token, UserResponseSchema, UserSchema
from logitrack.services.auth.session_registry import get_session_registry
from logitrack.services.core.wrap import check_authentication
from logitrack.services.routers.auth_service import (
    authenticate_user,
    create_access_token,
    db_dependency,
    get_current_user,
)
from logitrack.services.routers.user_service import serialize_user
from .dependencies import get_locale
from .user import get_user_service

router = APIRouter(
    prefix='/api/v1/auth',
    tags=['Authentication'],
)


@router.post("/signup", status_code=status.HTTP_201_CREATED, response_model=UserResponseSchema)
async def signup(us: UserSchema, user_service=Depends(get_user_service), locale: str = Depends(get_locale)):
    """
        Registra un nuovo account.

        L'account viene confermato subito e riceve il ruolo USER. Se la registrazione
        è disabilitata (ALLOW_SIGNUP=false) risponde 403; un'email già registrata
        risponde 409.
    """
    user = await user_service.signup(us)
    return serialize_user(user, locale)


@router.post("/login", response_model=Token, status_code=status.HTTP_200_OK)
async def get_token(form_data: Annotated[OAuth2PasswordRequestForm, Depends()],
                    db: db_dependency):
    """
        Autentica un utente e restituisce un token JWT legato a una nuova sessione.

        Parameters:
        - username: email dell'account
        - password

        Returns:
        - dict: token di accesso, tipo di token, email e scadenza della sessione

        Raises:
        - AuthenticationException: 401 se le credenziali non sono valide.
    """
    user = authenticate_user(db, form_data.username, form_data.password)
    if not user:
        raise AuthenticationException("Invalid email or password", ErrorCode.INVALID_CREDENTIALS)

    settings = get_app_settings()
    now = datetime.now(timezone.utc)
    expires_delta = timedelta(minutes=settings.access_token_expire_minutes)

    auth_session = AuthSessionRepository(db).create(AuthSession(
        user_id=user.id,
        created_at=now,
        expires_at=now + expires_delta,
    ))
    user.last_sign_in_at = now
    UserRepository(db).update(user)

    token = create_access_token(email=user.email,
                                user_id=user.id,
                                role=user.role,
                                session_id=auth_session.id,
                                expires_delta=expires_delta)

    await get_session_registry().signed_in(auth_session.id, user.id, user.email)

    return {
        "access_token": token,
        "token_type": "bearer",
        "current_user": user.email,
        "expires_at": now + expires_delta,
    }


@router.post("/logout", status_code=status.HTTP_200_OK)
@check_authentication
async def logout(db: db_dependency, user: dict = Depends(get_current_user)):
    """Revoca la sessione corrente: lo stesso token non sarà più accettato."""
    repository = AuthSessionRepository(db)
    auth_session = repository.get_active(user["session_id"])
    if auth_session is None:
        raise AuthenticationException("Session is no longer valid", ErrorCode.SESSION_REVOKED)
    repository.revoke(auth_session)
    await get_session_registry().signed_out(auth_session.id, user["id"])
    return {"message": "Signed out"}


@router.get("/session", status_code=status.HTTP_200_OK, response_model=SessionResponseSchema)
@check_authentication
async def get_session(db: db_dependency, user: dict = Depends(get_current_user)):
    """Utente e sessione associati al token corrente"""
    account = UserRepository(db).get_by_id(user["id"])
    auth_session = AuthSessionRepository(db).get_active(user["session_id"])
    if account is None or auth_session is None:
        raise AuthenticationException("Session is no longer valid", ErrorCode.SESSION_REVOKED)
    return {
        "user": {"id": account.id, "email": account.email, "role": account.role},
        "session": {
            "id": auth_session.id,
            "created_at": auth_session.created_at,
            "expires_at": auth_session.expires_at,
        },
    }
