from datetime import datetime, timedelta, timezone
from functools import wraps
from typing import Annotated

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from jose import jwt, JWTError, ExpiredSignatureError
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from logitrack.core.exceptions import AuthenticationException, AuthorizationException, ErrorCode
from logitrack.core.settings import get_app_settings
from logitrack.database import get_db
from logitrack.repository.auth_session_repository import AuthSessionRepository
from logitrack.repository.user_repository import UserRepository

# Questo service fornisce le dipendenze di autenticazione a tutti i router

bcrypt_context = CryptContext(schemes=["bcrypt"], deprecated="auto")
oauth2_bearer = OAuth2PasswordBearer(tokenUrl="api/v1/auth/login")

db_dependency = Annotated[Session, Depends(get_db)]
token_dependency = Annotated[str, Depends(oauth2_bearer)]

# Permessi CRUD concessi a ciascun ruolo
ROLE_PERMISSIONS = {
    "ADMIN": ["C", "R", "U", "D"],
    "USER": ["C", "R", "U", "D"],
}


def role_claims(role: str) -> list:
    return [{"name": role, "permissions": ROLE_PERMISSIONS.get(role, [])}]


def authenticate_user(db: Session, email: str, password: str):
    """Authentication utente."""
    user = UserRepository(db).get_by_email(email)
    if not user:
        return False
    if not bcrypt_context.verify(password, user.password_hash):
        return False
    return user


async def get_current_user(token: token_dependency, db: db_dependency):
    """Valida token e sessione in ogni endpoint della applicazione."""
    settings = get_app_settings()
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])
    except ExpiredSignatureError:
        raise AuthenticationException("Session expired, please sign in again", ErrorCode.TOKEN_EXPIRED)
    except JWTError:
        raise AuthenticationException("Invalid or expired token")

    email: str = payload.get("sub")
    user_id: str = payload.get("id")
    roles: list = payload.get("roles")
    session_id: str = payload.get("jti")

    if email is None or user_id is None or session_id is None:
        raise AuthenticationException("Invalid credentials", ErrorCode.INVALID_CREDENTIALS)

    auth_session = AuthSessionRepository(db).get_active(session_id)
    if auth_session is None or auth_session.user_id != user_id:
        raise AuthenticationException("Session is no longer valid", ErrorCode.SESSION_REVOKED)

    return {"username": email, "id": user_id, "roles": roles or [], "session_id": session_id}


def create_access_token(email: str, user_id: str, role: str, session_id: str, expires_delta: timedelta):
    """Genera il token di accesso legato alla sessione"""
    settings = get_app_settings()
    expires = datetime.now(timezone.utc) + expires_delta
    encode = {
        "sub": email,
        "id": user_id,
        "roles": role_claims(role),
        "jti": session_id,
        "exp": expires,
    }
    return jwt.encode(encode, settings.secret_key, algorithm=settings.jwt_algorithm)


def authorize(roles_permitted: list, permissions_required: list):
    def decorator(func):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            user = kwargs.get("user")
            user_roles = [user_role["name"] for user_role in user['roles']]
            user_permissions = set()

            for role in user['roles']:
                user_permissions.update(role['permissions'])

            # Verifica i ruoli permessi
            if not any(role in roles_permitted for role in user_roles):
                raise AuthorizationException()

            # Verifica i permessi richiesti
            if not all(permission in user_permissions for permission in permissions_required):
                raise AuthorizationException("Insufficient permissions")

            return await func(*args, **kwargs)

        return wrapper

    return decorator
