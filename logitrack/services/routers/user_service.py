"""
User Service
"""
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from logitrack.core.exceptions import (
    AlreadyExistsError,
    AuthorizationException,
    BusinessRuleException,
    ConfirmationRequiredException,
    ErrorCode,
)
from logitrack.core.i18n import account_status_label, resolve_locale
from logitrack.core.invalidation import invalidate_entity
from logitrack.core.settings import get_app_settings
from logitrack.models.user import User, UserRole
from logitrack.repository.interfaces.auth_session_repository_interface import IAuthSessionRepository
from logitrack.repository.interfaces.user_repository_interface import IUserRepository
from logitrack.schemas.user_schema import UserResponseSchema, UserSchema
from logitrack.services.auth.session_registry import get_session_registry
from logitrack.services.interfaces.user_service_interface import IUserService
from logitrack.services.routers.auth_service import bcrypt_context

logger = logging.getLogger(__name__)


def serialize_user(user: User, locale: str) -> Dict[str, Any]:
    return UserResponseSchema(
        id=user.id,
        email=user.email,
        role=user.role,
        status="confirmed" if user.is_confirmed else "pending",
        status_label=account_status_label(user.is_confirmed, locale),
        confirmed_at=user.confirmed_at,
        last_sign_in_at=user.last_sign_in_at,
        created_at=user.created_at,
    ).model_dump(mode="json")


class UserService(IUserService):
    """Gestione degli account (solo amministratori)"""

    def __init__(self, user_repository: IUserRepository, auth_session_repository: IAuthSessionRepository):
        self._user_repository = user_repository
        self._auth_session_repository = auth_session_repository

    async def list_users(self, page: int = 1, limit: int = 20, locale: Optional[str] = None) -> Dict[str, Any]:
        locale = resolve_locale(locale)
        users = self._user_repository.list_users(page=page, limit=limit)
        return {
            "items": [serialize_user(user, locale) for user in users],
            "total": self._user_repository.get_count(),
            "page": page,
            "limit": limit,
        }

    async def create_user(self, user_data: UserSchema, role: UserRole = UserRole.USER) -> User:
        await self.validate_business_rules(user_data)
        now = datetime.now(timezone.utc)
        user = self._user_repository.create(User(
            email=user_data.email.lower(),
            password_hash=bcrypt_context.hash(user_data.password),
            role=role.value,
            confirmed_at=now,
        ))
        await invalidate_entity("user")
        logger.info(f"Utente creato: {user.email} ({user.role})")
        return user

    async def signup(self, user_data: UserSchema) -> User:
        if not get_app_settings().allow_signup:
            raise AuthorizationException("Sign-up is disabled")
        return await self.create_user(user_data)

    async def delete_user(self, user_id: str, confirm: bool = False, current_user_id: Optional[str] = None) -> bool:
        user = self._user_repository.get_by_id_or_raise(user_id)
        if current_user_id is not None and user.id == current_user_id:
            raise BusinessRuleException(
                "You cannot delete your own account",
                ErrorCode.BUSINESS_RULE_VIOLATION,
                {"entity_id": user_id}
            )
        if not confirm:
            raise ConfirmationRequiredException(
                f"Confirm the deletion of user '{user.email}'",
                {"entity_type": "User", "entity_id": user.id, "email": user.email}
            )

        active_sessions = [s.id for s in self._auth_session_repository.get_active_by_user(user.id)]
        self._user_repository.delete_entity(user)
        await invalidate_entity("user")

        registry = get_session_registry()
        for session_id in active_sessions:
            await registry.signed_out(session_id, user_id, reason="user_deleted")
        logger.info(f"Utente eliminato: {user_id} ({len(active_sessions)} sessioni revocate)")
        return True

    async def ensure_admin(self, email: Optional[str], password: Optional[str]) -> Optional[User]:
        if not email or not password:
            return None
        existing = self._user_repository.get_by_email(email)
        if existing is not None:
            return existing
        return await self.create_user(UserSchema(email=email, password=password), role=UserRole.ADMIN)

    async def validate_business_rules(self, data: Any) -> None:
        if self._user_repository.get_by_email(data.email) is not None:
            raise AlreadyExistsError(
                "A user with this email already exists",
                entity_type="User",
                details={"email": data.email}
            )
