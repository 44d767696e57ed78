"""
AuthSession Repository
"""
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from logitrack.core.base_repository import BaseRepository
from logitrack.core.exceptions import map_database_error
from logitrack.models.auth_session import AuthSession
from logitrack.repository.interfaces.auth_session_repository_interface import IAuthSessionRepository


class AuthSessionRepository(BaseRepository[AuthSession, str], IAuthSessionRepository):

    def __init__(self, session: Session):
        super().__init__(session, AuthSession)

    def get_active(self, session_id: str) -> Optional[AuthSession]:
        auth_session = self.get_by_id(session_id)
        if auth_session is None or not auth_session.is_active():
            return None
        return auth_session

    def get_active_by_user(self, user_id: str) -> List[AuthSession]:
        try:
            sessions = self._session.query(AuthSession).filter(
                AuthSession.user_id == user_id,
                AuthSession.revoked_at.is_(None),
            ).all()
        except SQLAlchemyError as e:
            raise map_database_error(e, self.entity_name)
        return [s for s in sessions if s.is_active()]

    def revoke(self, auth_session: AuthSession, when: Optional[datetime] = None) -> AuthSession:
        auth_session.revoked_at = when or datetime.now(timezone.utc)
        return self.update(auth_session)
