"""
Interfaccia per AuthSession Repository seguendo ISP
"""
from abc import abstractmethod
from datetime import datetime
from typing import List, Optional

from logitrack.core.interfaces import IRepository
from logitrack.models.auth_session import AuthSession


class IAuthSessionRepository(IRepository[AuthSession, str]):
    """Interface per la repository delle sessioni di accesso"""

    @abstractmethod
    def get_active(self, session_id: str) -> Optional[AuthSession]:
        """Sessione non revocata e non scaduta, altrimenti None"""
        pass

    @abstractmethod
    def get_active_by_user(self, user_id: str) -> List[AuthSession]:
        """Sessioni attive di un utente"""
        pass

    @abstractmethod
    def revoke(self, auth_session: AuthSession, when: Optional[datetime] = None) -> AuthSession:
        """Segna la sessione come revocata"""
        pass
