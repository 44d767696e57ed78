"""
Interfaccia per User Repository seguendo ISP
"""
from abc import abstractmethod
from typing import List, Optional

from logitrack.core.interfaces import IRepository
from logitrack.models.user import User


class IUserRepository(IRepository[User, str]):
    """Interface per la repository degli utenti"""

    @abstractmethod
    def get_by_email(self, email: str) -> Optional[User]:
        """Ottiene un utente per email (case insensitive)"""
        pass

    @abstractmethod
    def list_users(self, page: int = 1, limit: int = 20) -> List[User]:
        """Utenti in ordine di creazione decrescente"""
        pass
