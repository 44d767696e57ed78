"""
Interfaccia per User Service seguendo ISP
"""
from abc import abstractmethod
from typing import Any, Dict, Optional

from logitrack.core.interfaces import IBaseService
from logitrack.models.user import User, UserRole
from logitrack.schemas.user_schema import UserSchema


class IUserService(IBaseService):
    """Interface per il servizio utenti"""

    @abstractmethod
    async def list_users(self, page: int = 1, limit: int = 20, locale: Optional[str] = None) -> Dict[str, Any]:
        pass

    @abstractmethod
    async def create_user(self, user_data: UserSchema, role: UserRole = UserRole.USER) -> User:
        """Crea un account già confermato"""
        pass

    @abstractmethod
    async def signup(self, user_data: UserSchema) -> User:
        pass

    @abstractmethod
    async def delete_user(self, user_id: str, confirm: bool = False, current_user_id: Optional[str] = None) -> bool:
        pass

    @abstractmethod
    async def ensure_admin(self, email: Optional[str], password: Optional[str]) -> Optional[User]:
        """Crea l'amministratore iniziale se configurato e assente"""
        pass
