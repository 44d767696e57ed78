"""
Interfaccia comune ai servizi delle anagrafiche seguendo ISP
"""
from abc import abstractmethod
from typing import Any, Dict, Optional

from logitrack.core.interfaces import IBaseService
from logitrack.schemas.contact_schema import ContactSchema


class IContactService(IBaseService):
    """Interface per i servizi di fornitori, vettori e destinazioni"""

    @abstractmethod
    async def list_contacts(self, search: Optional[str] = None, page: int = 1, limit: int = 20) -> Dict[str, Any]:
        """Lista paginata filtrata per nome"""
        pass

    @abstractmethod
    async def get_contact(self, contact_id: str) -> Any:
        pass

    @abstractmethod
    async def create_contact(self, contact_data: ContactSchema) -> Any:
        pass

    @abstractmethod
    async def update_contact(self, contact_id: str, contact_data: ContactSchema) -> Any:
        pass

    @abstractmethod
    async def delete_contact(self, contact_id: str, confirm: bool = False) -> bool:
        """Elimina l'anagrafica; senza conferma solleva ConfirmationRequiredException"""
        pass
