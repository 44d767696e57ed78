"""
Interfaccia per Order Service seguendo ISP
"""
from abc import abstractmethod
from typing import Any, Dict, List, Optional

from logitrack.core.interfaces import IBaseService
from logitrack.models.order import OrderStatus
from logitrack.schemas.order_schema import OrderSchema


class IOrderService(IBaseService):
    """Interface per il servizio ordini"""

    @abstractmethod
    async def list_orders(self, search: Optional[str] = None, status: Optional[OrderStatus] = None,
                          page: int = 1, limit: int = 20, locale: Optional[str] = None) -> Dict[str, Any]:
        """Ordini filtrati per riferimento e stato, dal più recente"""
        pass

    @abstractmethod
    async def get_order(self, order_id: str, locale: Optional[str] = None) -> Dict[str, Any]:
        """Ordine con nomi delle relazioni e documenti"""
        pass

    @abstractmethod
    async def get_order_form(self, order_id: str) -> Dict[str, Any]:
        """Vista del form con date ridotte al giorno"""
        pass

    @abstractmethod
    async def get_form_options(self) -> Dict[str, Any]:
        pass

    @abstractmethod
    async def create_order(self, order_data: OrderSchema, locale: Optional[str] = None) -> Dict[str, Any]:
        pass

    @abstractmethod
    async def update_order(self, order_id: str, order_data: OrderSchema,
                           locale: Optional[str] = None) -> Dict[str, Any]:
        pass

    @abstractmethod
    async def save_order_with_document(self, order_id: Optional[str], order_data: OrderSchema,
                                       filename: Optional[str] = None, content: Optional[bytes] = None,
                                       document_name: Optional[str] = None,
                                       locale: Optional[str] = None) -> Dict[str, Any]:
        """Salva l'ordine e, se presente, carica il documento allegato"""
        pass

    @abstractmethod
    async def delete_order(self, order_id: str, confirm: bool = False, locale: Optional[str] = None) -> bool:
        pass

    @abstractmethod
    async def get_statuses(self, locale: Optional[str] = None) -> List[Dict[str, str]]:
        pass
