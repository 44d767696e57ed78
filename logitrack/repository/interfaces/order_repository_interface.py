"""
Interfaccia per Order Repository seguendo ISP
"""
from abc import abstractmethod
from typing import List, Optional

from logitrack.core.interfaces import IRepository
from logitrack.models.order import Order


class IOrderRepository(IRepository[Order, str]):
    """Interface per la repository degli ordini"""

    @abstractmethod
    def get_with_relations(self, order_id: str) -> Optional[Order]:
        """Ordine con anagrafiche e documenti caricati"""
        pass

    @abstractmethod
    def search(self, search: Optional[str] = None, status: Optional[str] = None,
               page: int = 1, limit: int = 20) -> List[Order]:
        """Ordini filtrati per riferimento e stato, ordinati per data ordine decrescente"""
        pass

    @abstractmethod
    def count(self, search: Optional[str] = None, status: Optional[str] = None) -> int:
        """Conta gli ordini che soddisfano i filtri"""
        pass

    @abstractmethod
    def get_all_for_aggregates(self) -> List[Order]:
        """Tutti gli ordini, per il calcolo delle statistiche"""
        pass
