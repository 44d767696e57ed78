"""
Interfaccia per OrderDocument Repository seguendo ISP
"""
from abc import abstractmethod
from typing import List

from logitrack.core.interfaces import IRepository
from logitrack.models.order_document import OrderDocument


class IOrderDocumentRepository(IRepository[OrderDocument, str]):
    """Interface per la repository dei documenti ordine"""

    @abstractmethod
    def get_by_order(self, order_id: str) -> List[OrderDocument]:
        """Documenti di un ordine in ordine di caricamento"""
        pass
