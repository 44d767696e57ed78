from abc import abstractmethod
from typing import Any, Dict, List, Optional

from logitrack.core.interfaces import IBaseService


class IOrderDocumentService(IBaseService):
    """Interface per i documenti allegati agli ordini"""

    @abstractmethod
    async def upload_document(self, order_id: str, filename: Optional[str], content: bytes,
                              name: Optional[str] = None) -> Dict[str, Any]:
        """Salva il file nello storage e ne registra i metadati"""
        pass

    @abstractmethod
    async def list_documents(self, order_id: str) -> List[Dict[str, Any]]:
        pass

    @abstractmethod
    async def rename_document(self, document_id: str, name: str) -> Dict[str, Any]:
        pass

    @abstractmethod
    async def delete_document(self, document_id: str) -> bool:
        pass
