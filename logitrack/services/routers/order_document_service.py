"""
Gestione dei documenti allegati agli ordini.

Il caricamento avviene in due passi: prima il file nello storage, poi la riga
dei metadati. Se il secondo passo fallisce il file appena scritto viene
rimosso prima di propagare l'errore.
"""
import logging
from typing import Any, Dict, List, Optional

from logitrack.core.exceptions import BaseApplicationException, ErrorCode, ValidationException
from logitrack.core.invalidation import invalidate_entity
from logitrack.core.settings import get_app_settings
from logitrack.models.order_document import OrderDocument
from logitrack.repository.interfaces.order_document_repository_interface import IOrderDocumentRepository
from logitrack.repository.interfaces.order_repository_interface import IOrderRepository
from logitrack.schemas.order_document_schema import OrderDocumentResponseSchema
from logitrack.services.core.tool import sanitize_filename
from logitrack.services.interfaces.order_document_service_interface import IOrderDocumentService
from logitrack.services.storage.document_storage import IDocumentStorage

logger = logging.getLogger(__name__)


def serialize_document(document: OrderDocument, storage: IDocumentStorage) -> Dict[str, Any]:
    """Metadati del documento con l'URL pubblico risolto dal path"""
    return OrderDocumentResponseSchema(
        id=document.id,
        order_id=document.order_id,
        name=document.name,
        file_url=document.file_url,
        public_url=storage.get_public_url(document.file_url),
        created_at=document.created_at,
    ).model_dump(mode="json")


class OrderDocumentService(IOrderDocumentService):

    def __init__(self,
                 order_document_repository: IOrderDocumentRepository,
                 order_repository: IOrderRepository,
                 document_storage: IDocumentStorage):
        self._order_document_repository = order_document_repository
        self._order_repository = order_repository
        self._storage = document_storage

    async def upload_document(self, order_id: str, filename: Optional[str], content: bytes,
                              name: Optional[str] = None) -> Dict[str, Any]:
        self._order_repository.get_by_id_or_raise(order_id)
        await self.validate_business_rules(content)

        safe_name = sanitize_filename(filename)
        path = f"{order_id}/{safe_name}"
        await self._storage.upload(path, content)

        try:
            document = self._order_document_repository.create(OrderDocument(
                order_id=order_id,
                name=(name or "").strip() or safe_name,
                file_url=path,
            ))
        except BaseApplicationException:
            removed = await self._storage.remove(path)
            logger.warning(f"Registrazione documento fallita per {path}, file rimosso: {removed}")
            raise

        await invalidate_entity("order_document")
        logger.info(f"Documento {document.id} caricato per l'ordine {order_id}")
        return serialize_document(document, self._storage)

    async def list_documents(self, order_id: str) -> List[Dict[str, Any]]:
        self._order_repository.get_by_id_or_raise(order_id)
        documents = self._order_document_repository.get_by_order(order_id)
        return [serialize_document(document, self._storage) for document in documents]

    async def rename_document(self, document_id: str, name: str) -> Dict[str, Any]:
        document = self._order_document_repository.get_by_id_or_raise(document_id)
        document.name = name.strip()
        document = self._order_document_repository.update(document)
        await invalidate_entity("order_document")
        return serialize_document(document, self._storage)

    async def delete_document(self, document_id: str) -> bool:
        document = self._order_document_repository.get_by_id_or_raise(document_id)
        path = document.file_url
        self._order_document_repository.delete_entity(document)
        await invalidate_entity("order_document")

        if not await self._storage.remove(path):
            logger.warning(f"Oggetto {path} non trovato nello storage durante l'eliminazione del documento")
        return True

    async def validate_business_rules(self, data: Any) -> None:
        if not data:
            raise ValidationException(
                "The uploaded file is empty",
                ErrorCode.VALIDATION_ERROR,
                {"field": "file"}
            )
        max_size = get_app_settings().document_max_size
        if len(data) > max_size:
            raise ValidationException(
                f"The file exceeds the maximum size of {max_size} bytes",
                ErrorCode.VALIDATION_ERROR,
                {"field": "file", "max_size": max_size}
            )
