"""
OrderDocument Repository
"""
from typing import List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from logitrack.core.base_repository import BaseRepository
from logitrack.core.exceptions import map_database_error
from logitrack.models.order_document import OrderDocument
from logitrack.repository.interfaces.order_document_repository_interface import IOrderDocumentRepository


class OrderDocumentRepository(BaseRepository[OrderDocument, str], IOrderDocumentRepository):

    def __init__(self, session: Session):
        super().__init__(session, OrderDocument)

    def get_by_order(self, order_id: str) -> List[OrderDocument]:
        try:
            return self._session.query(OrderDocument) \
                .filter(OrderDocument.order_id == order_id) \
                .order_by(OrderDocument.created_at, OrderDocument.name).all()
        except SQLAlchemyError as e:
            raise map_database_error(e, self.entity_name)
