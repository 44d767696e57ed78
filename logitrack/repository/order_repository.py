"""
Order Repository
"""
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload, selectinload, load_only

from logitrack.core.base_repository import BaseRepository
from logitrack.core.exceptions import map_database_error
from logitrack.models.order import Order
from logitrack.repository.interfaces.order_repository_interface import IOrderRepository
from logitrack.services.core.query_utils import QueryUtils


class OrderRepository(BaseRepository[Order, str], IOrderRepository):

    def __init__(self, session: Session):
        super().__init__(session, Order)

    def get_with_relations(self, order_id: str) -> Optional[Order]:
        try:
            return self._session.query(Order).options(
                joinedload(Order.supplier),
                joinedload(Order.destination),
                joinedload(Order.carrier),
                selectinload(Order.documents),
            ).filter(Order.id == order_id).first()
        except SQLAlchemyError as e:
            raise map_database_error(e, self.entity_name)

    def _filtered_query(self, search: Optional[str], status: Optional[str]):
        query = self._session.query(Order)
        if search and search.strip():
            query = query.filter(QueryUtils.ilike_contains(Order.reference, search))
        if status:
            query = query.filter(Order.status == status)
        return query

    def search(self, search: Optional[str] = None, status: Optional[str] = None,
               page: int = 1, limit: int = 20) -> List[Order]:
        try:
            query = self._filtered_query(search, status).options(
                joinedload(Order.supplier),
                joinedload(Order.destination),
                joinedload(Order.carrier),
            ).order_by(Order.order_date.desc(), Order.created_at.desc())
            return self.paginate(query, page, limit).all()
        except SQLAlchemyError as e:
            raise map_database_error(e, self.entity_name)

    def count(self, search: Optional[str] = None, status: Optional[str] = None) -> int:
        try:
            return self._filtered_query(search, status).count()
        except SQLAlchemyError as e:
            raise map_database_error(e, self.entity_name)

    def get_all_for_aggregates(self) -> List[Order]:
        try:
            return self._session.query(Order).options(load_only(
                Order.id, Order.status, Order.order_value, Order.transport_price,
                Order.initial_payment_amount, Order.order_date, Order.expected_start_date,
                Order.etd, Order.ata, Order.carrier_id,
            )).all()
        except SQLAlchemyError as e:
            raise map_database_error(e, self.entity_name)
