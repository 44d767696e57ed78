"""
Repository comune alle anagrafiche (fornitori, vettori, destinazioni)
"""
from typing import List, Optional, Tuple, Type

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from logitrack.core.base_repository import BaseRepository
from logitrack.core.exceptions import map_database_error
from logitrack.services.core.query_utils import QueryUtils


class ContactRepository(BaseRepository):
    """Ricerca per nome e opzioni per i menu a tendina"""

    def __init__(self, session: Session, model_class: Type):
        super().__init__(session, model_class)

    def _search_query(self, search: Optional[str]):
        query = self._session.query(self._model_class)
        if search and search.strip():
            query = query.filter(QueryUtils.ilike_contains(self._model_class.name, search))
        return query

    def search(self, search: Optional[str] = None, page: int = 1, limit: int = 20) -> List:
        try:
            query = self._search_query(search).order_by(self._model_class.name, self._model_class.id)
            return self.paginate(query, page, limit).all()
        except SQLAlchemyError as e:
            raise map_database_error(e, self.entity_name)

    def count(self, search: Optional[str] = None) -> int:
        try:
            return self._search_query(search).count()
        except SQLAlchemyError as e:
            raise map_database_error(e, self.entity_name)

    def get_options(self) -> List[Tuple[str, str]]:
        try:
            rows = self._session.query(self._model_class.id, self._model_class.name) \
                .order_by(self._model_class.name).all()
            return [(row.id, row.name) for row in rows]
        except SQLAlchemyError as e:
            raise map_database_error(e, self.entity_name)
