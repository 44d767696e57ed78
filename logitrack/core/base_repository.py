"""
Repository SQLAlchemy di base: CRUD, conteggi e paginazione.

Ogni SQLAlchemyError passa da map_database_error, così i servizi vedono solo
eccezioni applicative (NotFound, AlreadyExists, ReferentialIntegrity).
"""
import logging
from typing import Generic, TypeVar, Optional, Dict, Any, Type, Union

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from logitrack.core.interfaces import IRepository
from logitrack.core.exceptions import NotFoundException, map_database_error

logger = logging.getLogger(__name__)

T = TypeVar('T')
K = TypeVar('K')


class BaseRepository(Generic[T, K], IRepository[T, K]):
    """Repository base con implementazioni comuni seguendo DRY e SRP"""

    def __init__(self, session: Session, model_class: Type[T]):
        self._session = session
        self._model_class = model_class

    @property
    def entity_name(self) -> str:
        return self._model_class.__name__

    def get_by_id(self, id: K) -> Optional[T]:
        """Ottiene un'entità per ID"""
        try:
            return self._session.get(self._model_class, id)
        except SQLAlchemyError as e:
            raise map_database_error(e, self.entity_name)

    def get_by_id_or_raise(self, id: K) -> T:
        """Ottiene un'entità per ID o lancia NotFoundException"""
        entity = self.get_by_id(id)
        if not entity:
            raise NotFoundException(self.entity_name, id)
        return entity

    def get_count(self, **filters) -> int:
        """Conta le entità con filtri opzionali"""
        try:
            query = self._session.query(self._model_class)
            query = self._apply_filters(query, filters)
            return query.count()
        except SQLAlchemyError as e:
            raise map_database_error(e, self.entity_name)

    def exists(self, id: K) -> bool:
        """Verifica se un'entità esiste"""
        return self.get_by_id(id) is not None

    def create(self, entity: Union[T, dict]) -> T:
        """Crea una nuova entità"""
        if isinstance(entity, dict):
            entity = self._model_class(**entity)
        elif not isinstance(entity, self._model_class):
            if not hasattr(entity, 'model_dump'):
                raise ValueError(f"Cannot create {self.entity_name} from {type(entity).__name__}")
            entity = self._model_class(**entity.model_dump())

        try:
            self._session.add(entity)
            self._session.commit()
            self._session.refresh(entity)
            return entity
        except SQLAlchemyError as e:
            self._session.rollback()
            logger.warning(f"Database error creating {self.entity_name}: {e}")
            raise map_database_error(e, self.entity_name)

    def update(self, entity: T) -> T:
        """Aggiorna un'entità esistente"""
        try:
            self._session.add(entity)
            self._session.commit()
            self._session.refresh(entity)
            return entity
        except SQLAlchemyError as e:
            self._session.rollback()
            logger.warning(f"Database error updating {self.entity_name}: {e}")
            raise map_database_error(e, self.entity_name)

    def delete(self, id: K) -> bool:
        """Elimina un'entità per ID"""
        entity = self.get_by_id_or_raise(id)
        return self.delete_entity(entity)

    def delete_entity(self, entity: T) -> bool:
        """Elimina un'entità esistente"""
        try:
            self._session.delete(entity)
            self._session.commit()
            return True
        except SQLAlchemyError as e:
            self._session.rollback()
            logger.warning(f"Database error deleting {self.entity_name}: {e}")
            raise map_database_error(e, self.entity_name)

    def _apply_filters(self, query, filters: Dict[str, Any]):
        """Uguaglianza per valori singoli, IN per collezioni; i None sono ignorati"""
        for field_name, value in filters.items():
            if value is None:
                continue

            field = getattr(self._model_class, field_name)
            if isinstance(value, (list, tuple, set)):
                query = query.filter(field.in_(value))
            else:
                query = query.filter(field == value)

        return query

    def paginate(self, query, page: int = 1, limit: int = 10):
        """Applica paginazione a una query"""
        return query.offset(self.get_offset(limit, page)).limit(limit)

    def get_offset(self, limit: int, page: int) -> int:
        """Calcola l'offset per la paginazione"""
        return (page - 1) * limit

