"""
ContainerType Repository
"""
from typing import List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from logitrack.core.base_repository import BaseRepository
from logitrack.core.exceptions import map_database_error
from logitrack.models.container_type import ContainerType
from logitrack.repository.interfaces.container_type_repository_interface import IContainerTypeRepository


class ContainerTypeRepository(BaseRepository[ContainerType, str], IContainerTypeRepository):

    def __init__(self, session: Session):
        super().__init__(session, ContainerType)

    def list_names(self) -> List[str]:
        try:
            return [row.name for row in self._session.query(ContainerType.name).order_by(ContainerType.name).all()]
        except SQLAlchemyError as e:
            raise map_database_error(e, self.entity_name)

    def seed_defaults(self, names: List[str]) -> int:
        existing = set(self.list_names())
        missing = [name for name in names if name not in existing]
        if not missing:
            return 0
        try:
            self._session.add_all([ContainerType(name=name) for name in missing])
            self._session.commit()
            return len(missing)
        except SQLAlchemyError as e:
            self._session.rollback()
            raise map_database_error(e, self.entity_name)
