"""
User Repository
"""
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from logitrack.core.base_repository import BaseRepository
from logitrack.core.exceptions import map_database_error
from logitrack.models.user import User
from logitrack.repository.interfaces.user_repository_interface import IUserRepository


class UserRepository(BaseRepository[User, str], IUserRepository):

    def __init__(self, session: Session):
        super().__init__(session, User)

    def get_by_email(self, email: str) -> Optional[User]:
        try:
            return self._session.query(User).filter(func.lower(User.email) == email.strip().lower()).first()
        except SQLAlchemyError as e:
            raise map_database_error(e, self.entity_name)

    def list_users(self, page: int = 1, limit: int = 20) -> List[User]:
        try:
            query = self._session.query(User).order_by(User.created_at.desc(), User.email)
            return self.paginate(query, page, limit).all()
        except SQLAlchemyError as e:
            raise map_database_error(e, self.entity_name)
