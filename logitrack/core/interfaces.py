"""
Contratti comuni a repository e servizi.

Gli ID sono UUID serializzati come stringa; i repository lavorano su una
Session sincrona, i servizi espongono metodi async ai router.
"""
from abc import ABC, abstractmethod
from typing import Any, Generic, Optional, TypeVar

T = TypeVar('T')
K = TypeVar('K')


class IRepository(Generic[T, K], ABC):
    """Accesso CRUD a una singola tabella"""

    @abstractmethod
    def get_by_id(self, id: K) -> Optional[T]:
        pass

    @abstractmethod
    def get_by_id_or_raise(self, id: K) -> T:
        """Come get_by_id, ma solleva NotFoundException se la riga manca"""
        pass

    @abstractmethod
    def get_count(self, **filters) -> int:
        pass

    @abstractmethod
    def exists(self, id: K) -> bool:
        pass

    @abstractmethod
    def create(self, entity: T) -> T:
        pass

    @abstractmethod
    def update(self, entity: T) -> T:
        pass

    @abstractmethod
    def delete(self, id: K) -> bool:
        pass

    @abstractmethod
    def delete_entity(self, entity: T) -> bool:
        """Elimina un'entità già caricata; le violazioni FK diventano ReferentialIntegrityException"""
        pass


class IBaseService(ABC):

    @abstractmethod
    async def validate_business_rules(self, data: Any) -> None:
        """Controlli che lo schema Pydantic non può esprimere (es. riferimenti esistenti)"""
        pass
