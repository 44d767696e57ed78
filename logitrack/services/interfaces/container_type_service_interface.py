from abc import abstractmethod
from typing import List

from logitrack.core.interfaces import IBaseService


class IContainerTypeService(IBaseService):

    @abstractmethod
    async def list_container_types(self) -> List[str]:
        pass

    @abstractmethod
    async def create_container_type(self, name: str) -> str:
        pass

    @abstractmethod
    async def ensure_defaults(self) -> int:
        """Inserisce i tipi di container predefiniti mancanti"""
        pass

    @abstractmethod
    async def validate_container_type(self, name: str) -> None:
        """Solleva ValidationException se il tipo non è nella lista controllata"""
        pass
