"""
Interfaccia per ContainerType Repository seguendo ISP
"""
from abc import abstractmethod
from typing import List

from logitrack.core.interfaces import IRepository
from logitrack.models.container_type import ContainerType


class IContainerTypeRepository(IRepository[ContainerType, str]):
    """Interface per la repository dei tipi di container"""

    @abstractmethod
    def list_names(self) -> List[str]:
        """Nomi dei tipi di container in ordine alfabetico"""
        pass

    @abstractmethod
    def seed_defaults(self, names: List[str]) -> int:
        """Inserisce i nomi mancanti; ritorna quanti ne ha aggiunti"""
        pass
