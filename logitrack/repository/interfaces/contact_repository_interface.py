"""
Interfaccia comune ai repository delle anagrafiche seguendo ISP
"""
from abc import abstractmethod
from typing import Any, List, Optional, Tuple

from logitrack.core.interfaces import IRepository


class IContactRepository(IRepository[Any, str]):
    """Interface per i repository di fornitori, vettori e destinazioni"""

    @abstractmethod
    def search(self, search: Optional[str] = None, page: int = 1, limit: int = 20) -> List[Any]:
        """Lista filtrata per nome (case insensitive), ordinata per nome"""
        pass

    @abstractmethod
    def count(self, search: Optional[str] = None) -> int:
        """Conta le anagrafiche che soddisfano la ricerca"""
        pass

    @abstractmethod
    def get_options(self) -> List[Tuple[str, str]]:
        """Coppie (id, nome) ordinate per nome"""
        pass
