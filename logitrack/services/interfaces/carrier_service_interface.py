from abc import abstractmethod
from typing import Any, Dict, List

from logitrack.services.interfaces.contact_service_interface import IContactService


class ICarrierService(IContactService):
    """Interface per il servizio carrier"""

    @abstractmethod
    async def get_carrier_stats(self) -> List[Dict[str, Any]]:
        """Trasporti totali e attivi, prezzo medio e variazione per ogni vettore"""
        pass
