"""
Destination Service
"""
from typing import Any, Dict, Optional

from logitrack.core.cached import cached
from logitrack.repository.interfaces.destination_repository_interface import IDestinationRepository
from logitrack.services.interfaces.destination_service_interface import IDestinationService
from logitrack.services.routers.contact_service import ContactService


class DestinationService(ContactService, IDestinationService):

    entity_type = "destination"

    def __init__(self, destination_repository: IDestinationRepository):
        super().__init__(destination_repository)

    @cached("destinations:list", preset="destinations_list")
    async def list_contacts(self, search: Optional[str] = None, page: int = 1, limit: int = 20) -> Dict[str, Any]:
        return await super().list_contacts(search=search, page=page, limit=limit)
