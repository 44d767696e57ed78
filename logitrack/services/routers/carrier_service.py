"""
Carrier Service
"""
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from logitrack.core.cached import cached
from logitrack.repository.interfaces.carrier_repository_interface import ICarrierRepository
from logitrack.repository.interfaces.order_repository_interface import IOrderRepository
from logitrack.schemas.dashboard_schema import CarrierStatsSchema
from logitrack.services import dashboard_stats
from logitrack.services.interfaces.carrier_service_interface import ICarrierService
from logitrack.services.routers.contact_service import ContactService


class CarrierService(ContactService, ICarrierService):

    entity_type = "carrier"

    def __init__(self, carrier_repository: ICarrierRepository, order_repository: IOrderRepository):
        super().__init__(carrier_repository)
        self._order_repository = order_repository

    @cached("carriers:list", preset="carriers_list")
    async def list_contacts(self, search: Optional[str] = None, page: int = 1, limit: int = 20) -> Dict[str, Any]:
        return await super().list_contacts(search=search, page=page, limit=limit)

    @cached("carriers:stats", preset="dashboard")
    async def get_carrier_stats(self) -> List[Dict[str, Any]]:
        stats = dashboard_stats.carrier_stats(
            self._order_repository.get_all_for_aggregates(),
            self._repository.get_options(),
            datetime.now(timezone.utc),
        )
        return [CarrierStatsSchema(**entry).model_dump(mode="json") for entry in stats]
