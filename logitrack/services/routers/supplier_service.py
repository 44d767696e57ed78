"""
Supplier Service
"""
from typing import Any, Dict, Optional

from logitrack.core.cached import cached
from logitrack.repository.interfaces.supplier_repository_interface import ISupplierRepository
from logitrack.services.interfaces.supplier_service_interface import ISupplierService
from logitrack.services.routers.contact_service import ContactService


class SupplierService(ContactService, ISupplierService):

    entity_type = "supplier"

    def __init__(self, supplier_repository: ISupplierRepository):
        super().__init__(supplier_repository)

    @cached("suppliers:list", preset="suppliers_list")
    async def list_contacts(self, search: Optional[str] = None, page: int = 1, limit: int = 20) -> Dict[str, Any]:
        return await super().list_contacts(search=search, page=page, limit=limit)
