"""
Interfaccia per Supplier Repository seguendo ISP
"""
from logitrack.repository.interfaces.contact_repository_interface import IContactRepository


class ISupplierRepository(IContactRepository):
    """Interface per la repository supplier"""
    pass
