"""
Interfaccia per Carrier Repository seguendo ISP
"""
from logitrack.repository.interfaces.contact_repository_interface import IContactRepository


class ICarrierRepository(IContactRepository):
    """Interface per la repository carrier"""
    pass
