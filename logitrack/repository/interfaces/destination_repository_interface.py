"""
Interfaccia per Destination Repository seguendo ISP
"""
from logitrack.repository.interfaces.contact_repository_interface import IContactRepository


class IDestinationRepository(IContactRepository):
    """Interface per la repository destination"""
    pass
