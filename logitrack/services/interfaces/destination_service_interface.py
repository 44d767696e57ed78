from logitrack.services.interfaces.contact_service_interface import IContactService


class IDestinationService(IContactService):
    """Interface per il servizio destination"""
