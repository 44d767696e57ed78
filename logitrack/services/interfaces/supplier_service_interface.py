from logitrack.services.interfaces.contact_service_interface import IContactService


class ISupplierService(IContactService):
    """Interface per il servizio supplier"""
