"""
Supplier Repository
"""
from sqlalchemy.orm import Session

from logitrack.models.supplier import Supplier
from logitrack.repository.contact_repository import ContactRepository
from logitrack.repository.interfaces.supplier_repository_interface import ISupplierRepository


class SupplierRepository(ContactRepository, ISupplierRepository):

    def __init__(self, session: Session):
        super().__init__(session, Supplier)
