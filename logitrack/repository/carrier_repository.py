"""
Carrier Repository
"""
from sqlalchemy.orm import Session

from logitrack.models.carrier import Carrier
from logitrack.repository.contact_repository import ContactRepository
from logitrack.repository.interfaces.carrier_repository_interface import ICarrierRepository


class CarrierRepository(ContactRepository, ICarrierRepository):

    def __init__(self, session: Session):
        super().__init__(session, Carrier)
