"""
Destination Repository
"""
from sqlalchemy.orm import Session

from logitrack.models.destination import Destination
from logitrack.repository.contact_repository import ContactRepository
from logitrack.repository.interfaces.destination_repository_interface import IDestinationRepository


class DestinationRepository(ContactRepository, IDestinationRepository):

    def __init__(self, session: Session):
        super().__init__(session, Destination)
