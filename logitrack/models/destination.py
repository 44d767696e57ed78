from logitrack.database import Base
from logitrack.models.contact import ContactMixin


class Destination(ContactMixin, Base):
    __tablename__ = "destinations"
