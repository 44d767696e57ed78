from logitrack.database import Base
from logitrack.models.contact import ContactMixin


class Carrier(ContactMixin, Base):
    __tablename__ = "carriers"
