from logitrack.database import Base
from logitrack.models.contact import ContactMixin


class Supplier(ContactMixin, Base):
    __tablename__ = "suppliers"
