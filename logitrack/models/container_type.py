from sqlalchemy import Column, String

from logitrack.database import Base

DEFAULT_CONTAINER_TYPES = ["20' DC", "40' DC", "40' HC", "20' RF", "40' RF", "45' HC"]


class ContainerType(Base):
    __tablename__ = "container_types"

    name = Column(String(50), primary_key=True)
