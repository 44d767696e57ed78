from sqlalchemy import Column, String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from logitrack.database import Base
from logitrack.models.contact import generate_uuid, utcnow


class OrderDocument(Base):
    """Documento allegato a un ordine; ``file_url`` è il path nello storage, non un URL pubblico."""
    __tablename__ = "order_documents"
    __table_args__ = (
        UniqueConstraint("file_url", name="uq_order_documents_file_url"),
    )

    id = Column(String(36), primary_key=True, default=generate_uuid)
    order_id = Column(String(36), ForeignKey("orders.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    file_url = Column(String(500), nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    order = relationship("Order", back_populates="documents")
