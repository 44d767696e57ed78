from enum import Enum

from sqlalchemy import Column, String, Text, Numeric, DateTime, ForeignKey, CheckConstraint, Index
from sqlalchemy.orm import relationship

from logitrack.database import Base
from logitrack.models.contact import generate_uuid, utcnow


class OrderStatus(str, Enum):
    PENDING = "pending"
    IN_PRODUCTION = "in_production"
    IN_TRANSIT = "in_transit"
    DELIVERED = "delivered"


Money = Numeric(14, 2, asdecimal=False)


class Order(Base):
    """
        Ordine di acquisto tracciato dalla produzione alla consegna.

        Le relazioni verso fornitore, vettore e destinazione sono unidirezionali:
        l'eliminazione di un'anagrafica referenziata viene rifiutata dalla foreign key.
        I documenti allegati vengono eliminati insieme all'ordine.
    """
    __tablename__ = "orders"
    __table_args__ = (
        CheckConstraint("transport_price >= 0", name="ck_orders_transport_price"),
        CheckConstraint("order_value >= 0", name="ck_orders_order_value"),
        CheckConstraint(
            "status IN ('pending', 'in_production', 'in_transit', 'delivered')",
            name="ck_orders_status",
        ),
        Index("ix_orders_order_date", "order_date"),
    )

    id = Column(String(36), primary_key=True, default=generate_uuid)
    reference = Column(String(100), nullable=False, index=True)
    supplier_id = Column(String(36), ForeignKey("suppliers.id"), nullable=False, index=True)
    destination_id = Column(String(36), ForeignKey("destinations.id"), nullable=False, index=True)
    carrier_id = Column(String(36), ForeignKey("carriers.id"), nullable=False, index=True)
    product_description = Column(Text, nullable=True)
    container_type = Column(String(50), ForeignKey("container_types.name"), nullable=False)
    container_reference = Column(String(100), nullable=True)
    transport_price = Column(Money, nullable=False, default=0)
    order_value = Column(Money, nullable=False, default=0)
    status = Column(String(20), nullable=False, default=OrderStatus.PENDING.value, index=True)
    order_date = Column(DateTime(timezone=True), nullable=False)
    expected_start_date = Column(DateTime(timezone=True), nullable=False)
    initial_payment_date = Column(DateTime(timezone=True), nullable=True)
    initial_payment_amount = Column(Money, nullable=True)
    final_payment_date = Column(DateTime(timezone=True), nullable=True)
    final_payment_amount = Column(Money, nullable=True)
    etd = Column(DateTime(timezone=True), nullable=True)
    eta = Column(DateTime(timezone=True), nullable=True)
    ata = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    # Relazioni
    supplier = relationship("Supplier")
    destination = relationship("Destination")
    carrier = relationship("Carrier")
    documents = relationship(
        "OrderDocument",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderDocument.created_at",
    )
