"""
Factory per gli ordini
"""
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from logitrack.models.order import Order, OrderStatus
from tests.factories.contact_factory import create_carrier, create_destination, create_supplier


def create_relations(db: Session) -> Dict[str, str]:
    """Crea fornitore, vettore e destinazione e ne restituisce gli id"""
    return {
        "supplier_id": create_supplier(db).id,
        "carrier_id": create_carrier(db).id,
        "destination_id": create_destination(db).id,
    }


def create_order_data(relations: Dict[str, str], **overrides) -> Dict[str, Any]:
    """Payload JSON per la creazione di un ordine"""
    data = {
        "reference": "PO-2024-001",
        "supplier_id": relations["supplier_id"],
        "destination_id": relations["destination_id"],
        "carrier_id": relations["carrier_id"],
        "product_description": "Cortiça natural",
        "container_type": "40' HC",
        "container_reference": "MSKU1234567",
        "transport_price": 2500.0,
        "order_value": 1000.0,
        "status": "pending",
        "order_date": "2024-03-10",
        "expected_start_date": "2024-04-01",
        "initial_payment_amount": 400.0,
    }
    data.update(overrides)
    return data


def create_order(db: Session, relations: Optional[Dict[str, str]] = None, **overrides) -> Order:
    """Inserisce un ordine direttamente nel database"""
    relations = relations or create_relations(db)
    values = {
        "reference": "PO-2024-001",
        "container_type": "40' HC",
        "transport_price": 2500.0,
        "order_value": 1000.0,
        "status": OrderStatus.PENDING.value,
        "order_date": datetime(2024, 3, 10, tzinfo=timezone.utc),
        "expected_start_date": datetime(2024, 4, 1, tzinfo=timezone.utc),
        **relations,
    }
    values.update(overrides)
    order = Order(**values)
    db.add(order)
    db.commit()
    db.refresh(order)
    return order
