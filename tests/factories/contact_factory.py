"""
Factory per fornitori, vettori e destinazioni
"""
from typing import Any, Dict, Type

from sqlalchemy.orm import Session

from logitrack.models.carrier import Carrier
from logitrack.models.destination import Destination
from logitrack.models.supplier import Supplier


def create_contact_data(name: str = "Acme Lda", **overrides) -> Dict[str, Any]:
    data = {
        "name": name,
        "address": "Rua Augusta 10",
        "country": "Portugal",
        "email": "info@acme.pt",
        "phone": "+351 210 000 000",
    }
    data.update(overrides)
    return data


def _create(db: Session, model: Type, name: str, **overrides):
    entity = model(**create_contact_data(name, **overrides))
    db.add(entity)
    db.commit()
    db.refresh(entity)
    return entity


def create_supplier(db: Session, name: str = "Acme Lda", **overrides) -> Supplier:
    return _create(db, Supplier, name, **overrides)


def create_carrier(db: Session, name: str = "Maersk", **overrides) -> Carrier:
    return _create(db, Carrier, name, **overrides)


def create_destination(db: Session, name: str = "Porto de Leixões", **overrides) -> Destination:
    return _create(db, Destination, name, **overrides)
