#!/usr/bin/env python3
"""
Script per inizializzare i tipi di container nel database
"""

import sys
import os
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from logitrack.database import get_db
from logitrack.models.container_type import ContainerType, DEFAULT_CONTAINER_TYPES
from logitrack.repository.container_type_repository import ContainerTypeRepository


def init_container_types(extra_names=None):
    """Inserisce i tipi di container predefiniti (e quelli passati da riga di comando) mancanti"""
    names = list(DEFAULT_CONTAINER_TYPES) + list(extra_names or [])

    db = next(get_db())

    try:
        existing_count = db.query(ContainerType).count()
        print(f"📊 Tipi di container esistenti: {existing_count}")

        inserted = ContainerTypeRepository(db).seed_defaults(names)
        if inserted:
            print(f"🎉 Inseriti {inserted} tipi di container")
        else:
            print("ℹ️  Tutti i tipi di container sono già presenti nel database!")

        print("\n📋 Tipi di container nel database:")
        for container_type in db.query(ContainerType).order_by(ContainerType.name).all():
            print(f"  {container_type.name}")

    except Exception as e:
        print(f"❌ Errore durante l'inizializzazione: {str(e)}")
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    print("🚀 Inizializzazione tipi di container")
    print("=" * 40)
    init_container_types(sys.argv[1:])
