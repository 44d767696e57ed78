#!/usr/bin/env python3
"""
Script per creare l'account amministratore iniziale

Uso:
    python scripts/init_admin.py admin@example.com password
    (senza argomenti usa ADMIN_EMAIL e ADMIN_PASSWORD)
"""

import asyncio
import sys
import os
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from logitrack.core.container_config import get_configured_container
from logitrack.core.settings import get_app_settings
from logitrack.database import SessionLocal
from logitrack.services.interfaces.user_service_interface import IUserService


async def init_admin(email: str, password: str):
    db = SessionLocal()
    try:
        user_service = get_configured_container().resolve_with_session(IUserService, db)
        admin = await user_service.ensure_admin(email, password)
        if admin is None:
            print("⚠️  Email e password obbligatorie")
            return
        print(f"✅ Amministratore disponibile: {admin.email} (ruolo {admin.role})")
    except Exception as e:
        print(f"❌ Errore durante la creazione dell'amministratore: {str(e)}")
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    settings = get_app_settings()
    email = sys.argv[1] if len(sys.argv) > 1 else settings.admin_email
    password = sys.argv[2] if len(sys.argv) > 2 else settings.admin_password

    print("🚀 Creazione amministratore")
    print("=" * 40)
    asyncio.run(init_admin(email, password))
