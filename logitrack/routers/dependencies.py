"""
Dipendenze per i router
"""
from typing import Optional

from fastapi import Header, Query

from logitrack.core.i18n import resolve_locale
from logitrack.core.settings import get_app_settings

# Costanti per paginazione
LIMIT_DEFAULT = get_app_settings().limit_default
MAX_LIMIT = get_app_settings().max_limit


def get_locale(
    lang: Optional[str] = Query(None, description="Lingua delle etichette (en-US, pt-PT, pt-BR)"),
    accept_language: Optional[str] = Header(None),
) -> str:
    """Locale per le etichette: ``?lang=`` ha la precedenza su Accept-Language"""
    return resolve_locale(lang or accept_language)
