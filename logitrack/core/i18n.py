"""
Localized labels for order statuses and user-facing enums
"""
from typing import Dict, Optional

from logitrack.core.settings import get_app_settings

SUPPORTED_LOCALES = ("en-US", "pt-PT", "pt-BR")

# Alias accettati da Accept-Language / ?lang=
_LOCALE_ALIASES = {
    "en": "en-US",
    "en-us": "en-US",
    "en-gb": "en-US",
    "pt": "pt-PT",
    "pt-pt": "pt-PT",
    "pt-br": "pt-BR",
}

STATUS_LABELS: Dict[str, Dict[str, str]] = {
    "en-US": {
        "pending": "Pending",
        "in_production": "In Production",
        "in_transit": "In Transit",
        "delivered": "Delivered",
    },
    "pt-PT": {
        "pending": "Pendente",
        "in_production": "Em Produção",
        "in_transit": "Em Trânsito",
        "delivered": "Entregue",
    },
    "pt-BR": {
        "pending": "Pendente",
        "in_production": "Em Produção",
        "in_transit": "Em Trânsito",
        "delivered": "Entregue",
    },
}

# Tono del badge, indipendente dalla lingua
STATUS_COLORS: Dict[str, str] = {
    "pending": "neutral",
    "in_production": "warning",
    "in_transit": "info",
    "delivered": "success",
}

ACCOUNT_STATUS_LABELS: Dict[str, Dict[str, str]] = {
    "en-US": {"confirmed": "Confirmed", "pending": "Pending"},
    "pt-PT": {"confirmed": "Confirmado", "pending": "Pendente"},
    "pt-BR": {"confirmed": "Confirmado", "pending": "Pendente"},
}


def resolve_locale(value: Optional[str]) -> str:
    """
    Risolve un valore di ``?lang=`` o un header Accept-Language in una locale supportata.

    Prende la prima lingua dell'header (ignorando i pesi ``q``); se nessuna
    corrisponde ritorna la locale di default configurata.
    """
    default = get_app_settings().default_locale
    if not value:
        return default

    for part in value.split(","):
        tag = part.split(";")[0].strip().lower()
        if not tag:
            continue
        if tag in _LOCALE_ALIASES:
            return _LOCALE_ALIASES[tag]
        primary = tag.split("-")[0]
        if primary in _LOCALE_ALIASES:
            return _LOCALE_ALIASES[primary]
    return default


def status_label(status: str, locale: str) -> str:
    labels = STATUS_LABELS.get(locale, STATUS_LABELS["pt-PT"])
    return labels.get(status, status)


def status_badge(status: str, locale: str) -> Dict[str, str]:
    """Badge di stato: valore, etichetta localizzata e colore"""
    return {
        "value": status,
        "label": status_label(status, locale),
        "color": STATUS_COLORS.get(status, "neutral"),
    }


def account_status_label(confirmed: bool, locale: str) -> str:
    labels = ACCOUNT_STATUS_LABELS.get(locale, ACCOUNT_STATUS_LABELS["pt-PT"])
    return labels["confirmed" if confirmed else "pending"]
