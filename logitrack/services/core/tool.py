"""
Funzioni di utilità condivise da schemi e servizi
"""
import re
from datetime import datetime, date, time, timezone
from pathlib import PurePath
from typing import Any, Optional


def ensure_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Porta un datetime in UTC; i valori naive sono considerati già UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def normalize_datetime(value: Any) -> Optional[datetime]:
    """
    Normalizza un valore di data in un istante ISO canonico (UTC).

    Accetta stringhe ISO-8601 (solo data o data e ora, con o senza offset),
    ``date`` e ``datetime``. Stringa vuota o solo spazi diventa None.

    Raises:
        ValueError: se la stringa non è una data valida.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return ensure_utc(value)
    if isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=timezone.utc)
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            raise ValueError(f"'{value}' is not a valid ISO-8601 date")
        return ensure_utc(parsed)
    raise ValueError(f"Unsupported date value of type {type(value).__name__}")


def to_calendar_date(value: Optional[datetime]) -> Optional[date]:
    """Riduce un istante alla sola data di calendario (UTC) per i campi del form."""
    if value is None:
        return None
    return ensure_utc(value).date()


def blank_to_none(value: Any) -> Any:
    """Stringhe vuote o di soli spazi diventano None; le altre vengono ripulite."""
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value


_UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


def sanitize_filename(filename: Optional[str], default: str = "document") -> str:
    """
    Rende un nome file sicuro come segmento di path dello storage.

    Rimuove componenti di directory, sostituisce i caratteri non ammessi con
    ``_`` ed evita nomi vuoti o composti solo da punti.
    """
    name = PurePath((filename or "").replace("\\", "/")).name
    name = _UNSAFE_FILENAME_CHARS.sub("_", name).strip("._")
    return name[:200] or default


def month_key(value: datetime) -> str:
    """Chiave mese ``YYYY-MM`` di un istante (UTC)."""
    return ensure_utc(value).strftime("%Y-%m")
