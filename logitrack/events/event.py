"""Eventi di sessione pubblicati dal registro di autenticazione."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict


class EventType(str, Enum):
    SESSION_SIGNED_IN = "session_signed_in"
    SESSION_SIGNED_OUT = "session_signed_out"


@dataclass(frozen=True, slots=True)
class Event:
    """Cambio di sessione: tipo, payload e istante di emissione (UTC)."""

    event_type: str
    data: Dict[str, Any]
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def session_id(self) -> str:
        return str(self.data.get("session_id", ""))
