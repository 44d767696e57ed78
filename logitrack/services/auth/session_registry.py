"""Process-wide registry of authentication session changes.

Created at application startup and torn down at shutdown. Components that
care about sign-in / sign-out (cache warmers, audit hooks, tests) subscribe
an async callback and receive an :class:`Event` for every change.
"""

from __future__ import annotations

import logging
from typing import Optional

from logitrack.events.event import Event, EventType
from logitrack.events.event_bus import EventBus, EventHandler, HandlerExecutionError

logger = logging.getLogger(__name__)

_SESSION_EVENTS = (EventType.SESSION_SIGNED_IN.value, EventType.SESSION_SIGNED_OUT.value)


class SessionRegistry:
    """Broadcasts session changes to subscribers."""

    def __init__(self, event_bus: EventBus) -> None:
        self._event_bus = event_bus

    @property
    def event_bus(self) -> EventBus:
        return self._event_bus

    async def subscribe(self, handler: EventHandler) -> None:
        for event_type in _SESSION_EVENTS:
            await self._event_bus.subscribe(event_type, handler)

    async def unsubscribe(self, handler: EventHandler) -> None:
        for event_type in _SESSION_EVENTS:
            await self._event_bus.unsubscribe(event_type, handler)

    async def signed_in(self, session_id: str, user_id: str, email: str) -> None:
        await self._publish(EventType.SESSION_SIGNED_IN, {
            "session_id": session_id,
            "user_id": user_id,
            "email": email,
        })

    async def signed_out(self, session_id: str, user_id: str, reason: str = "logout") -> None:
        await self._publish(EventType.SESSION_SIGNED_OUT, {
            "session_id": session_id,
            "user_id": user_id,
            "reason": reason,
        })

    async def close(self) -> None:
        await self._event_bus.clear()

    async def _publish(self, event_type: EventType, data: dict) -> None:
        try:
            await self._event_bus.publish(Event(event_type=event_type.value, data=data))
        except HandlerExecutionError as exc:
            # Il cambio di sessione è già persistito: un subscriber guasto non lo annulla
            logger.error(f"Session subscriber failed for {event_type.value}: {exc}")


_session_registry: Optional[SessionRegistry] = None


def init_session_registry(event_bus: Optional[EventBus] = None) -> SessionRegistry:
    """Create the process-wide registry (idempotent)."""
    global _session_registry
    if _session_registry is None:
        bus = event_bus or EventBus()
        _session_registry = SessionRegistry(bus)
        logger.info("Session registry initialised")
    return _session_registry


def set_session_registry(registry: Optional[SessionRegistry]) -> None:
    global _session_registry
    _session_registry = registry


def get_session_registry() -> SessionRegistry:
    if _session_registry is None:
        raise RuntimeError("Session registry has not been initialised")
    return _session_registry


async def close_session_registry() -> None:
    """Tear down the registry at shutdown."""
    global _session_registry
    if _session_registry is not None:
        await _session_registry.close()
        _session_registry = None
        logger.info("Session registry closed")
