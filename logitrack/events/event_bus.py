"""Bus asincrono in-process per gli eventi di sessione."""

from __future__ import annotations

import asyncio
import logging
from collections import defaultdict
from typing import Awaitable, Callable, Dict, List, Optional, Tuple

from .event import Event

logger = logging.getLogger(__name__)

EventHandler = Callable[[Event], Awaitable[None]]


class HandlerExecutionError(Exception):
    """Uno o più subscriber hanno sollevato un'eccezione durante la pubblicazione."""

    def __init__(self, event: Event, failures: List[Tuple[EventHandler, BaseException]]):
        self.event = event
        self.failures = failures
        names = ", ".join(getattr(handler, "__qualname__", repr(handler)) for handler, _ in failures)
        super().__init__(f"{len(failures)} handler(s) failed for '{event.event_type}': {names}")


class EventBus:
    """
    Smista ogni evento a tutti i subscriber registrati per il suo tipo.

    I subscriber girano in parallelo; un fallimento non blocca gli altri e viene
    riportato in un unico HandlerExecutionError al termine.
    """

    def __init__(self, *, max_concurrent_handlers: Optional[int] = None) -> None:
        self._handlers: Dict[str, set[EventHandler]] = defaultdict(set)
        self._lock = asyncio.Lock()
        self._semaphore = (
            asyncio.Semaphore(max_concurrent_handlers)
            if max_concurrent_handlers and max_concurrent_handlers > 0
            else None
        )

    async def subscribe(self, event_type: str, handler: EventHandler) -> None:
        if not asyncio.iscoroutinefunction(handler):
            raise TypeError("Event handler must be an async function")

        async with self._lock:
            self._handlers[event_type].add(handler)
        logger.debug(f"Handler {handler} subscribed to '{event_type}'")

    async def unsubscribe(self, event_type: str, handler: EventHandler) -> None:
        async with self._lock:
            handlers = self._handlers.get(event_type)
            if handlers is None:
                return
            handlers.discard(handler)
            if not handlers:
                del self._handlers[event_type]

    def handler_count(self, event_type: str) -> int:
        return len(self._handlers.get(event_type, ()))

    async def clear(self) -> None:
        async with self._lock:
            self._handlers.clear()

    async def publish(self, event: Event) -> None:
        async with self._lock:
            handlers = tuple(self._handlers.get(event.event_type, ()))

        if not handlers:
            return

        results = await asyncio.gather(
            *(self._run(handler, event) for handler in handlers),
            return_exceptions=True,
        )
        failures = [
            (handler, result)
            for handler, result in zip(handlers, results)
            if isinstance(result, Exception)
        ]
        for handler, exc in failures:
            logger.error(f"Handler {handler} failed for '{event.event_type}': {exc}", exc_info=exc)
        if failures:
            raise HandlerExecutionError(event, failures)

    async def _run(self, handler: EventHandler, event: Event) -> None:
        if self._semaphore is None:
            await handler(event)
            return
        async with self._semaphore:
            await handler(event)
