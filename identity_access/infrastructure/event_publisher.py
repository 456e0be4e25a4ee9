"""Domain Event Publishers — deliver DomainEvents after a committed state change.

Invariants:
    - publish() raises EventPublicationError on any delivery failure
    - InMemoryEventPublisher records events in publish order
    - Listeners for a key run in subscription order; the first failing listener
      aborts the publish

Design Decisions:
    - LoggingEventPublisher emits JSON lines to the Python logger: observability
      without a broker
    - In-memory listeners stand in for the event bus in tests and single-process runs
"""

import json
import logging
from typing import Awaitable, Callable

from identity_access.core.domain_types import EventKey
from identity_access.core.errors import EventPublicationError
from identity_access.core.user_entity import DomainEvent

logger = logging.getLogger(__name__)

EventListener = Callable[[DomainEvent], Awaitable[None]]


class LoggingEventPublisher:
    """Emit each event as a JSON line on the `identity_access.events` logger."""

    def __init__(self, event_logger: logging.Logger | None = None, level: int = logging.INFO):
        self._logger = event_logger or logging.getLogger("identity_access.events")
        self._level = level

    async def publish(self, event: DomainEvent) -> None:
        try:
            line = json.dumps(
                {"event_key": event.event_key.value, "payload": event.payload},
                ensure_ascii=False,
            )
        except (TypeError, ValueError) as e:
            raise EventPublicationError(
                "payload is not JSON serializable", event.event_key.value,
            ) from e
        self._logger.log(
            self._level, line, extra={"event_key": event.event_key.value},
        )


class InMemoryEventPublisher:
    """Record events and dispatch them to in-process listeners."""

    def __init__(self):
        self.events: list[DomainEvent] = []
        self._listeners: dict[EventKey, list[EventListener]] = {}

    def subscribe(self, event_key: EventKey, listener: EventListener) -> None:
        self._listeners.setdefault(event_key, []).append(listener)

    async def publish(self, event: DomainEvent) -> None:
        self.events.append(event)
        for listener in self._listeners.get(event.event_key, []):
            try:
                await listener(event)
            except EventPublicationError:
                raise
            except Exception as e:
                logger.error(
                    f"Listener {getattr(listener, '__name__', listener)!r} failed: {e}",
                    extra={"event_key": event.event_key.value},
                )
                raise EventPublicationError(
                    "listener failed", event.event_key.value,
                ) from e
