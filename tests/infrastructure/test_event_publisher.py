"""Domain Event Publishers — logging and in-memory delivery."""

import json
import logging

import pytest

from identity_access.core.domain_types import EventKey
from identity_access.core.errors import EventPublicationError
from identity_access.core.user_entity import DomainEvent
from identity_access.infrastructure.event_publisher import (
    InMemoryEventPublisher, LoggingEventPublisher,
)

EVENT = DomainEvent(EventKey.USER_CREATED, {"email": "new@example.com"})


async def test_logging_publisher_emits_json_line(caplog):
    publisher = LoggingEventPublisher()
    with caplog.at_level(logging.INFO, logger="identity_access.events"):
        await publisher.publish(EVENT)
    record = next(r for r in caplog.records if r.name == "identity_access.events")
    assert json.loads(record.getMessage()) == {
        "event_key": "user_created", "payload": {"email": "new@example.com"},
    }
    assert record.event_key == "user_created"


async def test_logging_publisher_rejects_unserializable_payload():
    publisher = LoggingEventPublisher()
    with pytest.raises(EventPublicationError):
        await publisher.publish(DomainEvent(EventKey.USER_CREATED, {"email": object()}))


async def test_in_memory_publisher_records_and_dispatches_in_order():
    publisher = InMemoryEventPublisher()
    seen = []

    async def first(event):
        seen.append(("first", event.payload["email"]))

    async def second(event):
        seen.append(("second", event.payload["email"]))

    publisher.subscribe(EventKey.USER_CREATED, first)
    publisher.subscribe(EventKey.USER_CREATED, second)
    await publisher.publish(EVENT)

    assert publisher.events == [EVENT]
    assert seen == [("first", "new@example.com"), ("second", "new@example.com")]


async def test_failing_listener_raises_publication_error():
    publisher = InMemoryEventPublisher()

    async def broken(event):
        raise RuntimeError("mailer offline")

    publisher.subscribe(EventKey.USER_CREATED, broken)
    with pytest.raises(EventPublicationError) as exc_info:
        await publisher.publish(EVENT)
    assert exc_info.value.event_key == "user_created"
