"""Step Chain — tests for the async railway combinator.

Tests cover:
    - chain() stops at the first Err and never calls later steps
    - gather() preserves argument order regardless of completion order
    - perform() maps raised errors onto the Err track and logs with the step tag
    - validated() logs failures only
    - Failure log level follows error severity; exception messages stay out of logs
"""

import asyncio
import logging

import pytest

from identity_access.core.errors import (
    ConflictError, EntityConstructionError, HashingError, PersistenceError,
    ValidationError,
)
from identity_access.core.result import Ok, Err
from identity_access.services.step_chain import (
    chain, gather, perform, right, validated,
)

logger = logging.getLogger("tests.step_chain")


async def _failed(error):
    return Err(error)


async def test_chain_threads_values_through_steps():
    result = await chain(
        right(1),
        lambda v: right(v + 1),
        lambda v: Ok(v * 10),
    )
    assert result == Ok(20)


async def test_chain_short_circuits_on_first_err():
    calls = []
    error = ConflictError()

    async def record(v):
        calls.append(v)
        return Ok(v)

    result = await chain(right(1), lambda _: _failed(error), record, record)
    assert result == Err(error)
    assert calls == []


async def test_chain_with_failing_first_step_calls_nothing():
    calls = []
    result = await chain(_failed(ConflictError()), lambda v: calls.append(v))
    assert isinstance(result, Err)
    assert calls == []


async def test_gather_keeps_argument_order():
    async def delayed(value, delay):
        await asyncio.sleep(delay)
        return Ok(value)

    result = await gather(delayed("id", 0.03), delayed("email", 0.0), delayed("pw", 0.01))
    assert result == Ok(("id", "email", "pw"))


async def test_gather_reports_first_err_in_argument_order():
    async def failing(field, delay):
        await asyncio.sleep(delay)
        return Err(ValidationError(field, "bad"))

    result = await gather(right(1), failing("email", 0.02), failing("password", 0.0))
    assert result.error.field == "email"


async def test_gather_runs_steps_concurrently():
    started = []

    async def step(name):
        started.append(name)
        await asyncio.sleep(0.01)
        return Ok(name)

    first = asyncio.ensure_future(gather(step("a"), step("b")))
    await asyncio.sleep(0.005)
    assert sorted(started) == ["a", "b"]
    assert await first == Ok(("a", "b"))


async def test_perform_wraps_return_value():
    async def double(v):
        return v * 2

    result = await perform(double, 21, logger=logger, tag="double", on_error=HashingError)
    assert result == Ok(42)


async def test_perform_passes_identity_errors_through_unchanged():
    error = PersistenceError("disk full")

    async def boom():
        raise error

    result = await perform(boom, logger=logger, tag="save", on_error=HashingError)
    assert result.error is error


async def test_perform_wraps_unexpected_exceptions(caplog):
    async def boom():
        raise KeyError("secret")

    with caplog.at_level(logging.ERROR, logger="tests.step_chain"):
        result = await perform(boom, logger=logger, tag="hash", on_error=HashingError)

    assert isinstance(result.error, HashingError)
    assert "KeyError" in result.error.message
    assert any(getattr(r, "step", None) == "hash" for r in caplog.records)


async def test_perform_logs_invocation_at_debug(caplog):
    async def noop():
        return None

    with caplog.at_level(logging.DEBUG, logger="tests.step_chain"):
        await perform(noop, logger=logger, tag="noop", on_error=HashingError)
    records = [r for r in caplog.records if r.name == "tests.step_chain"]
    assert [r.step for r in records] == ["noop"]
    assert records[0].levelno == logging.DEBUG


async def test_perform_does_not_swallow_cancellation():
    async def cancelled():
        raise asyncio.CancelledError()

    with pytest.raises(asyncio.CancelledError):
        await perform(cancelled, logger=logger, tag="x", on_error=HashingError)


async def test_validated_logs_failure_only(caplog):
    def check(raw):
        return Ok(raw) if raw else Err(ValidationError("email", "empty"))

    with caplog.at_level(logging.DEBUG, logger="tests.step_chain"):
        assert await validated("a", check, logger=logger, tag="email") == Ok("a")
        assert _own(caplog.records) == []
        result = await validated("", check, logger=logger, tag="email")

    records = _own(caplog.records)
    assert result.error.field == "email"
    assert len(records) == 1
    assert records[0].levelno == logging.WARNING
    assert records[0].field == "email"


def _own(records):
    return [r for r in records if r.name == "tests.step_chain"]


async def test_failed_step_tag_is_recorded_on_error_context():
    async def boom():
        raise PersistenceError("disk full")

    result = await perform(boom, logger=logger, tag="save user", on_error=HashingError)
    assert result.error.context.step == "save user"


async def test_unexpected_exception_message_never_reaches_the_log(caplog):
    async def boom():
        raise ValueError("hunter2 is not valid utf-8")

    with caplog.at_level(logging.ERROR, logger="tests.step_chain"):
        await perform(boom, logger=logger, tag="hash", on_error=HashingError)

    record = _own(caplog.records)[0]
    assert record.exc_info is None
    assert "boom" in record.traceback
    assert "hunter2" not in record.getMessage()
    assert "hunter2" not in record.traceback


@pytest.mark.parametrize("error, level", [
    (ConflictError(), logging.WARNING),
    (ValidationError("email", "empty"), logging.WARNING),
    (EntityConstructionError("empty password"), logging.ERROR),
    (PersistenceError("disk full"), logging.ERROR),
])
async def test_failure_log_level_follows_severity(caplog, error, level):
    async def boom():
        raise error

    with caplog.at_level(logging.DEBUG, logger="tests.step_chain"):
        await perform(boom, logger=logger, tag="step", on_error=HashingError)

    failures = [r for r in _own(caplog.records) if r.levelno > logging.DEBUG]
    assert [r.levelno for r in failures] == [level]
