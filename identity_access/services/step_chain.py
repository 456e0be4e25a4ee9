"""Step Chain — run fallible async steps on the Ok/Err railway, stopping at the first Err.

Invariants:
    - chain() never calls a step once the running result is an Err
    - gather() joins results in argument order, regardless of completion order
    - gather() reports the first Err in argument order
    - The error inside Err flows through unchanged; its kind is never inspected here
    - Every step is logged with its tag: DEBUG on invocation, WARNING/ERROR on failure
    - asyncio.CancelledError is never converted into an Err
    - Exception messages from collaborators are never logged (they may echo the password)

Design Decisions:
    - Collaborators raise, the chain returns: perform() is the one place that turns a
      raised IdentityError into Err, so adapters keep idiomatic exception handling
    - Unexpected exceptions are wrapped with the caller-supplied on_error factory:
      the step knows which error kind it owns, the combinator does not
    - Logger passed per call, not looked up globally: the pipeline owns its logger tag
"""

import asyncio
import inspect
import logging
import traceback
from typing import Any, Awaitable, Callable, TypeVar

from identity_access.core.errors import ErrorSeverity, IdentityError
from identity_access.core.result import Ok, Err, Result, collect

T = TypeVar("T")

Step = Callable[[Any], "Awaitable[Result] | Result"]


async def right(value: T) -> Result[T]:
    """Lift a plain value onto the success track (carry-forward data)."""
    return Ok(value)


async def perform(
    fn: Callable[..., Awaitable[T]],
    *args: Any,
    logger: logging.Logger,
    tag: str,
    on_error: Callable[[str], IdentityError],
) -> Result[T]:
    """Await a collaborator call and put its outcome on the railway."""
    logger.debug(f"Step '{tag}' started", extra={"step": tag})
    try:
        value = await fn(*args)
    except IdentityError as e:
        _log_failure(logger, tag, e)
        return Err(e)
    except Exception as e:
        error = on_error(type(e).__name__)
        error.context.step = tag
        logger.error(
            f"Step '{tag}' raised {type(e).__name__}",
            extra={
                "step": tag,
                "error_code": error.code,
                "traceback": "".join(traceback.format_tb(e.__traceback__)),
            },
        )
        return Err(error)
    return Ok(value)


async def validated(
    raw: Any,
    validator: Callable[[Any], Result[T]],
    *,
    logger: logging.Logger,
    tag: str,
) -> Result[T]:
    """Run a pure validator; log only when it fails."""
    result = validator(raw)
    if isinstance(result, Err):
        _log_failure(logger, tag, result.error)
    return result


async def gather(*steps: Awaitable[Result]) -> Result[tuple]:
    """Run independent steps concurrently; Ok(tuple) in argument order or first Err."""
    results = await asyncio.gather(*steps)
    return collect(list(results))


async def chain(first: Awaitable[Result], *steps: Step) -> Result:
    """Feed each Ok value into the next step; return the first Err untouched."""
    result = await first
    for step in steps:
        if isinstance(result, Err):
            return result
        result = step(result.value)
        if inspect.isawaitable(result):
            result = await result
    return result


def _log_failure(logger: logging.Logger, tag: str, error: IdentityError) -> None:
    if error.context.step is None:
        error.context.step = tag
    extra = {"step": tag, "error_code": error.code}
    field = getattr(error, "field", None)
    if field is not None:
        extra["field"] = field
    if error.severity in (ErrorSeverity.INFO, ErrorSeverity.WARNING):
        logger.warning(f"Step '{tag}' failed: {error.message}", extra=extra)
    else:
        logger.error(f"Step '{tag}' failed: {error.message}", extra=extra)
