"""
Pipeline composition.

A pipeline is a callable ``(instance, value, token) -> result``. Composing a
stage onto a pipeline runs the previous pipeline, then the stage, with the
same triple: the value is not threaded from one stage's output to the next.
The composed result is the last stage's result.

Sync pipelines return plain values. Once an async stage is registered the
pipeline returns an awaitable, and every later stage, sync or async, is
sequenced after the previous awaitable resolves. Stages never run
concurrently.
"""

import asyncio
import inspect
import logging
from typing import Any, Awaitable, Callable, Optional, Set

from hinj.errors import NotAwaitable

logger = logging.getLogger(__name__)

Pipeline = Callable[[Any, Any, Any], Any]

# Strong references to side-effect tasks nobody awaits, until they finish
_detached_tasks: Set[asyncio.Task] = set()


def _name(fn: Callable) -> str:
    return getattr(fn, '__qualname__', None) or type(fn).__name__


async def _settle(awaitable: Awaitable) -> Any:
    return await awaitable


def lift(previous: Pipeline) -> Pipeline:
    """Wrap a sync pipeline so it returns an awaitable resolving to its result."""

    async def lifted(instance, value, token):
        result = previous(instance, value, token)
        # A sync chain may end in an async subcommand; resolve it too
        if inspect.isawaitable(result):
            return await result
        return result

    return lifted


def require_awaitable(stage: Callable) -> Pipeline:
    """Wrap an async stage so a non-awaitable result raises ``NotAwaitable``."""

    def checked(instance, value, token):
        result = stage(instance, value, token)
        if not inspect.isawaitable(result):
            raise NotAwaitable(stage, result)
        return result

    checked.__qualname__ = f"require_awaitable({_name(stage)})"
    return checked


def compose_sync(previous: Optional[Pipeline], stage: Callable, is_async: bool) -> Pipeline:
    """
    Append a sync stage.

    Args:
        previous: Current pipeline, or None if this is the first stage
        stage: Callable taking ``(instance, value, token)``
        is_async: Whether the owning hinge is already in async mode

    Returns:
        The composed pipeline
    """
    if previous is None:
        return stage

    if is_async:
        async def pipeline(instance, value, token):
            await previous(instance, value, token)
            result = stage(instance, value, token)
            if inspect.isawaitable(result):
                return await result
            return result
    else:
        def pipeline(instance, value, token):
            run_discarded(previous(instance, value, token))
            return stage(instance, value, token)

    return pipeline


def compose_async(previous: Optional[Pipeline], stage: Callable, is_async: bool) -> Pipeline:
    """
    Append an async stage.

    The stage must return an awaitable when invoked. A sync previous pipeline
    is lifted first so both halves follow the same await discipline.

    Args:
        previous: Current pipeline, or None if this is the first stage
        stage: Callable taking ``(instance, value, token)`` and returning an awaitable
        is_async: Whether ``previous`` already returns awaitables

    Returns:
        The composed pipeline
    """
    checked = require_awaitable(stage)
    if previous is None:
        return checked

    prior = previous if is_async else lift(previous)

    async def pipeline(instance, value, token):
        await prior(instance, value, token)
        return await checked(instance, value, token)

    return pipeline


def _report_detached(task: asyncio.Task) -> None:
    _detached_tasks.discard(task)
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        logger.error(f"Detached pipeline run failed: {exc}", exc_info=exc)


def run_detached(awaitable: Awaitable) -> Optional[asyncio.Task]:
    """
    Run an awaitable whose result nobody waits for.

    Inside a running event loop the awaitable is scheduled as a task and
    returned; failures are logged. Without a running loop it is driven to
    completion here and failures propagate.
    """
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        loop = None

    if loop is None:
        asyncio.run(_settle(awaitable))
        return None

    task = loop.create_task(_settle(awaitable))
    _detached_tasks.add(task)
    task.add_done_callback(_report_detached)
    return task


def run_discarded(result: Any) -> Any:
    """
    Make sure a result the caller drops still runs.

    Sync chains can merge an async hinge; its awaitable is handed to
    ``run_detached`` instead of being left unawaited.
    """
    if inspect.isawaitable(result):
        return run_detached(result)
    return None


async def wait_detached() -> None:
    """Wait until every side-effect run scheduled on this loop has finished."""
    loop = asyncio.get_running_loop()
    while True:
        pending = [t for t in _detached_tasks if not t.done() and t.get_loop() is loop]
        if not pending:
            return
        await asyncio.gather(*pending, return_exceptions=True)
