"""Task-group helpers shared by the asynchronous tree operations."""

from contextlib import asynccontextmanager
from typing import AsyncIterator

import anyio
from anyio.abc import TaskGroup

# Upper bound on blocking filesystem calls in flight for one operation.
DEFAULT_CONCURRENCY = 8


def first_leaf(group: BaseExceptionGroup) -> BaseException:
    """Return the first non-group exception nested inside ``group``."""
    exc: BaseException = group
    while isinstance(exc, BaseExceptionGroup):
        exc = exc.exceptions[0]
    return exc


@asynccontextmanager
async def fail_fast_task_group() -> AsyncIterator[TaskGroup]:
    """Task group that re-raises the first failure itself instead of an exception group.

    anyio cancels the sibling tasks as soon as one of them raises, so the
    remaining work of the call is abandoned and whatever already completed stays done.
    """
    try:
        async with anyio.create_task_group() as task_group:
            yield task_group
    except BaseExceptionGroup as group:
        raise first_leaf(group) from None
