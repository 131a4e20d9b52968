"""Shared helpers for path handling and concurrent fan-out."""

from __future__ import annotations

import asyncio
import os
from pathlib import Path
from typing import Awaitable, Iterable, List, TypeVar

T = TypeVar("T")


async def gather_all(awaitables: Iterable[Awaitable[T]]) -> List[T]:
    """Run awaitables concurrently and return their results in order.

    Waits for every task; if any fails, the remaining tasks are cancelled and
    the first failure is raised as-is rather than wrapped in an exception group.
    """
    tasks: List[asyncio.Task[T]] = []
    try:
        async with asyncio.TaskGroup() as group:
            for awaitable in awaitables:
                tasks.append(group.create_task(_await(awaitable)))
    except BaseExceptionGroup as errors:
        raise _first_leaf(errors)
    return [task.result() for task in tasks]


async def _await(awaitable: Awaitable[T]) -> T:
    return await awaitable


def _first_leaf(errors: BaseExceptionGroup) -> BaseException:
    first = errors.exceptions[0]
    while isinstance(first, BaseExceptionGroup):
        first = first.exceptions[0]
    return first


def to_posix(path: Path | str) -> str:
    """Return ``path`` with forward slashes regardless of the host platform."""
    return str(path).replace(os.sep, "/")


def relative_posix(path: Path, start: Path) -> str:
    """Relative path from ``start`` to ``path`` using ``/`` separators."""
    return to_posix(os.path.relpath(path, start))


__all__ = ["gather_all", "relative_posix", "to_posix"]
