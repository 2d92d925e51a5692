"""Helpers for turning collaborator calls into awaitable results."""

import asyncio
import inspect
from typing import Any, Callable, TypeVar

T = TypeVar("T")


async def run_blocking(func: Callable[..., T], *args: Any, **kwargs: Any) -> T:
    """
    Run a blocking call in the default executor.

    The event loop thread is never blocked; exceptions raised by func
    surface when the result is awaited.
    """
    return await asyncio.to_thread(func, *args, **kwargs)


async def settle(func: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
    """
    Call func and await its result if it returned an awaitable.

    Collaborators may be plain functions or coroutine functions. Either way
    a raise (at call time or while awaiting) is delivered through the
    returned coroutine, never to the code that created it.
    """
    result = func(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result
