"""Run async command bodies from synchronous Click callbacks."""

import asyncio
from collections.abc import Awaitable, Callable
from functools import wraps
import sys
from typing import Any

# Shell convention for "terminated by SIGINT"
INTERRUPTED_EXIT_CODE = 130


def coro[T](f: Callable[..., Awaitable[T]]) -> Callable[..., T]:
    """Make an async function usable as a Click command callback.

    Each invocation gets a fresh event loop. Where the loop cannot install
    signal handlers, Ctrl-C surfaces as KeyboardInterrupt and exits 130.

    Usage:
        @click.command()
        @coro
        async def consume():
            await run_consumer()
    """

    @wraps(f)
    def wrapper(*args: Any, **kwargs: Any) -> T:
        try:
            return asyncio.run(f(*args, **kwargs))
        except KeyboardInterrupt:
            sys.exit(INTERRUPTED_EXIT_CODE)

    return wrapper
