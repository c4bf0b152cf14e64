"""Async helpers - bridging synchronous callers to the async API.

The builder and search session are coroutine-based. Scripts and tests that
run without an event loop use ``run_async_in_sync_context`` to drive them.

Examples:
    >>> async def fetch_data():
    ...     return "data"
    >>>
    >>> result = run_async_in_sync_context(fetch_data())
    >>> print(result)
    data
"""

import asyncio
import concurrent.futures
from typing import Coroutine, TypeVar

from loguru import logger

T = TypeVar('T')


def run_async_in_sync_context(coro: Coroutine[None, None, T]) -> T:
    """Run a coroutine to completion from synchronous code.

    Without a running event loop the coroutine is executed with
    ``asyncio.run()``. Inside a running loop (Jupyter, async frameworks) it
    is executed on a fresh loop in a worker thread, since the caller's loop
    cannot be re-entered.

    Args:
        coro: The coroutine object to execute

    Returns:
        The coroutine's return value
    """
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return asyncio.run(coro)

    logger.debug(
        "Detected running event loop. Consider using async methods directly "
        "for better performance."
    )
    with concurrent.futures.ThreadPoolExecutor(max_workers=1) as executor:
        future = executor.submit(asyncio.run, coro)
        return future.result()
