"""Single-flight lazy initialization for async resources.

The first caller starts the load; callers arriving while it is in flight
await the same task instead of starting their own. Once the load succeeds
the value is cached and returned immediately. A failed load is reported to
every waiter and then forgotten, so the next call starts a fresh attempt.

Examples:
    >>> cell = SingleFlight("embedding model")
    >>> model = await cell.get(load_model)  # loads
    >>> model = await cell.get(load_model)  # cached
"""

import asyncio
from collections.abc import Awaitable, Callable
from typing import Generic, TypeVar

from loguru import logger

T = TypeVar("T")


class SingleFlight(Generic[T]):
    """A lazily-populated cell whose loader runs at most once at a time.

    Attributes:
        name: Label used in log messages
    """

    def __init__(self, name: str = "resource"):
        self.name = name
        self._task: asyncio.Task[T] | None = None
        self._value: T | None = None
        self._ready = False

    @property
    def ready(self) -> bool:
        """Whether a value has been loaded successfully."""
        return self._ready

    @property
    def in_flight(self) -> bool:
        """Whether a load is currently running."""
        return self._task is not None and not self._task.done()

    @property
    def value(self) -> T | None:
        """The loaded value, or None before the first successful load."""
        return self._value

    async def get(self, loader: Callable[[], Awaitable[T]]) -> T:
        """Return the cached value, loading it with ``loader`` if needed.

        Args:
            loader: Zero-argument coroutine function producing the value

        Returns:
            The loaded value (shared by all concurrent callers)

        Raises:
            Exception: Whatever the loader raised, delivered to every waiter
        """
        if self._ready:
            return self._value  # type: ignore[return-value]

        if self._task is None:
            logger.debug(f"Starting load of {self.name}")
            task = asyncio.ensure_future(loader())
            task.add_done_callback(self._settle)
            self._task = task
        else:
            logger.debug(f"Waiting for in-flight load of {self.name}")
            task = self._task

        # shield: a cancelled waiter must not cancel the shared load
        return await asyncio.shield(task)

    def _settle(self, task: "asyncio.Task[T]") -> None:
        # Runs even when every waiter has been cancelled
        if self._task is not task:
            return
        self._task = None
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.debug(f"Load of {self.name} failed: {error!r}")
            return
        self._value = task.result()
        self._ready = True

    def set(self, value: T) -> None:
        """Populate the cell directly, skipping the loader."""
        self._value = value
        self._ready = True
        self._task = None

    def reset(self) -> None:
        """Forget the cached value; the next ``get`` loads again."""
        self._value = None
        self._ready = False
        self._task = None
