"""
Reader/writer locks guarding a single shared value.

Both locks admit any number of concurrent readers or exactly one writer.
Waiting writers block new readers so that a steady stream of readers
cannot starve them; beyond that no ordering between waiters is promised.
"""

from __future__ import annotations

__all__ = ["RWLock", "AsyncRWLock"]

import asyncio
import threading
from collections.abc import AsyncIterator, Iterator
from contextlib import asynccontextmanager, contextmanager
from typing import Generic, TypeVar

T = TypeVar("T")


class RWLock(Generic[T]):
    """A thread-based reader/writer lock owning a value.

    The value is only reachable through :meth:`read` and :meth:`write`,
    both of which are context managers yielding it::

        with lock.read() as cfg:
            print(cfg.name)

        with lock.write() as cfg:
            cfg.name = "new"

    A thread that already holds a read view may take another one without
    waiting, even while a writer is queued. Any other nesting is refused:
    acquiring either view while holding the write view, or the write view
    while holding a read view, raises ``RuntimeError`` instead of
    deadlocking.
    """

    def __init__(self, value: T) -> None:
        self._value = value
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        # thread ident -> number of read views it holds
        self._reader_threads: dict[int, int] = {}
        self._writer: int | None = None
        self._waiting_writers = 0

    def _check_not_writer(self) -> None:
        if self._writer == threading.get_ident():
            raise RuntimeError(
                "Lock is already held for writing by the current thread; "
                "release the write view first."
            )

    def held_by_current_thread(self) -> bool:
        """Whether the calling thread holds a read or the write view."""
        me = threading.get_ident()
        return self._writer == me or me in self._reader_threads

    def acquire_read(self) -> None:
        me = threading.get_ident()
        with self._cond:
            self._check_not_writer()
            if me not in self._reader_threads:
                while self._writer is not None or self._waiting_writers:
                    self._cond.wait()
            self._readers += 1
            self._reader_threads[me] = self._reader_threads.get(me, 0) + 1

    def release_read(self) -> None:
        me = threading.get_ident()
        with self._cond:
            held = self._reader_threads.get(me, 0)
            if held <= 0:
                raise RuntimeError("release_read() called without a reader")
            if held == 1:
                del self._reader_threads[me]
            else:
                self._reader_threads[me] = held - 1
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()

    def acquire_write(self) -> None:
        with self._cond:
            self._check_not_writer()
            if threading.get_ident() in self._reader_threads:
                raise RuntimeError(
                    "Lock is held for reading by the current thread; "
                    "release the read view before writing."
                )
            self._waiting_writers += 1
            try:
                while self._writer is not None or self._readers:
                    self._cond.wait()
            except BaseException:
                self._waiting_writers -= 1
                self._cond.notify_all()
                raise
            self._waiting_writers -= 1
            self._writer = threading.get_ident()

    def release_write(self) -> None:
        with self._cond:
            if self._writer != threading.get_ident():
                raise RuntimeError("release_write() called by a non-owner")
            self._writer = None
            self._cond.notify_all()

    @contextmanager
    def read(self) -> Iterator[T]:
        """Hold a shared read view for the duration of the block."""
        self.acquire_read()
        try:
            yield self._value
        finally:
            self.release_read()

    @contextmanager
    def write(self) -> Iterator[T]:
        """Hold the exclusive write view for the duration of the block."""
        self.acquire_write()
        try:
            yield self._value
        finally:
            self.release_write()

    def replace(self, value: T) -> T:
        """Swap in a new value under the write view.

        Returns:
            The previous value.
        """
        with self.write():
            old, self._value = self._value, value
        return old

    @property
    def readers(self) -> int:
        return self._readers

    @property
    def locked(self) -> bool:
        """Whether a writer currently holds the lock."""
        return self._writer is not None


class AsyncRWLock(Generic[T]):
    """The asyncio counterpart of :class:`RWLock`.

    Must be used from a single event loop::

        async with lock.read() as cfg:
            ...
    """

    def __init__(self, value: T) -> None:
        self._value = value
        self._cond = asyncio.Condition()
        self._readers = 0
        self._writer: asyncio.Task[object] | None = None
        self._waiting_writers = 0

    def _check_not_writer(self) -> None:
        if self._writer is not None and self._writer is asyncio.current_task():
            raise RuntimeError(
                "Lock is already held for writing by the current task; "
                "release the write view first."
            )

    async def acquire_read(self) -> None:
        async with self._cond:
            self._check_not_writer()
            await self._cond.wait_for(
                lambda: self._writer is None and not self._waiting_writers
            )
            self._readers += 1

    async def release_read(self) -> None:
        async with self._cond:
            if self._readers <= 0:
                raise RuntimeError("release_read() called without a reader")
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()

    async def acquire_write(self) -> None:
        async with self._cond:
            self._check_not_writer()
            self._waiting_writers += 1
            try:
                await self._cond.wait_for(
                    lambda: self._writer is None and not self._readers
                )
            except BaseException:
                # a cancelled writer must not keep readers parked
                self._waiting_writers -= 1
                self._cond.notify_all()
                raise
            self._waiting_writers -= 1
            self._writer = asyncio.current_task()

    async def release_write(self) -> None:
        async with self._cond:
            if self._writer is not asyncio.current_task():
                raise RuntimeError("release_write() called by a non-owner")
            self._writer = None
            self._cond.notify_all()

    @asynccontextmanager
    async def read(self) -> AsyncIterator[T]:
        await self.acquire_read()
        try:
            yield self._value
        finally:
            await self.release_read()

    @asynccontextmanager
    async def write(self) -> AsyncIterator[T]:
        await self.acquire_write()
        try:
            yield self._value
        finally:
            await self.release_write()

    async def replace(self, value: T) -> T:
        async with self.write():
            old, self._value = self._value, value
        return old

    @property
    def readers(self) -> int:
        return self._readers

    @property
    def locked(self) -> bool:
        return self._writer is not None
