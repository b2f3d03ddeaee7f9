"""Read/write lock for the route table.

Many request handlers resolve routes concurrently; registration is rare
and must be exclusive. Built on ``threading.Condition`` so it also holds
under free-threaded interpreters.

Writer preference: once a writer is waiting, new readers block until it
has finished, so a steady stream of lookups cannot starve registration.
"""

import threading
from collections.abc import Iterator
from contextlib import contextmanager


class ReadWriteLock:
    """Shared/exclusive lock with context-manager helpers.

    Usage::

        lock = ReadWriteLock()
        with lock.read():
            ...  # many threads at once
        with lock.write():
            ...  # one thread, no readers
    """

    __slots__ = ("_cond", "_readers", "_writer", "_writers_waiting")

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    def acquire_read(self) -> None:
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1

    def release_read(self) -> None:
        with self._cond:
            if self._readers <= 0:
                msg = "release_read() called without a matching acquire_read()"
                raise RuntimeError(msg)
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()

    def acquire_write(self) -> None:
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer = True

    def release_write(self) -> None:
        with self._cond:
            if not self._writer:
                msg = "release_write() called without a matching acquire_write()"
                raise RuntimeError(msg)
            self._writer = False
            self._cond.notify_all()

    @contextmanager
    def read(self) -> Iterator[None]:
        self.acquire_read()
        try:
            yield
        finally:
            self.release_read()

    @contextmanager
    def write(self) -> Iterator[None]:
        self.acquire_write()
        try:
            yield
        finally:
            self.release_write()

    @property
    def readers(self) -> int:
        """Number of threads currently holding the shared lock."""
        return self._readers

    @property
    def writing(self) -> bool:
        """True while a thread holds the exclusive lock."""
        return self._writer
