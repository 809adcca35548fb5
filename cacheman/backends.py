import time
from typing import Any, Callable, Optional, Protocol, runtime_checkable

from .validator import Validator


def now_millis() -> float:
    return time.time() * 1000


@runtime_checkable
class StorageBackend(Protocol):
    """Single-slot store consulted by Cache.

    get() returns the stored value while fresh, otherwise the backend's own
    ``empty`` marker. set() overwrites value and write time unconditionally.
    """

    timeout: float

    def get(self) -> Any: ...

    def set(self, value: Any, write_time: float) -> None: ...


class _Empty:
    __slots__ = ()

    def __repr__(self) -> str:
        return "<empty>"


class MemoryStorageBackend:
    """Holds one value in memory and treats it as expired ``timeout`` ms after its write."""

    def __init__(self, timeout: float, clock: Optional[Callable[[], float]] = None):
        self._timeout = Validator.timeout(timeout)
        self._clock = clock or now_millis
        # one marker per instance, compared by identity
        self._empty = _Empty()
        self._value: Any = self._empty
        self._last_write = 0.0

    @property
    def timeout(self) -> float:
        return self._timeout

    @property
    def empty(self) -> Any:
        return self._empty

    def get(self) -> Any:
        # expired entries stay in place until the next set()
        if self._value is self._empty or self._last_write + self._timeout < self._clock():
            return self._empty
        return self._value

    def set(self, value: Any, write_time: float) -> None:
        self._value = value
        self._last_write = write_time

    def clear(self) -> None:
        self._value = self._empty
        self._last_write = 0.0

    def __repr__(self) -> str:
        return f"MemoryStorageBackend(timeout={self._timeout})"
