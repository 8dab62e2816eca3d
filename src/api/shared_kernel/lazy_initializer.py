"""At-most-once lazy initialization for process-wide objects.

Used for objects that must be built exactly once before concurrent
readers observe them, such as the frozen candidate registry.
"""

from __future__ import annotations

import threading
from typing import Callable, Generic, TypeVar

T = TypeVar("T")


class LazyInitializer(Generic[T]):
    """Builds a value on first use, exactly once across racing threads.

    Uses double-checked locking: once the value is published, reads take
    no lock. If the factory raises, nothing is published and the next
    caller runs the factory again.

    Example:
        registry = LazyInitializer(build_registry)
        registry.get()  # builds
        registry.get()  # returns the same object
    """

    def __init__(self, factory: Callable[[], T]):
        self._factory = factory
        self._lock = threading.Lock()
        self._value: T | None = None
        self._initialized = False

    @property
    def is_initialized(self) -> bool:
        """Whether the value has been built and published."""
        return self._initialized

    def get(self) -> T:
        """Return the value, building it on the first call."""
        if self._initialized:
            return self._value  # type: ignore[return-value]

        with self._lock:
            if not self._initialized:
                self._value = self._factory()
                self._initialized = True
        return self._value  # type: ignore[return-value]

    def reset(self) -> None:
        """Discard the built value so the next get() rebuilds it.

        Intended for tests and application shutdown only; callers must
        ensure no concurrent readers remain.
        """
        with self._lock:
            self._value = None
            self._initialized = False
