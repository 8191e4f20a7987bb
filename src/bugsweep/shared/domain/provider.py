"""Deferred values bound at configuration time and evaluated at execution time."""

import threading
from typing import Callable, Generic, TypeVar

T = TypeVar("T")


class Provider(Generic[T]):
    """
    Lazily evaluated value.

    The factory runs at most once, on the first ``get()``; later calls
    return the cached value. Safe to resolve from worker threads.
    """

    def __init__(self, factory: Callable[[], T]):
        self._factory = factory
        self._lock = threading.Lock()
        self._resolved = False
        self._value: T

    @classmethod
    def of(cls, value: T) -> "Provider[T]":
        return cls(lambda: value)

    @property
    def is_resolved(self) -> bool:
        return self._resolved

    def get(self) -> T:
        with self._lock:
            if not self._resolved:
                self._value = self._factory()
                self._resolved = True
            return self._value

    def __repr__(self) -> str:
        state = "resolved" if self._resolved else "pending"
        return f"Provider({state})"
