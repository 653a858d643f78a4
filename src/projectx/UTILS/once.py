"""
A build-once value holder.
"""
import threading
from typing import Callable, Generic, Optional, TypeVar

T = TypeVar('T')


class Once(Generic[T]):
    """
    Holds a value produced by ``factory`` on first access.

    The factory runs at most once, even with concurrent callers; every
    later ``get()`` returns the identical object.
    """
    def __init__(self, factory: Callable[[], T]):
        self._factory = factory
        self._value: Optional[T] = None
        self._is_set = False
        self._lock = threading.Lock()

    @property
    def is_set(self) -> bool:
        return self._is_set

    def get(self) -> T:
        if not self._is_set:
            with self._lock:
                if not self._is_set:
                    self._value = self._factory()
                    self._is_set = True
        return self._value
