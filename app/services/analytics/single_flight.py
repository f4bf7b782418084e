"""Single-flight: at most one in-flight computation per key."""

import threading
from collections.abc import Callable, Hashable
from concurrent.futures import Future
from typing import Generic, TypeVar

from loguru import logger

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class SingleFlight(Generic[K, V]):
    """Callers arriving while a key is in flight wait for that result.

    The leader's exception is re-raised in every waiter. The key is released
    once the leader finishes, so the next call starts a new flight.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._calls: dict[K, Future] = {}

    def in_flight(self, key: K) -> bool:
        with self._lock:
            return key in self._calls

    def do(self, key: K, fn: Callable[[], V]) -> V:
        with self._lock:
            future = self._calls.get(key)
            leader = future is None
            if leader:
                future = Future()
                self._calls[key] = future

        if not leader:
            logger.debug("Joining in-flight call: {}", key)
            return future.result()

        try:
            result = fn()
        except BaseException as exc:
            future.set_exception(exc)
            raise
        else:
            future.set_result(result)
            return result
        finally:
            with self._lock:
                self._calls.pop(key, None)
