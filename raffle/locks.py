"""Per-activity locks that serialize draws and resets within a process.

Draws and resets against the same activity share one lock, so a reset can
never interleave with an in-flight draw and two draws never read the same
eligibility pool. Different activities use different locks and run in
parallel. Cross-process serialization is left to the row lock taken in the
transaction and the optimistic version stamps on prizes and participants.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from threading import Lock

from raffle.errors import ConcurrencyConflictError


class ActivityLockRegistry:
    """Lazily creates one lock per activity id."""

    def __init__(self) -> None:
        self._guard = Lock()
        self._locks: dict[int, Lock] = {}

    def lock_for(self, activity_id: int) -> Lock:
        with self._guard:
            lock = self._locks.get(activity_id)
            if lock is None:
                lock = Lock()
                self._locks[activity_id] = lock
            return lock

    def discard(self, activity_id: int) -> None:
        """Forget the lock of a deleted activity unless someone holds it."""

        with self._guard:
            lock = self._locks.get(activity_id)
            if lock is not None and not lock.locked():
                del self._locks[activity_id]

    @contextmanager
    def hold(self, activity_id: int, timeout: float = 10) -> Iterator[None]:
        lock = self.lock_for(activity_id)
        if not lock.acquire(timeout=timeout):
            raise ConcurrencyConflictError(
                message="Activity is busy with another draw or reset. Please try again later.",
                details={"activity_id": activity_id},
            )
        try:
            yield
        finally:
            lock.release()


_REGISTRY = ActivityLockRegistry()


def activity_lock(activity_id: int, timeout: float = 10):
    """Hold the process-wide lock for ``activity_id``."""

    return _REGISTRY.hold(activity_id, timeout=timeout)


def discard_activity_lock(activity_id: int) -> None:
    _REGISTRY.discard(activity_id)
