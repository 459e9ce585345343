"""
Per-container mutual exclusion.

Writes to a container and the reads that must see a consistent
ledger (balances, reports) run one at a time per container.
Locks are re-entrant so a service holding one can call another
service that takes the same lock.
"""

import threading
from contextlib import contextmanager

_registry_lock = threading.Lock()
_container_locks: dict[int, threading.RLock] = {}


def get_container_lock(container_id: int) -> threading.RLock:
    """Return the lock for a container, creating it on first use."""
    with _registry_lock:
        lock = _container_locks.get(container_id)
        if lock is None:
            lock = threading.RLock()
            _container_locks[container_id] = lock
        return lock


@contextmanager
def container_lock(container_id: int):
    lock = get_container_lock(container_id)
    with lock:
        yield
