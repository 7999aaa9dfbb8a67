"""Per-entity serialisation of ordering workflows.

Each workflow is a read-validate-write sequence over several aggregates.
``dispatch`` runs a command while holding locks on the entities it touches,
so concurrent appends to one order cannot share an index and concurrent
placements of one order cannot rotate the shop's cart twice. Locks are
process-local.
"""

import threading
from contextlib import contextmanager

from protean.utils.globals import current_domain

ORDER_NUMBER_KEY = "order-number"


def order_key(order_id) -> str:
    return f"order:{order_id}"


def order_line_key(order_line_id) -> str:
    return f"order-line:{order_line_id}"


def shop_key(shop_id) -> str:
    return f"shop:{shop_id}"


class EntityLocks:
    """Named re-entrant locks, created on demand and dropped when unused."""

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: dict[str, list] = {}  # key -> [lock, holders]

    def _checkout(self, key):
        with self._guard:
            entry = self._locks.setdefault(key, [threading.RLock(), 0])
            entry[1] += 1
            return entry[0]

    def _checkin(self, key):
        with self._guard:
            entry = self._locks[key]
            entry[1] -= 1
            if entry[1] == 0:
                del self._locks[key]

    @contextmanager
    def hold(self, *keys):
        """Acquire the locks for ``keys`` in sorted order, release in reverse."""
        ordered = sorted({key for key in keys if key})
        acquired = []
        try:
            for key in ordered:
                lock = self._checkout(key)
                lock.acquire()
                acquired.append((key, lock))
            yield
        finally:
            for key, lock in reversed(acquired):
                lock.release()
                self._checkin(key)

    def active_keys(self) -> list[str]:
        with self._guard:
            return sorted(self._locks)


entity_locks = EntityLocks()


def dispatch(command, *keys):
    """Process ``command`` synchronously while holding the locks for ``keys``."""
    with entity_locks.hold(*keys):
        return current_domain.process(command, asynchronous=False)
