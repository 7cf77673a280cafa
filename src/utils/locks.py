"""Per-ticket lock registry used to serialize article mutations."""

from threading import Lock
from typing import Dict


class TicketLocks:
    """Hands out one lock per ticket id; tickets never contend with each other."""

    def __init__(self) -> None:
        self._locks: Dict[str, Lock] = {}
        self._guard = Lock()

    def for_ticket(self, ticket_id: str) -> Lock:
        """Return the lock guarding ``ticket_id``, creating it on first use."""
        with self._guard:
            lock = self._locks.get(ticket_id)
            if lock is None:
                lock = Lock()
                self._locks[ticket_id] = lock
            return lock

    def __len__(self) -> int:
        with self._guard:
            return len(self._locks)
