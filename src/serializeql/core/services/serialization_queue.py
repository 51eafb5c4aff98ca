"""Per-key serialization queues.

Operations sharing a key run one at a time in enqueue order. Operations
under different keys are independent and run concurrently.

All methods run to completion without yielding, so on a single event
loop no caller observes a half-updated queue. They are not thread-safe.
"""

import logging
from collections.abc import Iterator
from typing import Any

from serializeql.core.entities.queue_entry import EntryState, QueueEntry

logger = logging.getLogger(__name__)


class SerializationQueue:
    """Ordered entries waiting on one key.

    At most one entry, the head, is ever active.
    """

    def __init__(self, key: str) -> None:
        self.key = key
        self._entries: list[QueueEntry] = []

    def append(self, entry: QueueEntry) -> None:
        self._entries.append(entry)

    def remove(self, entry: QueueEntry) -> bool:
        """Remove an entry by identity.

        Returns:
            True if the entry was queued, False otherwise.
        """
        for index, queued in enumerate(self._entries):
            if queued is entry:
                del self._entries[index]
                return True
        return False

    @property
    def head(self) -> QueueEntry | None:
        return self._entries[0] if self._entries else None

    def __contains__(self, entry: object) -> bool:
        return any(queued is entry for queued in self._entries)

    def __iter__(self) -> Iterator[QueueEntry]:
        return iter(list(self._entries))

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"SerializationQueue(key={self.key!r}, size={len(self)})"


class _EntryRelay:
    """Relays the head entry's stream to its observer.

    Termination of the stream, normal or not, also releases the entry
    so the next one can start.
    """

    def __init__(self, manager: "QueueManager", key: str, entry: QueueEntry) -> None:
        self._manager = manager
        self._key = key
        self._entry = entry

    def next(self, value: Any) -> None:
        self._entry.observer.next(value)

    def error(self, error: BaseException) -> None:
        try:
            self._entry.observer.error(error)
        finally:
            self._manager.cancel(self._key, self._entry)

    def complete(self) -> None:
        try:
            self._entry.observer.complete()
        finally:
            self._manager.cancel(self._key, self._entry)


class QueueManager:
    """Maps keys to serialization queues.

    A queue is created on the first enqueue for a key and deleted as soon
    as its last entry is removed, so memory follows the current backlog
    rather than the number of keys ever seen.
    """

    def __init__(self) -> None:
        self._queues: dict[str, SerializationQueue] = {}

    @property
    def queue_count(self) -> int:
        """Number of keys with at least one queued entry."""
        return len(self._queues)

    def keys(self) -> list[str]:
        """Keys with at least one queued entry."""
        return list(self._queues)

    def pending_count(self, key: str) -> int:
        """Number of entries queued under key, active one included."""
        queue = self._queues.get(key)
        return len(queue) if queue is not None else 0

    def get_queue(self, key: str) -> SerializationQueue | None:
        return self._queues.get(key)

    def __contains__(self, key: object) -> bool:
        return key in self._queues

    def enqueue(self, key: str, entry: QueueEntry) -> None:
        """Add an entry to the end of the queue for key.

        The entry starts immediately if the queue was empty.

        Args:
            key: The serialization key.
            entry: A pending entry.
        """
        queue = self._queues.get(key)
        if queue is None:
            queue = self._queues[key] = SerializationQueue(key)

        queue.append(entry)
        logger.debug("Enqueued operation on key %r (queue length %d)", key, len(queue))

        if len(queue) == 1:
            self.activate_head_if_idle(key)

    def cancel(self, key: str, entry: QueueEntry) -> None:
        """Remove an entry, stopping it if it is in flight.

        Removing the active entry starts the next pending one before this
        call returns. Cancelling an entry that already left the queue is
        a no-op.

        Args:
            key: The key the entry was enqueued under.
            entry: The entry to remove.
        """
        queue = self._queues.get(key)
        if queue is None:
            return

        if queue.remove(entry):
            subscription = entry.subscription
            was_active = entry.is_active
            entry.state = EntryState.TERMINAL
            entry.subscription = None
            if subscription is not None:
                subscription.unsubscribe()
            logger.debug(
                "Removed %s operation from key %r",
                "active" if was_active else "pending",
                key,
            )

        self.activate_head_if_idle(key)

    def activate_head_if_idle(self, key: str) -> None:
        """Start the head entry of the queue for key unless it is running.

        Deletes the queue if it is empty.

        Args:
            key: The serialization key.
        """
        queue = self._queues.get(key)
        if queue is None:
            return

        entry = queue.head
        if entry is None:
            del self._queues[key]
            logger.debug("Released queue for key %r", key)
            return

        if not entry.is_pending:
            return

        # Mark active before forwarding so re-entrant calls cannot start it twice
        entry.state = EntryState.ACTIVE
        logger.debug("Starting operation on key %r", key)

        relay = _EntryRelay(self, key, entry)
        try:
            stream = entry.forward(entry.operation)
            subscription = stream.subscribe(relay)
        except Exception as e:
            if not entry.is_active:
                # Already terminated through the relay
                raise
            relay.error(e)
            return

        if entry.is_active:
            entry.subscription = subscription
        else:
            # Finished or cancelled while subscribing
            subscription.unsubscribe()
