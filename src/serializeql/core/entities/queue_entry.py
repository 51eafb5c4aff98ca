"""Queue entry entity."""

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

from serializeql.core.entities.operation import Operation

if TYPE_CHECKING:
    from serializeql.core.interfaces.observable import (
        Forward,
        IObserver,
        ISubscription,
    )


class EntryState(str, Enum):
    """Lifecycle state of a queue entry."""

    PENDING = "PENDING"
    ACTIVE = "ACTIVE"
    TERMINAL = "TERMINAL"


@dataclass(eq=False)
class QueueEntry:
    """Bookkeeping record for one admitted operation.

    Entries are compared by identity, so the same operation can be
    enqueued twice and each admission cancelled independently.
    """

    operation: Operation
    forward: "Forward"
    observer: "IObserver[Any]"
    subscription: "ISubscription | None" = None
    state: EntryState = EntryState.PENDING

    @property
    def is_pending(self) -> bool:
        return self.state is EntryState.PENDING

    @property
    def is_active(self) -> bool:
        return self.state is EntryState.ACTIVE
