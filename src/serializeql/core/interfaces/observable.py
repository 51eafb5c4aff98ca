"""Result stream interfaces.

The queue only needs these shapes from the transport layer: a forward
callback that returns something subscribable, and an observer triple
to relay results to.
"""

from collections.abc import Callable
from typing import TYPE_CHECKING, Protocol, TypeVar

if TYPE_CHECKING:
    from serializeql.core.entities.operation import Operation

T = TypeVar("T")
T_contra = TypeVar("T_contra", contravariant=True)


class IObserver(Protocol[T_contra]):
    """Receiver of a result stream."""

    def next(self, value: T_contra) -> None:
        """Receive one result."""
        ...

    def error(self, error: BaseException) -> None:
        """Receive a terminal error."""
        ...

    def complete(self) -> None:
        """Receive normal termination."""
        ...


class ISubscription(Protocol):
    """Handle to a live result stream."""

    @property
    def closed(self) -> bool:
        """True once the stream terminated or was unsubscribed."""
        ...

    def unsubscribe(self) -> None:
        """Stop the stream and release its resources.

        Must be idempotent.
        """
        ...


class IObservable(Protocol[T]):
    """Lazily started, cancellable stream of results."""

    def subscribe(self, observer: IObserver[T]) -> ISubscription:
        """Start the stream, delivering results to observer.

        Args:
            observer: Receives next/error/complete events.

        Returns:
            A subscription that cancels the stream when unsubscribed.
        """
        ...


Forward = Callable[["Operation"], IObservable]
