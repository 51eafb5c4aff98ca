"""Minimal observable for relaying operation results.

Observables are lazy: nothing runs until subscribe() is called. A
subscription closes when the stream errors, completes, or is
unsubscribed, and its cleanup runs exactly once at that point.
"""

import asyncio
import logging
from collections.abc import AsyncIterable, Callable
from typing import Any, Generic, TypeVar, Union

from serializeql.core.interfaces.observable import IObserver, ISubscription

logger = logging.getLogger(__name__)

T = TypeVar("T")


class _CallbackObserver(Generic[T]):
    """Observer built from optional callbacks."""

    def __init__(
        self,
        on_next: Callable[[T], Any] | None = None,
        on_error: Callable[[BaseException], Any] | None = None,
        on_complete: Callable[[], Any] | None = None,
    ) -> None:
        self._on_next = on_next
        self._on_error = on_error
        self._on_complete = on_complete

    def next(self, value: T) -> None:
        if self._on_next is not None:
            self._on_next(value)

    def error(self, error: BaseException) -> None:
        if self._on_error is None:
            logger.error("Unhandled error in observable", exc_info=error)
            return
        self._on_error(error)

    def complete(self) -> None:
        if self._on_complete is not None:
            self._on_complete()


class SubscriptionObserver(Generic[T]):
    """Observer handed to a subscriber function.

    Drops events after the subscription is closed.
    """

    def __init__(self, subscription: "Subscription") -> None:
        self._subscription = subscription

    @property
    def closed(self) -> bool:
        return self._subscription.closed

    def next(self, value: T) -> None:
        if self._subscription.closed:
            return
        self._subscription.observer.next(value)

    def error(self, error: BaseException) -> None:
        if self._subscription.closed:
            return
        self._subscription._close()
        try:
            self._subscription.observer.error(error)
        finally:
            self._subscription._run_cleanup()

    def complete(self) -> None:
        if self._subscription.closed:
            return
        self._subscription._close()
        try:
            self._subscription.observer.complete()
        finally:
            self._subscription._run_cleanup()


Cleanup = Union[Callable[[], Any], ISubscription, None]
Subscriber = Callable[[SubscriptionObserver[T]], Cleanup]


class Subscription:
    """A running subscription to an Observable."""

    def __init__(self, observer: IObserver[Any], subscriber: Subscriber[Any]) -> None:
        self._observer = observer
        self._closed = False
        self._cleanup: Cleanup = None

        sink: SubscriptionObserver[Any] = SubscriptionObserver(self)
        try:
            cleanup = subscriber(sink)
        except Exception as e:
            sink.error(e)
            return

        self._cleanup = cleanup
        if self._closed:
            # Terminated synchronously inside the subscriber
            self._run_cleanup()

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def observer(self) -> IObserver[Any]:
        return self._observer

    def unsubscribe(self) -> None:
        """Stop receiving events and run the cleanup."""
        if self._closed:
            return
        self._closed = True
        self._run_cleanup()

    def _close(self) -> None:
        self._closed = True

    def _run_cleanup(self) -> None:
        cleanup, self._cleanup = self._cleanup, None
        if cleanup is None:
            return
        if callable(cleanup):
            cleanup()
        else:
            cleanup.unsubscribe()


class Observable(Generic[T]):
    """Lazy, cancellable stream of values.

    Usage:
        def subscriber(observer):
            observer.next(1)
            observer.complete()
            return lambda: print("cleanup")

        Observable(subscriber).subscribe(on_next=print)

    The subscriber may return a cleanup callable, a subscription to
    unsubscribe, or None.
    """

    def __init__(self, subscriber: Subscriber[T]) -> None:
        """Initialize the observable.

        Args:
            subscriber: Called with an observer on every subscribe().
        """
        self._subscriber = subscriber

    def subscribe(
        self,
        observer: IObserver[T] | None = None,
        *,
        on_next: Callable[[T], Any] | None = None,
        on_error: Callable[[BaseException], Any] | None = None,
        on_complete: Callable[[], Any] | None = None,
    ) -> Subscription:
        """Start the stream.

        Args:
            observer: An object with next/error/complete methods.
            on_next: Callback for values, used when observer is None.
            on_error: Callback for a terminal error.
            on_complete: Callback for normal termination.

        Returns:
            The subscription.
        """
        if observer is None:
            observer = _CallbackObserver(on_next, on_error, on_complete)
        return Subscription(observer, self._subscriber)

    @classmethod
    def of(cls, *values: T) -> "Observable[T]":
        """Create an observable emitting values and completing synchronously."""

        def subscriber(observer: SubscriptionObserver[T]) -> None:
            for value in values:
                observer.next(value)
            observer.complete()

        return cls(subscriber)

    @classmethod
    def from_error(cls, error: BaseException) -> "Observable[Any]":
        """Create an observable that fails immediately."""

        def subscriber(observer: SubscriptionObserver[Any]) -> None:
            observer.error(error)

        return cls(subscriber)

    @classmethod
    def from_async_iterable(cls, iterable: AsyncIterable[T]) -> "Observable[T]":
        """Create an observable driven by an async iterable.

        Subscribing schedules a task on the running event loop that pulls
        values from the iterable. Unsubscribing cancels the task.

        Args:
            iterable: Source of values, e.g. an async generator.

        Returns:
            The observable.
        """

        def subscriber(observer: SubscriptionObserver[T]) -> Callable[[], None]:
            finished = False

            async def pump() -> None:
                nonlocal finished
                try:
                    async for value in iterable:
                        observer.next(value)
                except asyncio.CancelledError:
                    raise
                except Exception as e:
                    finished = True
                    observer.error(e)
                else:
                    finished = True
                    observer.complete()

            task = asyncio.get_running_loop().create_task(pump())

            def cleanup() -> None:
                if not finished and not task.done():
                    task.cancel()

            return cleanup

        return cls(subscriber)


async def collect(observable: Observable[T]) -> list[T]:
    """Subscribe and wait for the stream to finish.

    Args:
        observable: The stream to drain.

    Returns:
        All values emitted before completion.

    Raises:
        Exception: The error the stream terminated with.
    """
    loop = asyncio.get_running_loop()
    future: asyncio.Future[list[T]] = loop.create_future()
    values: list[T] = []

    def on_error(error: BaseException) -> None:
        if not future.done():
            future.set_exception(error)

    def on_complete() -> None:
        if not future.done():
            future.set_result(values)

    subscription = observable.subscribe(
        on_next=values.append,
        on_error=on_error,
        on_complete=on_complete,
    )
    try:
        return await future
    finally:
        subscription.unsubscribe()
