"""Pytest configuration for serializeql tests."""

from collections.abc import Callable
from typing import Any

import pytest

from serializeql.core.entities.operation import Operation
from serializeql.core.services.serialization_queue import QueueManager
from serializeql.infrastructure.observables.observable import (
    Observable,
    SubscriptionObserver,
)


class RecordingObserver:
    """Observer that records every event it receives."""

    def __init__(self) -> None:
        self.values: list[Any] = []
        self.errors: list[BaseException] = []
        self.completed = False

    def next(self, value: Any) -> None:
        self.values.append(value)

    def error(self, error: BaseException) -> None:
        self.errors.append(error)

    def complete(self) -> None:
        self.completed = True


class ManualTransport:
    """Forward callback whose streams are driven by the test.

    Each forwarded operation is recorded together with the observer of
    its stream; the test then pushes results or terminates it.
    """

    def __init__(self) -> None:
        self.started: list[tuple[Operation, SubscriptionObserver[Any]]] = []
        self.disposed: list[Operation] = []

    def forward(self, operation: Operation) -> Observable[Any]:
        def subscriber(observer: SubscriptionObserver[Any]) -> Callable[[], None]:
            self.started.append((operation, observer))
            return lambda: self.disposed.append(operation)

        return Observable(subscriber)

    @property
    def started_operations(self) -> list[Operation]:
        return [operation for operation, _ in self.started]

    def observer_for(self, operation: Operation) -> SubscriptionObserver[Any]:
        for started, observer in self.started:
            if started is operation:
                return observer
        raise AssertionError("operation was never forwarded")


@pytest.fixture
def transport() -> ManualTransport:
    """Create a manually driven transport."""
    return ManualTransport()


@pytest.fixture
def make_observer() -> Callable[[], RecordingObserver]:
    """Factory for recording observers."""
    return RecordingObserver


@pytest.fixture
def queue_manager() -> QueueManager:
    """Create an empty queue manager."""
    return QueueManager()


@pytest.fixture
def make_operation() -> Callable[..., Operation]:
    """Factory for simple operations."""

    def factory(
        name: str = "Op",
        context: dict[str, Any] | None = None,
        variables: dict[str, Any] | None = None,
    ) -> Operation:
        return Operation.create(
            f"query {name} {{ field }}",
            variables=variables,
            context=context,
        )

    return factory
