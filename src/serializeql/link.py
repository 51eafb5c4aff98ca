"""Serializing link.

Serializes operations that share a serialization key: every previous
operation with the same key must finish before the next one is
forwarded. The key comes from ``context["serializationKey"]`` or from a
``@serialize(key: [...])`` directive on the operation.

Usage:
    from serializeql import Operation, SerializingLink

    link = SerializingLink()

    operation = Operation.create(
        '''
        mutation UpdateTodo($id: ID!, $text: String!)
            @serialize(key: ["todo", $id]) {
            updateTodo(id: $id, text: $text) { id text }
        }
        ''',
        variables={"id": "1", "text": "Buy milk"},
    )

    # forward() sends the operation and returns an observable of results
    link.request(operation, forward).subscribe(on_next=print)
"""

from typing import Any

from serializeql.core.entities.operation import Operation
from serializeql.core.entities.queue_entry import QueueEntry
from serializeql.core.entities.serialize_config import SerializeConfig
from serializeql.core.interfaces.observable import Forward, IObservable
from serializeql.core.services.key_extractor import KeyExtractor
from serializeql.core.services.serialization_queue import QueueManager
from serializeql.infrastructure.observables.observable import (
    Observable,
    SubscriptionObserver,
)


class SerializingLink:
    """Link that queues operations per serialization key.

    Operations without a key are forwarded immediately. Operations with
    a key are admitted lazily: subscribing to the returned observable
    enqueues the operation, unsubscribing removes it from the queue and
    stops it if it is in flight.
    """

    SERIALIZE = "serializationKey"
    # Context flag: combine the context key and the directive key
    SERIALIZE_DIRECTIVE = "serializationKeyDirective"

    def __init__(
        self,
        config: SerializeConfig | None = None,
        key_extractor: KeyExtractor | None = None,
        queues: QueueManager | None = None,
    ) -> None:
        """Initialize the link.

        Args:
            config: Optional configuration. Uses defaults if not provided.
            key_extractor: Optional key extractor. Built from config if
                not provided.
            queues: Optional queue manager, e.g. to share queues between
                links.
        """
        self._config = config or SerializeConfig()
        self._key_extractor = key_extractor or KeyExtractor(self._config)
        self._queues = queues or QueueManager()

    @property
    def config(self) -> SerializeConfig:
        """Get the configuration."""
        return self._config

    @property
    def queues(self) -> QueueManager:
        """Get the queue manager."""
        return self._queues

    @property
    def queue_count(self) -> int:
        """Number of keys with queued operations."""
        return self._queues.queue_count

    def request(
        self,
        operation: Operation,
        forward: Forward | None = None,
    ) -> IObservable[Any] | None:
        """Handle an operation.

        Args:
            operation: The incoming operation.
            forward: Sends an operation down the chain. When None the link
                is terminal and nothing is returned.

        Returns:
            An observable of results, or None without forward.

        Raises:
            KeyExtractionError: If the @serialize directive is invalid.
            InvalidDocumentError: If the document is not a single operation.
        """
        if forward is None:
            return None

        extraction = self._key_extractor.extract_key(operation)
        if extraction.key is None:
            return forward(extraction.operation)

        key = extraction.key
        forwarded = extraction.operation

        def subscriber(observer: SubscriptionObserver[Any]) -> Any:
            entry = QueueEntry(operation=forwarded, forward=forward, observer=observer)
            self._queues.enqueue(key, entry)

            def cleanup() -> None:
                self._queues.cancel(key, entry)

            return cleanup

        return Observable(subscriber)
