"""serializeql - Per-key serialization of GraphQL operations.

Operations that share a serialization key are executed one at a time,
in order. Operations under different keys run concurrently.

The key is taken from the operation context or from a @serialize
directive whose key list may reference variables:

    mutation UpdateTodo($id: ID!, $done: Boolean!)
        @serialize(key: ["todo", $id]) {
        updateTodo(id: $id, done: $done) { id done }
    }

The directive is removed before the operation is forwarded, along with
any variable definition that only the directive used.

Example:
    from serializeql import Observable, Operation, SerializingLink

    link = SerializingLink()

    def forward(operation: Operation) -> Observable:
        return Observable.from_async_iterable(send(operation))

    operation = Operation.create(query, variables={"id": "1", "done": True})
    link.request(operation, forward).subscribe(on_next=print)

Using only the context:
    operation = Operation.create(query, context={"serializationKey": "todos"})
"""

from serializeql.core.entities import (
    DirectiveExtraction,
    EntryState,
    KeyExtraction,
    Operation,
    QueueEntry,
    SerializeConfig,
)
from serializeql.core.exceptions import (
    InvalidDocumentError,
    InvalidKeyArgumentTypeError,
    InvalidKeyValueError,
    KeyExtractionError,
    MissingKeyArgumentError,
    MissingVariableError,
    SerializeError,
    UnsupportedArgumentKindError,
)
from serializeql.core.interfaces import (
    Forward,
    IDocumentCache,
    IObservable,
    IObserver,
    ISubscription,
)
from serializeql.core.services import (
    DirectiveTransformer,
    KeyExtractor,
    QueueManager,
    SerializationQueue,
    extract_key,
    materialize_key,
    value_for_argument,
)
from serializeql.infrastructure import (
    InMemoryDocumentCache,
    Observable,
    collect,
)
from serializeql.link import SerializingLink

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Link
    "SerializingLink",
    # Core entities
    "Operation",
    "SerializeConfig",
    "DirectiveExtraction",
    "KeyExtraction",
    "QueueEntry",
    "EntryState",
    # Errors
    "SerializeError",
    "InvalidDocumentError",
    "KeyExtractionError",
    "MissingKeyArgumentError",
    "InvalidKeyArgumentTypeError",
    "InvalidKeyValueError",
    "MissingVariableError",
    "UnsupportedArgumentKindError",
    # Core interfaces
    "IDocumentCache",
    "IObservable",
    "IObserver",
    "ISubscription",
    "Forward",
    # Key derivation
    "DirectiveTransformer",
    "KeyExtractor",
    "extract_key",
    "materialize_key",
    "value_for_argument",
    # Queueing
    "QueueManager",
    "SerializationQueue",
    # Infrastructure implementations
    "InMemoryDocumentCache",
    "Observable",
    "collect",
]
