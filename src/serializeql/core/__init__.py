"""Core domain layer for serializeql."""

from serializeql.core.entities import (
    DirectiveExtraction,
    KeyExtraction,
    Operation,
    QueueEntry,
    SerializeConfig,
)
from serializeql.core.interfaces import (
    IDocumentCache,
    IObservable,
    IObserver,
    ISubscription,
)
from serializeql.core.services import (
    DirectiveTransformer,
    KeyExtractor,
    QueueManager,
)

__all__ = [
    # Entities
    "Operation",
    "SerializeConfig",
    "DirectiveExtraction",
    "KeyExtraction",
    "QueueEntry",
    # Interfaces
    "IDocumentCache",
    "IObservable",
    "IObserver",
    "ISubscription",
    # Services
    "DirectiveTransformer",
    "KeyExtractor",
    "QueueManager",
]
