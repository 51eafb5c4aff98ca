"""Infrastructure layer implementations for serializeql."""

from serializeql.infrastructure.caches import InMemoryDocumentCache
from serializeql.infrastructure.observables import Observable, collect

__all__ = [
    "InMemoryDocumentCache",
    "Observable",
    "collect",
]
