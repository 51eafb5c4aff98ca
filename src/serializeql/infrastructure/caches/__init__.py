"""Document cache implementations."""

from serializeql.infrastructure.caches.memory import InMemoryDocumentCache

__all__ = ["InMemoryDocumentCache"]
