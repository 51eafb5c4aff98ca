"""In-memory document cache implementation."""

from dataclasses import dataclass

from cachetools import LRUCache  # type: ignore[import-untyped]
from graphql import DocumentNode

from serializeql.core.entities.extraction import DirectiveExtraction


@dataclass(frozen=True)
class _CachedExtraction:
    source: DocumentNode
    extraction: DirectiveExtraction


class InMemoryDocumentCache:
    """Identity-keyed document cache using LRU eviction.

    Entries are keyed by id() of the source document. Each entry keeps a
    reference to its source document, so an id cannot be reused by a new
    document while the entry is cached, and lookups confirm identity.
    Documents parsed once and reused (module constants, parse_document)
    hit the cache; freshly parsed copies of the same text do not.
    """

    def __init__(self, maxsize: int = 1000) -> None:
        """Initialize the document cache.

        Args:
            maxsize: Maximum number of documents kept.
        """
        self._maxsize = maxsize
        self._cache: LRUCache[int, _CachedExtraction] = LRUCache(maxsize=maxsize)

        # Statistics
        self._hits = 0
        self._misses = 0

    def get(self, document: DocumentNode) -> DirectiveExtraction | None:
        """Retrieve the extraction cached for a document.

        Args:
            document: The original document.

        Returns:
            The cached extraction, or None if not cached.
        """
        entry = self._cache.get(id(document))
        if entry is None or entry.source is not document:
            self._misses += 1
            return None

        self._hits += 1
        return entry.extraction

    def set(self, document: DocumentNode, extraction: DirectiveExtraction) -> None:
        """Store the extraction for a document.

        Args:
            document: The original document.
            extraction: The extraction to cache.
        """
        self._cache[id(document)] = _CachedExtraction(document, extraction)

    def clear(self) -> None:
        """Clear all cached extractions."""
        self._cache.clear()
        self._hits = 0
        self._misses = 0

    @property
    def stats(self) -> dict[str, int]:
        """Get cache statistics.

        Returns:
            Dictionary with hits, misses, and total lookups.
        """
        return {
            "hits": self._hits,
            "misses": self._misses,
            "total": self._hits + self._misses,
        }

    def __len__(self) -> int:
        """Return the number of cached documents."""
        return len(self._cache)

    def __contains__(self, document: object) -> bool:
        entry = self._cache.get(id(document))
        return entry is not None and entry.source is document

    @property
    def maxsize(self) -> int:
        """Return the maximum size of the cache."""
        return self._maxsize
