"""Document cache interface."""

from typing import Protocol

from graphql import DocumentNode

from serializeql.core.entities.extraction import DirectiveExtraction


class IDocumentCache(Protocol):
    """Contract for memoizing directive extraction per document.

    Entries are keyed by document identity, not content: the same
    document instance always maps to the same rewritten document.
    """

    def get(self, document: DocumentNode) -> DirectiveExtraction | None:
        """Retrieve the extraction for a document.

        Args:
            document: The original (unrewritten) document.

        Returns:
            The cached extraction, or None if not cached.
        """
        ...

    def set(self, document: DocumentNode, extraction: DirectiveExtraction) -> None:
        """Store the extraction for a document.

        Args:
            document: The original (unrewritten) document.
            extraction: The result of extracting the directive.
        """
        ...

    def clear(self) -> None:
        """Drop all cached extractions."""
        ...

    def __len__(self) -> int:
        ...
