"""Extraction result value objects."""

from dataclasses import dataclass

from graphql import DocumentNode, ListValueNode

from serializeql.core.entities.operation import Operation


@dataclass(frozen=True)
class DirectiveExtraction:
    """Result of stripping the @serialize directive from a document.

    When no directive was found, document is the original document and
    key_arguments is None.
    """

    document: DocumentNode
    key_arguments: ListValueNode | None = None

    @property
    def has_key(self) -> bool:
        """Check whether a key list was extracted."""
        return self.key_arguments is not None


@dataclass(frozen=True)
class KeyExtraction:
    """Serialization key resolved for an operation.

    operation is the operation to forward: the original one, or a derived
    one whose document no longer carries the directive.
    """

    operation: Operation
    key: str | None = None

    @property
    def is_serialized(self) -> bool:
        """Check whether the operation must go through a queue."""
        return self.key is not None
