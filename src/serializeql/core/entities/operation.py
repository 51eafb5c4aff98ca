"""Operation entity."""

from dataclasses import dataclass, field, replace
from typing import Any

from graphql import DocumentNode

from serializeql.utils.document import get_operation_definition, parse_document


@dataclass(frozen=True, eq=False)
class Operation:
    """One logical GraphQL request.

    Operations are never mutated. Rewriting the document produces a
    derived operation via with_query(); equality is identity.
    """

    query: DocumentNode
    variables: dict[str, Any] = field(default_factory=dict)
    context: dict[str, Any] = field(default_factory=dict)
    operation_name: str | None = None

    def get_context(self) -> dict[str, Any]:
        """Return a shallow copy of the context bag."""
        return dict(self.context)

    def with_query(self, query: DocumentNode) -> "Operation":
        """Derive an operation carrying a different document.

        Args:
            query: The replacement document.

        Returns:
            A new Operation with the same variables, context and name.
        """
        return replace(self, query=query)

    @classmethod
    def create(
        cls,
        query: DocumentNode | str,
        variables: dict[str, Any] | None = None,
        context: dict[str, Any] | None = None,
        operation_name: str | None = None,
    ) -> "Operation":
        """Factory method to create a new operation.

        Query strings are parsed through a memoized parser, so the same
        source text always maps to the same document instance.

        Args:
            query: A parsed document or GraphQL source text.
            variables: Runtime variable values.
            context: Per-operation context, e.g. ``serializationKey``.
            operation_name: Defaults to the document's operation name.

        Returns:
            A new Operation instance.
        """
        document = parse_document(query) if isinstance(query, str) else query

        if operation_name is None:
            definition = get_operation_definition(document)
            if definition is not None and definition.name is not None:
                operation_name = definition.name.value

        return cls(
            query=document,
            variables=dict(variables or {}),
            context=dict(context or {}),
            operation_name=operation_name,
        )
