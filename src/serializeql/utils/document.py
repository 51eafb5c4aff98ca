"""Traversal helpers over GraphQL query documents.

Collects arguments and variable references from operations, fragments,
selection sets and directives, so a rewritten document can be checked
for variables that are no longer referenced.
"""

from collections.abc import Iterable, Sequence
from typing import Any

from cachetools import LRUCache, cached
from graphql import (
    REMOVE,
    ArgumentNode,
    DirectiveNode,
    DocumentNode,
    ExecutableDefinitionNode,
    FieldNode,
    FragmentDefinitionNode,
    InlineFragmentNode,
    ListValueNode,
    Node,
    ObjectValueNode,
    OperationDefinitionNode,
    SelectionNode,
    SelectionSetNode,
    ValueNode,
    VariableNode,
    Visitor,
    parse,
    visit,
)

from serializeql.core.exceptions import InvalidDocumentError


@cached(cache=LRUCache(maxsize=1000))
def parse_document(source: str) -> DocumentNode:
    """Parse GraphQL source text, reusing the document for repeated text.

    Args:
        source: The GraphQL source text.

    Returns:
        The parsed document. The same text yields the same instance while
        it stays in the cache.
    """
    return parse(source)


def check_document(document: DocumentNode) -> None:
    """Check that a document is a single executable operation.

    Args:
        document: The document to check.

    Raises:
        InvalidDocumentError: If it is not a DocumentNode, contains
            non-executable definitions, or has more than one operation.
    """
    if not isinstance(document, DocumentNode):
        raise InvalidDocumentError(
            "Expecting a parsed GraphQL document. Perhaps you need to wrap "
            "the query string in Operation.create()?"
        )

    operations = []
    for definition in document.definitions:
        if not isinstance(definition, ExecutableDefinitionNode):
            raise InvalidDocumentError(
                f"Schema type definitions not allowed in queries. "
                f"Found: '{definition.kind}'"
            )
        if isinstance(definition, OperationDefinitionNode):
            operations.append(definition)

    if len(operations) > 1:
        raise InvalidDocumentError(
            f"Ambiguous GraphQL document: contains {len(operations)} operations"
        )


def get_operation_definition(document: DocumentNode) -> OperationDefinitionNode | None:
    """Return the first operation definition of a document."""
    for definition in document.definitions:
        if isinstance(definition, OperationDefinitionNode):
            return definition
    return None


def get_arguments_from_directives(
    directives: Sequence[DirectiveNode] | None,
) -> list[ArgumentNode]:
    arguments: list[ArgumentNode] = []
    for directive in directives or ():
        arguments.extend(directive.arguments or ())
    return arguments


def get_arguments_from_selection(selection: SelectionNode) -> list[ArgumentNode]:
    """Collect arguments used by a selection and everything below it.

    Fields contribute their own arguments; fields and inline fragments
    are descended into. Fragment spreads only contribute their directives,
    their definitions are visited separately.
    """
    arguments = get_arguments_from_directives(selection.directives)
    if isinstance(selection, FieldNode):
        arguments.extend(selection.arguments or ())
        arguments.extend(get_arguments_from_selection_set(selection.selection_set))
    elif isinstance(selection, InlineFragmentNode):
        arguments.extend(get_arguments_from_selection_set(selection.selection_set))
    return arguments


def get_arguments_from_selection_set(
    selection_set: SelectionSetNode | None,
) -> list[ArgumentNode]:
    if selection_set is None:
        return []
    arguments: list[ArgumentNode] = []
    for selection in selection_set.selections:
        arguments.extend(get_arguments_from_selection(selection))
    return arguments


def get_arguments_from_operation(operation: OperationDefinitionNode) -> list[ArgumentNode]:
    return get_arguments_from_directives(operation.directives) + (
        get_arguments_from_selection_set(operation.selection_set)
    )


def get_arguments_from_fragment(fragment: FragmentDefinitionNode) -> list[ArgumentNode]:
    return get_arguments_from_directives(fragment.directives) + (
        get_arguments_from_selection_set(fragment.selection_set)
    )


def get_arguments_from_document(document: DocumentNode) -> list[ArgumentNode]:
    """Collect every argument of every operation and fragment in a document."""
    arguments: list[ArgumentNode] = []
    for definition in document.definitions:
        if isinstance(definition, OperationDefinitionNode):
            arguments.extend(get_arguments_from_operation(definition))
        elif isinstance(definition, FragmentDefinitionNode):
            arguments.extend(get_arguments_from_fragment(definition))
    return arguments


def get_variables_from_value(node: ValueNode) -> list[VariableNode]:
    """Collect variable references in a value, descending into lists and objects.

    Args:
        node: Any argument value node.

    Returns:
        Variable nodes in document order.
    """
    if isinstance(node, VariableNode):
        return [node]
    if isinstance(node, ListValueNode):
        return [
            variable
            for value in node.values
            for variable in get_variables_from_value(value)
        ]
    if isinstance(node, ObjectValueNode):
        return [
            variable
            for object_field in node.fields
            for variable in get_variables_from_value(object_field.value)
        ]
    return []


def get_variables_from_arguments(
    arguments: Iterable[ArgumentNode] | None,
) -> list[VariableNode]:
    return [
        variable
        for argument in arguments or ()
        for variable in get_variables_from_value(argument.value)
    ]


class _NodeRemover(Visitor):
    """Visitor dropping the given nodes, compared by identity."""

    def __init__(self, nodes: Iterable[Node]) -> None:
        super().__init__()
        self._ids = {id(node) for node in nodes}

    def enter(self, node: Node, *_args: Any) -> Any:
        if id(node) in self._ids:
            return REMOVE
        return None


def remove_nodes(document: DocumentNode, nodes: Iterable[Node]) -> DocumentNode:
    """Return a copy of document without the given nodes.

    The document is left untouched. Unchanged subtrees are shared with it.

    Args:
        document: The document to rewrite.
        nodes: Nodes of document to drop.

    Returns:
        The rewritten document.
    """
    return visit(document, _NodeRemover(nodes))


def remove_unused_variable_definitions(
    names: Iterable[str],
    document: DocumentNode,
) -> tuple[DocumentNode, set[str]]:
    """Drop definitions of the given variables if the document no longer uses them.

    Args:
        names: Candidate variable names.
        document: The document to prune, left untouched.

    Returns:
        The pruned document (document itself if nothing was removed) and
        the names whose definitions were removed.
    """
    candidates = set(names)
    if not candidates:
        return document, set()

    used = {
        variable.name.value
        for variable in get_variables_from_arguments(get_arguments_from_document(document))
    }
    unused = candidates - used
    operation = get_operation_definition(document)
    if not unused or operation is None:
        return document, set()

    definitions = [
        definition
        for definition in operation.variable_definitions or ()
        if definition.variable.name.value in unused
    ]
    if not definitions:
        return document, set()

    removed = {definition.variable.name.value for definition in definitions}
    return remove_nodes(document, definitions), removed
