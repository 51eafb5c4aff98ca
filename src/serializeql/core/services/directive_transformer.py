"""Extraction of the @serialize directive from query documents."""

import logging

from graphql import DirectiveNode, DocumentNode, ListValueNode

from serializeql.core.entities.extraction import DirectiveExtraction
from serializeql.core.entities.serialize_config import SerializeConfig
from serializeql.core.exceptions import (
    InvalidDocumentError,
    InvalidKeyArgumentTypeError,
    MissingKeyArgumentError,
)
from serializeql.core.interfaces.document_cache import IDocumentCache
from serializeql.utils.document import (
    check_document,
    get_operation_definition,
    get_variables_from_arguments,
    remove_nodes,
    remove_unused_variable_definitions,
)

logger = logging.getLogger(__name__)


class DirectiveTransformer:
    """Strips the @serialize directive from documents.

    The rewritten document never exposes the directive to the server,
    and variables that only the directive used are undeclared so the
    document stays valid. Results are memoized per document instance.
    """

    def __init__(
        self,
        config: SerializeConfig | None = None,
        cache: IDocumentCache | None = None,
    ) -> None:
        """Initialize the transformer.

        Args:
            config: Optional configuration. Uses defaults if not provided.
            cache: Optional document cache. An in-memory LRU cache sized
                by config.document_cache_size is used if not provided.
        """
        self._config = config or SerializeConfig()
        if cache is None:
            from serializeql.infrastructure.caches.memory import InMemoryDocumentCache

            cache = InMemoryDocumentCache(maxsize=self._config.document_cache_size)
        self._cache = cache

    @property
    def cache(self) -> IDocumentCache:
        """Get the document cache."""
        return self._cache

    def extract(self, document: DocumentNode) -> DirectiveExtraction:
        """Extract the key arguments and the rewritten document.

        Args:
            document: The operation's document.

        Returns:
            The rewritten document and the key list, or the original
            document with key_arguments=None if there is no directive.

        Raises:
            InvalidDocumentError: If the document is not a single operation.
            MissingKeyArgumentError: If the directive has no key argument.
            InvalidKeyArgumentTypeError: If the key argument is not a list.
        """
        cached = self._cache.get(document)
        if cached is not None:
            return cached

        check_document(document)

        directive = self._find_directive(document)
        if directive is None:
            extraction = DirectiveExtraction(document=document)
        else:
            key_arguments = self._get_key_arguments(directive)
            extraction = DirectiveExtraction(
                document=self.remove_directive(document, directive),
                key_arguments=key_arguments,
            )

        self._cache.set(document, extraction)
        return extraction

    def remove_directive(
        self,
        document: DocumentNode,
        directive: DirectiveNode,
    ) -> DocumentNode:
        """Return a copy of document without directive on its operation.

        Variable definitions referenced only by the directive's arguments
        are removed as well.

        Args:
            document: The original document, left untouched.
            directive: A directive node of the document's operation.

        Returns:
            The rewritten copy.

        Raises:
            InvalidDocumentError: If the document has no operation or the
                directive is not one of its directives.
        """
        operation = get_operation_definition(document)
        if operation is None:
            raise InvalidDocumentError("Document has no operation definition")

        if not any(node is directive for node in operation.directives or ()):
            raise InvalidDocumentError(
                f"Directive @{directive.name.value} is not on the document's operation"
            )

        rewritten = remove_nodes(document, [directive])

        removed_names = [
            variable.name.value
            for variable in get_variables_from_arguments(directive.arguments)
        ]
        rewritten, pruned = remove_unused_variable_definitions(removed_names, rewritten)
        if pruned:
            logger.debug(
                "Removed variable definitions only used by @%s: %s",
                self._config.directive_name,
                ", ".join(sorted(pruned)),
            )

        return rewritten

    def _find_directive(self, document: DocumentNode) -> DirectiveNode | None:
        operation = get_operation_definition(document)
        if operation is None:
            return None

        matches = [
            directive
            for directive in operation.directives or ()
            if directive.name.value == self._config.directive_name
        ]
        if not matches:
            return None

        if len(matches) > 1 and self._config.warn_on_duplicate_directive:
            # First one wins
            logger.warning(
                "Operation %s has %d @%s directives; only the first is used",
                operation.name.value if operation.name else "<anonymous>",
                len(matches),
                self._config.directive_name,
            )
        return matches[0]

    def _get_key_arguments(self, directive: DirectiveNode) -> ListValueNode:
        argument = next(
            (
                argument
                for argument in directive.arguments or ()
                if argument.name.value == self._config.key_argument
            ),
            None,
        )
        if argument is None:
            raise MissingKeyArgumentError(
                self._config.directive_name, self._config.key_argument
            )
        if not isinstance(argument.value, ListValueNode):
            raise InvalidKeyArgumentTypeError(
                self._config.directive_name,
                argument.value.kind,
                self._config.key_argument,
            )
        return argument.value
