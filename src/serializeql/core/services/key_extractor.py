"""Serialization key resolution for operations."""

from serializeql.core.entities.extraction import KeyExtraction
from serializeql.core.entities.operation import Operation
from serializeql.core.entities.serialize_config import SerializeConfig
from serializeql.core.services.directive_transformer import DirectiveTransformer
from serializeql.core.services.value_materializer import materialize_key


class KeyExtractor:
    """Resolves the serialization key of an operation.

    The key comes from the operation context, from the @serialize
    directive, or from both joined together:

        serializationKey="A"                     -> "A"
        @serialize(key: [1, $id]), {id: "x"}     -> '[1,"x"]'
        both, combined mode                      -> 'A-[1,"x"]'

    Without combined mode a context key short-circuits: the document is
    not inspected and the operation is forwarded unchanged.
    """

    def __init__(
        self,
        config: SerializeConfig | None = None,
        transformer: DirectiveTransformer | None = None,
    ) -> None:
        """Initialize the key extractor.

        Args:
            config: Optional configuration. Uses defaults if not provided.
            transformer: Optional directive transformer sharing the config.
        """
        self._config = config or SerializeConfig()
        self._transformer = transformer or DirectiveTransformer(self._config)

    @property
    def config(self) -> SerializeConfig:
        """Get the configuration."""
        return self._config

    @property
    def transformer(self) -> DirectiveTransformer:
        """Get the directive transformer."""
        return self._transformer

    def should_combine(self, operation: Operation) -> bool:
        """Check whether context and directive keys are joined for operation."""
        return self._config.combine_keys or bool(
            operation.context.get(self._config.combine_context_key)
        )

    def extract_key(
        self,
        operation: Operation,
        combine: bool | None = None,
    ) -> KeyExtraction:
        """Resolve the key and the operation to forward.

        Args:
            operation: The incoming operation.
            combine: Join the context key and the directive key. Defaults
                to the configuration and the operation's context flag.

        Returns:
            The key (None means "do not serialize") and the operation to
            forward, which carries the rewritten document when a directive
            was found.

        Raises:
            KeyExtractionError: If the directive or its key list is invalid.
            InvalidDocumentError: If the document is not a single operation.
        """
        if combine is None:
            combine = self.should_combine(operation)

        keys: list[str] = []
        context_key = operation.context.get(self._config.context_key)
        if context_key:
            if not combine:
                return KeyExtraction(operation=operation, key=str(context_key))
            keys.append(str(context_key))

        extraction = self._transformer.extract(operation.query)

        if extraction.key_arguments is None:
            if keys:
                return KeyExtraction(
                    operation=operation,
                    key=self._config.key_separator.join(keys),
                )
            return KeyExtraction(operation=operation)

        keys.append(
            materialize_key(
                extraction.key_arguments,
                operation.variables,
                self._config.directive_name,
            )
        )

        # Forward the rewritten document so the server never sees the directive
        return KeyExtraction(
            operation=operation.with_query(extraction.document),
            key=self._config.key_separator.join(keys),
        )


_default_extractor: KeyExtractor | None = None


def extract_key(operation: Operation, combine: bool = False) -> KeyExtraction:
    """Resolve the key of an operation with the default configuration.

    Args:
        operation: The incoming operation.
        combine: Join the context key and the directive key.

    Returns:
        The key and the operation to forward.
    """
    global _default_extractor
    if _default_extractor is None:
        _default_extractor = KeyExtractor()
    return _default_extractor.extract_key(operation, combine=combine)
