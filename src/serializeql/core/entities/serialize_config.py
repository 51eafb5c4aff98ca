"""Serialization configuration entity."""

from dataclasses import dataclass


@dataclass
class SerializeConfig:
    """Serialization configuration.

    Controls how serialization keys are derived from operations.

    Context Mode:
        An operation whose context carries ``serializationKey`` is queued
        under that key and its document is forwarded untouched.

    Directive Mode:
        An operation annotated with ``@serialize(key: [...])`` is queued
        under the JSON encoding of the materialized key list, and the
        directive is stripped before the document is forwarded.

    Combined Mode:
        When combine_keys=True (or the operation context sets
        ``serializationKeyDirective``), both keys are joined with
        key_separator, context key first.
    """

    directive_name: str = "serialize"
    key_argument: str = "key"

    context_key: str = "serializationKey"
    combine_context_key: str = "serializationKeyDirective"

    combine_keys: bool = False
    key_separator: str = "-"

    # Rewritten documents kept per source document identity
    document_cache_size: int = 1000

    warn_on_duplicate_directive: bool = True

    def __post_init__(self) -> None:
        """Validate the configuration."""
        if self.document_cache_size <= 0:
            raise ValueError("document_cache_size must be positive")
        if not self.directive_name:
            raise ValueError("directive_name must not be empty")
        if not self.key_argument:
            raise ValueError("key_argument must not be empty")
