"""Domain services for serializeql."""

from serializeql.core.services.directive_transformer import DirectiveTransformer
from serializeql.core.services.key_extractor import KeyExtractor, extract_key
from serializeql.core.services.serialization_queue import (
    QueueManager,
    SerializationQueue,
)
from serializeql.core.services.value_materializer import (
    get_variable_or_raise,
    materialize_key,
    value_for_argument,
)

__all__ = [
    # Key derivation
    "DirectiveTransformer",
    "KeyExtractor",
    "extract_key",
    "materialize_key",
    "value_for_argument",
    "get_variable_or_raise",
    # Queueing
    "QueueManager",
    "SerializationQueue",
]
