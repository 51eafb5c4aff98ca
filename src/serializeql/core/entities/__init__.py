"""Domain entities for serializeql."""

from serializeql.core.entities.extraction import DirectiveExtraction, KeyExtraction
from serializeql.core.entities.operation import Operation
from serializeql.core.entities.queue_entry import EntryState, QueueEntry
from serializeql.core.entities.serialize_config import SerializeConfig

__all__ = [
    "Operation",
    "SerializeConfig",
    "DirectiveExtraction",
    "KeyExtraction",
    "EntryState",
    "QueueEntry",
]
