"""Core interfaces (Protocol classes) for serializeql."""

from serializeql.core.interfaces.document_cache import IDocumentCache
from serializeql.core.interfaces.observable import (
    Forward,
    IObservable,
    IObserver,
    ISubscription,
)

__all__ = [
    "IDocumentCache",
    "IObservable",
    "IObserver",
    "ISubscription",
    "Forward",
]
