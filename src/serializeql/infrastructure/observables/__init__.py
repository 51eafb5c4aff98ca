"""Observable implementation for result streams."""

from serializeql.infrastructure.observables.observable import (
    Observable,
    Subscription,
    SubscriptionObserver,
    collect,
)

__all__ = [
    "Observable",
    "Subscription",
    "SubscriptionObserver",
    "collect",
]
