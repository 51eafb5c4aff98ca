"""Integration tests for SerializingLink on an asyncio event loop."""

import asyncio
from collections.abc import AsyncIterator
from typing import Any

import pytest

from serializeql import Observable, Operation, SerializingLink, collect


class SlowTransport:
    """Transport that answers each operation after its gate is opened."""

    def __init__(self) -> None:
        self.events: list[str] = []
        self.gates: dict[str, asyncio.Event] = {}

    def gate(self, name: str) -> asyncio.Event:
        return self.gates.setdefault(name, asyncio.Event())

    def forward(self, operation: Operation) -> Observable[Any]:
        name = operation.operation_name or "anonymous"

        async def results() -> AsyncIterator[dict[str, Any]]:
            self.events.append(f"start:{name}")
            try:
                await self.gate(name).wait()
                yield {"data": {"name": name}}
            finally:
                self.events.append(f"end:{name}")

        return Observable.from_async_iterable(results())


async def settle() -> None:
    for _ in range(5):
        await asyncio.sleep(0)


@pytest.fixture
def slow_transport() -> SlowTransport:
    """Create a gated transport."""
    return SlowTransport()


class TestSerializingLinkAsync:
    """End-to-end tests with async result streams."""

    @pytest.mark.asyncio
    async def test_same_key_runs_in_order(self, slow_transport: SlowTransport) -> None:
        """Should run operations with the same key one after another."""
        link = SerializingLink()
        first = Operation.create(
            "mutation First($id: ID!) @serialize(key: [$id]) { save(id: $id) }",
            variables={"id": "1"},
        )
        second = Operation.create(
            "mutation Second($id: ID!) @serialize(key: [$id]) { save(id: $id) }",
            variables={"id": "1"},
        )

        first_result = asyncio.ensure_future(
            collect(link.request(first, slow_transport.forward))
        )
        second_result = asyncio.ensure_future(
            collect(link.request(second, slow_transport.forward))
        )
        await settle()
        assert slow_transport.events == ["start:First"]

        slow_transport.gate("Second").set()
        await settle()
        assert slow_transport.events == ["start:First"]

        slow_transport.gate("First").set()
        assert await first_result == [{"data": {"name": "First"}}]
        assert await second_result == [{"data": {"name": "Second"}}]
        assert slow_transport.events == [
            "start:First",
            "end:First",
            "start:Second",
            "end:Second",
        ]
        assert link.queue_count == 0

    @pytest.mark.asyncio
    async def test_different_keys_overlap(self, slow_transport: SlowTransport) -> None:
        """Should run operations with different keys at the same time."""
        link = SerializingLink()
        first = Operation.create("query A { a }", context={"serializationKey": "a"})
        second = Operation.create("query B { b }", context={"serializationKey": "b"})

        results = [
            asyncio.ensure_future(collect(link.request(op, slow_transport.forward)))
            for op in (first, second)
        ]
        await settle()
        assert sorted(slow_transport.events) == ["start:A", "start:B"]

        slow_transport.gate("B").set()
        slow_transport.gate("A").set()
        await asyncio.gather(*results)
        assert link.queue_count == 0

    @pytest.mark.asyncio
    async def test_cancelling_waiter_unblocks_queue(
        self, slow_transport: SlowTransport
    ) -> None:
        """Should release the key when the caller cancels the active request."""
        link = SerializingLink()
        first = Operation.create("query First { a }", context={"serializationKey": "k"})
        second = Operation.create("query Second { a }", context={"serializationKey": "k"})

        first_result = asyncio.ensure_future(
            collect(link.request(first, slow_transport.forward))
        )
        second_result = asyncio.ensure_future(
            collect(link.request(second, slow_transport.forward))
        )
        await settle()

        first_result.cancel()
        await settle()
        assert "end:First" in slow_transport.events
        assert "start:Second" in slow_transport.events

        slow_transport.gate("Second").set()
        assert await second_result == [{"data": {"name": "Second"}}]
        assert link.queue_count == 0

    @pytest.mark.asyncio
    async def test_unkeyed_operations_bypass_queue(
        self, slow_transport: SlowTransport
    ) -> None:
        """Should forward unkeyed operations immediately."""
        link = SerializingLink()
        operation = Operation.create("query Free { a }")
        slow_transport.gate("Free").set()
        result = await collect(link.request(operation, slow_transport.forward))
        assert result == [{"data": {"name": "Free"}}]
        assert link.queue_count == 0
