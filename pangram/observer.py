from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator, Callable

from pangram.models import Snapshot


logger = logging.getLogger(__name__)

SnapshotListener = Callable[[Snapshot], None]


class SnapshotHub:
    """In-process pub/sub of engine snapshots.

    Contract:
      - `latest` is always the snapshot after the most recently processed event.
      - subscribers get every published snapshot through their own queue.
      - listeners are plain callables; one that raises is logged and dropped.

    Snapshots are frozen models, so subscribers share the same objects safely.
    """

    def __init__(self, initial: Snapshot | None = None) -> None:
        self._latest = initial
        self._queues: set[asyncio.Queue[Snapshot]] = set()
        self._listeners: list[SnapshotListener] = []

    @property
    def latest(self) -> Snapshot:
        if self._latest is None:
            raise RuntimeError("No snapshot published yet")
        return self._latest

    def subscribe(self) -> asyncio.Queue[Snapshot]:
        queue: asyncio.Queue[Snapshot] = asyncio.Queue()
        self._queues.add(queue)
        return queue

    def unsubscribe(self, queue: asyncio.Queue[Snapshot]) -> None:
        self._queues.discard(queue)

    def add_listener(self, listener: SnapshotListener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: SnapshotListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def publish(self, snapshot: Snapshot) -> None:
        self._latest = snapshot

        for queue in list(self._queues):
            queue.put_nowait(snapshot)

        dead: list[SnapshotListener] = []
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                logger.exception("snapshot listener %r failed; removing it", listener)
                dead.append(listener)

        for listener in dead:
            self.remove_listener(listener)

    async def watch(self) -> AsyncIterator[Snapshot]:
        """Yield every snapshot published from now on."""

        queue = self.subscribe()
        try:
            while True:
                yield await queue.get()
        finally:
            self.unsubscribe(queue)

    async def wait_for(self, predicate: Callable[[Snapshot], bool], timeout: float | None = None) -> Snapshot:
        """Return the first snapshot (current one included) matching `predicate`."""

        if self._latest is not None and predicate(self._latest):
            return self._latest

        queue = self.subscribe()
        try:
            async with asyncio.timeout(timeout):
                while True:
                    snapshot = await queue.get()
                    if predicate(snapshot):
                        return snapshot
        finally:
            self.unsubscribe(queue)
