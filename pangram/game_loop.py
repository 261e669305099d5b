from __future__ import annotations

import asyncio
import logging
from functools import partial

from pangram.core.context import new_puzzle_context
from pangram.core.events import Event, ValidationFailed, event_name
from pangram.core.ports import PuzzleSource, Scoring, ValidationPort
from pangram.engine import apply
from pangram.models import GamePhase, InboundEvent, Snapshot
from pangram.observer import SnapshotHub
from pangram.slot import ValidationSlot
from pangram.validation import validate_word


logger = logging.getLogger(__name__)


class GameSession:
    """Serialized event dispatch for one puzzle session.

    Entry point for both the human UI and the agent runner:
    - callers `submit()` events; nothing is processed inline
    - a single worker applies events one at a time through the transition function
    - validations run in the slot and come back through the same queue
    - a snapshot is published after every processed event
    """

    def __init__(
        self,
        *,
        port: ValidationPort,
        scoring: Scoring,
        puzzles: PuzzleSource,
        puzzle_index: int = 0,
        hub: SnapshotHub | None = None,
    ) -> None:
        self._port = port
        self._scoring = scoring
        self._puzzles = puzzles

        self._phase = GamePhase.accepting
        self._context = new_puzzle_context(puzzles=puzzles, puzzle_index=puzzle_index)
        self._version = 0

        self._queue: asyncio.Queue[Event] = asyncio.Queue()
        self._slot = ValidationSlot(deliver=self._queue.put_nowait)
        self._worker: asyncio.Task[None] | None = None
        self._loop: asyncio.AbstractEventLoop | None = None

        self.hub = hub or SnapshotHub()
        self.hub.publish(self._snapshot())

    @property
    def snapshot(self) -> Snapshot:
        return self.hub.latest

    @property
    def idle(self) -> bool:
        """Nothing queued and no validation outstanding; the next submitted event is processed next."""

        return self._queue.empty() and self._phase == GamePhase.accepting

    @property
    def running(self) -> bool:
        return self._worker is not None and not self._worker.done()

    async def start(self) -> None:
        if self.running:
            return
        self._loop = asyncio.get_running_loop()
        self._worker = asyncio.create_task(self._run(), name="pangram-dispatch")
        logger.info("session started puzzle_index=%s", self._context.puzzle_index)

    async def stop(self) -> None:
        self._slot.cancel()
        worker, self._worker = self._worker, None
        if worker is not None:
            worker.cancel()
            try:
                await worker
            except asyncio.CancelledError:
                pass

        # The cancelled validation can never report back, so resolve it as failed.
        if self._phase == GamePhase.resolving:
            self._process(ValidationFailed(instance=self._context.instance, error="session stopped"))

        if worker is not None:
            logger.info("session stopped version=%s", self._version)

    def submit(self, event: InboundEvent) -> None:
        """Enqueue a caller event. Never blocks and never raises for game reasons."""

        self._queue.put_nowait(event)

    def submit_threadsafe(self, event: InboundEvent) -> None:
        """Enqueue from a thread other than the one running the session loop."""

        if self._loop is None:
            raise RuntimeError("Session not started")
        self._loop.call_soon_threadsafe(self._queue.put_nowait, event)

    async def join(self) -> None:
        """Wait until every event queued so far has been processed."""

        await self._queue.join()

    async def _run(self) -> None:
        while True:
            event = await self._queue.get()
            try:
                self._process(event)
            finally:
                self._queue.task_done()

    def _process(self, event: Event) -> None:
        name = event_name(event)
        try:
            transition = apply(phase=self._phase, context=self._context, event=event, puzzles=self._puzzles)
        except Exception:
            # Transitions are all-or-nothing: keep the previous phase/context.
            logger.exception("transition failed for %s; state left unchanged", name)
            return

        if transition.dropped:
            logger.debug("dropped %s in phase=%s", name, self._phase.value)

        if transition.cancel_inflight:
            self._slot.cancel()

        self._phase = transition.phase
        self._context = transition.context

        if transition.request is not None:
            run = partial(validate_word, port=self._port, scoring=self._scoring)
            self._slot.start(transition.request, run)

        self._version += 1
        self.hub.publish(self._snapshot())
        logger.debug(
            "processed %s -> phase=%s tally=%s version=%s",
            name,
            self._phase.value,
            self._context.tally,
            self._version,
        )

    def _snapshot(self) -> Snapshot:
        return Snapshot(phase=self._phase, context=self._context, version=self._version)
