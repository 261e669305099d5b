from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field

from pangram.core.events import InternalEvent, ValidationCompleted, ValidationFailed
from pangram.core.results import ValidationResult
from pangram.engine import ValidationRequest


logger = logging.getLogger(__name__)

ValidationRunner = Callable[[ValidationRequest], Awaitable[ValidationResult]]


class SlotBusyError(RuntimeError):
    pass


@dataclass(slots=True, eq=False)
class SlotHandle:
    request: ValidationRequest
    task: asyncio.Task[None] | None = None
    cancelled: bool = False
    delivered: bool = False


@dataclass(slots=True)
class ValidationSlot:
    """Owns at most one outstanding validation task.

    Contract:
      - `start(request, run)` spawns the task; starting while busy raises SlotBusyError.
      - every started request delivers exactly one completion event through `deliver`,
        unless it was cancelled, in which case it delivers none.
    """

    deliver: Callable[[InternalEvent], None]
    _active: SlotHandle | None = field(default=None, init=False)

    @property
    def active(self) -> SlotHandle | None:
        return self._active

    def start(self, request: ValidationRequest, run: ValidationRunner) -> SlotHandle:
        if self._active is not None:
            raise SlotBusyError("A validation is already outstanding")

        handle = SlotHandle(request=request)
        self._active = handle
        handle.task = asyncio.create_task(self._run(handle, run), name=f"validate:{request.instance}:{request.word}")
        logger.debug("validation started instance=%s word=%s", request.instance, request.word)
        return handle

    def cancel(self, handle: SlotHandle | None = None) -> None:
        target = handle or self._active
        if target is None:
            return

        target.cancelled = True
        if target.task is not None and not target.task.done():
            target.task.cancel()
        if self._active is target:
            self._active = None
        logger.debug("validation cancelled instance=%s word=%s", target.request.instance, target.request.word)

    async def _run(self, handle: SlotHandle, run: ValidationRunner) -> None:
        request = handle.request
        event: InternalEvent
        try:
            result = await run(request)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.warning("validation failed instance=%s word=%s: %s", request.instance, request.word, e)
            event = ValidationFailed(instance=request.instance, error=str(e) or type(e).__name__)
        else:
            event = ValidationCompleted(instance=request.instance, result=result)

        if handle.cancelled:
            return

        if self._active is handle:
            self._active = None
        handle.delivered = True
        self.deliver(event)
