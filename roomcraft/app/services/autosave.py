"""
Debounced auto-save.

Rapid edits (drags, rotations) call ``schedule_auto_save`` many times a
second. Only the last snapshot of a burst is written, once the editor has
been quiet for ``debounce_ms``.
"""

import asyncio
import logging
from enum import Enum
from typing import Callable

from roomcraft.app.core.config import settings
from roomcraft.app.schemas.design import Design
from roomcraft.app.storage.storage_service import StorageService
from roomcraft.app.utils.clock import now_ms

logger = logging.getLogger(__name__)


class SaveStatus(str, Enum):
    """Auto-save status."""
    IDLE = "idle"
    SAVING = "saving"
    SAVED = "saved"
    ERROR = "error"


StatusListener = Callable[[SaveStatus, str | None], None]


class AutoSaveManager:
    """
    Coalesce bursts of design edits into single durable writes.

    State machine: ``idle -> saving -> saved | error``, and back to
    ``idle`` on the next schedule (or after a short display delay).

    A single timer task is pending at any time. Scheduling cancels it and
    starts a new one; once a timer fires it detaches itself before writing,
    so a later schedule never interrupts a write in progress. Writes are
    serialized by a lock and a timer write is skipped once a newer schedule or
    ``force_save`` has superseded it, so an older snapshot never lands last.
    Write failures are not raised from the timer; they surface as ``error``
    status.

    ``schedule_auto_save`` must be called while an event loop is running.
    """

    def __init__(
        self,
        storage: StorageService,
        debounce_ms: int | None = None,
        on_status_change: StatusListener | None = None,
        saved_reset_ms: int | None = None,
        error_reset_ms: int | None = None,
    ):
        """
        Initialize auto-save manager.

        Args:
            storage: Storage used for writes
            debounce_ms: Quiet period before writing; defaults to config
            on_status_change: Called with ``(status, error_message)`` on every change
            saved_reset_ms: Delay before ``saved`` returns to ``idle``; 0 disables
            error_reset_ms: Delay before ``error`` returns to ``idle``; 0 disables
        """
        self.storage = storage
        self.debounce_ms = settings.autosave_debounce_ms if debounce_ms is None else debounce_ms
        self.saved_reset_ms = settings.autosave_saved_reset_ms if saved_reset_ms is None else saved_reset_ms
        self.error_reset_ms = settings.autosave_error_reset_ms if error_reset_ms is None else error_reset_ms
        self._on_status_change = on_status_change

        self._status = SaveStatus.IDLE
        self._last_error: str | None = None
        self._last_save_time = 0
        self._pending: asyncio.Task | None = None
        self._reset_task: asyncio.Task | None = None
        self._write_lock = asyncio.Lock()
        self._generation = 0

    def schedule_auto_save(self, design: Design) -> None:
        """Record the latest snapshot and restart the debounce timer."""
        snapshot = design.model_copy(deep=True)
        loop = asyncio.get_running_loop()

        self._generation += 1
        self._cancel_timer()
        self._cancel_reset()
        # a write already in flight keeps reporting saving
        if self._status in (SaveStatus.SAVED, SaveStatus.ERROR):
            self._set_status(SaveStatus.IDLE)

        self._pending = loop.create_task(self._debounced_save(snapshot, self._generation))

    async def force_save(self, design: Design) -> bool:
        """Cancel any pending timer and write now.

        Returns:
            True if the write succeeded; failures are reported through status
        """
        snapshot = design.model_copy(deep=True)
        self._generation += 1
        self._cancel_timer()
        self._cancel_reset()

        async with self._write_lock:
            return await self._perform_save(snapshot, self._generation)

    def cancel_pending_save(self) -> None:
        """Drop the pending write, if any, and return to idle."""
        self._cancel_timer()
        self._cancel_reset()
        self._set_status(SaveStatus.IDLE)

    def get_status(self) -> SaveStatus:
        return self._status

    def get_last_save_time(self) -> int:
        """Epoch ms of the last successful write, 0 if none."""
        return self._last_save_time

    def get_last_error(self) -> str | None:
        return self._last_error

    def has_pending_save(self) -> bool:
        return self._pending is not None and not self._pending.done()

    def destroy(self) -> None:
        self.cancel_pending_save()

    async def _debounced_save(self, snapshot: Design, generation: int) -> None:
        await asyncio.sleep(self.debounce_ms / 1000)

        if self._pending is not asyncio.current_task():
            return
        self._pending = None

        async with self._write_lock:
            if generation != self._generation:
                logger.debug(f"[AUTOSAVE] Skipping stale snapshot of design {snapshot.id}")
                return
            await self._perform_save(snapshot, generation)

    async def _perform_save(self, design: Design, generation: int) -> bool:
        self._set_status(SaveStatus.SAVING)
        try:
            await self.storage.save_design(design)
        except Exception as e:
            logger.error(f"[AUTOSAVE] Save of design {design.id} failed: {e}")
            self._set_status(SaveStatus.ERROR, str(e))
            self._settle(SaveStatus.ERROR, self.error_reset_ms, generation)
            return False

        self._last_save_time = now_ms()
        logger.debug(f"[AUTOSAVE] Design {design.id} saved")
        self._set_status(SaveStatus.SAVED)
        self._settle(SaveStatus.SAVED, self.saved_reset_ms, generation)
        return True

    def _settle(self, from_status: SaveStatus, delay_ms: int, generation: int) -> None:
        # an edit made during the write already started the next burst
        if generation != self._generation:
            self._set_status(SaveStatus.IDLE)
            return
        self._schedule_reset(from_status, delay_ms)

    def _schedule_reset(self, from_status: SaveStatus, delay_ms: int) -> None:
        if delay_ms <= 0:
            return
        self._cancel_reset()
        self._reset_task = asyncio.get_running_loop().create_task(
            self._reset_after(from_status, delay_ms)
        )

    async def _reset_after(self, from_status: SaveStatus, delay_ms: int) -> None:
        await asyncio.sleep(delay_ms / 1000)
        if self._status == from_status:
            self._set_status(SaveStatus.IDLE)

    def _cancel_timer(self) -> None:
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None

    def _cancel_reset(self) -> None:
        if self._reset_task is not None:
            self._reset_task.cancel()
            self._reset_task = None

    def _set_status(self, status: SaveStatus, error: str | None = None) -> None:
        self._status = status
        self._last_error = error if status == SaveStatus.ERROR else None
        if self._on_status_change is not None:
            self._on_status_change(status, error)
