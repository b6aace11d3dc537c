"""Unit tests for debounced auto-save and the editing session."""

import asyncio

import pytest

from roomcraft.app.schemas.design import Design
from roomcraft.app.services import AutoSaveManager, DesignEditor, SaveStatus
from roomcraft.app.services.design_manager import DesignManager
from roomcraft.app.services.submission import SubmissionHandler
from roomcraft.app.services.leaderboard import LeaderboardIndex
from roomcraft.app.storage.storage_service import StorageService


DEBOUNCE_MS = 200


class RecordingStorage:
    """Storage stand-in that records every design written."""

    def __init__(self, fail: bool = False):
        self.saved: list[Design] = []
        self.fail = fail

    async def save_design(self, design: Design) -> None:
        if self.fail:
            raise RuntimeError("disk full")
        self.saved.append(design)


class SlowStorage(RecordingStorage):
    """Storage stand-in whose first write takes ``delay`` seconds."""

    def __init__(self, delay: float):
        super().__init__()
        self.delay = delay
        self.writes_started = 0

    async def save_design(self, design: Design) -> None:
        self.writes_started += 1
        if self.writes_started == 1:
            await asyncio.sleep(self.delay)
        await super().save_design(design)


@pytest.fixture
def design(make_design) -> Design:
    return make_design(user_id="u1")


@pytest.fixture
def recording() -> RecordingStorage:
    return RecordingStorage()


@pytest.fixture
def statuses() -> list[SaveStatus]:
    return []


@pytest.fixture
def autosave(recording: RecordingStorage, statuses: list[SaveStatus]) -> AutoSaveManager:
    return AutoSaveManager(
        recording,
        debounce_ms=DEBOUNCE_MS,
        on_status_change=lambda status, error: statuses.append(status),
        saved_reset_ms=0,
        error_reset_ms=0,
    )


class TestDebounce:
    """Bursts of edits collapse into one write."""

    @pytest.mark.asyncio
    async def test_burst_writes_only_last_snapshot(self, autosave: AutoSaveManager, recording: RecordingStorage, design: Design):
        for color in ["#111111", "#222222", "#333333"]:
            design.background_color = color
            autosave.schedule_auto_save(design)
            await asyncio.sleep(0.05)

        assert recording.saved == []
        assert autosave.has_pending_save()

        await asyncio.sleep(DEBOUNCE_MS / 1000 + 0.15)

        assert len(recording.saved) == 1
        assert recording.saved[0].background_color == "#333333"
        assert autosave.get_status() == SaveStatus.SAVED
        assert autosave.get_last_save_time() > 0
        assert not autosave.has_pending_save()

    @pytest.mark.asyncio
    async def test_snapshot_is_isolated_from_later_edits(self, autosave: AutoSaveManager, recording: RecordingStorage, design: Design):
        design.background_color = "#AAAAAA"
        autosave.schedule_auto_save(design)
        # edit after scheduling without rescheduling
        design.background_color = "#BBBBBB"

        await asyncio.sleep(DEBOUNCE_MS / 1000 + 0.15)

        assert [d.background_color for d in recording.saved] == ["#AAAAAA"]

    @pytest.mark.asyncio
    async def test_separate_bursts_write_separately(self, autosave: AutoSaveManager, recording: RecordingStorage, design: Design):
        autosave.schedule_auto_save(design)
        await asyncio.sleep(DEBOUNCE_MS / 1000 + 0.15)
        autosave.schedule_auto_save(design)
        await asyncio.sleep(DEBOUNCE_MS / 1000 + 0.15)

        assert len(recording.saved) == 2

    @pytest.mark.asyncio
    async def test_status_transitions(self, autosave: AutoSaveManager, statuses: list[SaveStatus], design: Design):
        autosave.schedule_auto_save(design)
        await asyncio.sleep(DEBOUNCE_MS / 1000 + 0.15)

        assert statuses == [SaveStatus.SAVING, SaveStatus.SAVED]

    @pytest.mark.asyncio
    async def test_schedule_during_write_keeps_saving(self, design: Design):
        storage = SlowStorage(delay=0.2)
        statuses = []
        manager = AutoSaveManager(
            storage,
            debounce_ms=50,
            on_status_change=lambda status, error: statuses.append(status),
            saved_reset_ms=0,
        )

        design.background_color = "#111111"
        manager.schedule_auto_save(design)
        await asyncio.sleep(0.1)
        assert manager.get_status() == SaveStatus.SAVING

        design.background_color = "#00FF00"
        manager.schedule_auto_save(design)
        assert manager.get_status() == SaveStatus.SAVING
        assert statuses == [SaveStatus.SAVING]

        await asyncio.sleep(0.35)

        # the first write settles back to idle because a newer burst was waiting
        assert statuses == [
            SaveStatus.SAVING, SaveStatus.SAVED, SaveStatus.IDLE, SaveStatus.SAVING, SaveStatus.SAVED,
        ]
        assert [d.background_color for d in storage.saved] == ["#111111", "#00FF00"]


class TestForceAndCancel:
    """force_save and cancel_pending_save."""

    @pytest.mark.asyncio
    async def test_force_save_writes_immediately(self, autosave: AutoSaveManager, recording: RecordingStorage, design: Design):
        autosave.schedule_auto_save(design)
        design.background_color = "#ABCDEF"

        assert await autosave.force_save(design) is True
        assert [d.background_color for d in recording.saved] == ["#ABCDEF"]

        # the pending timer was cancelled
        await asyncio.sleep(DEBOUNCE_MS / 1000 + 0.15)
        assert len(recording.saved) == 1

    @pytest.mark.asyncio
    async def test_force_save_lands_after_in_flight_write(self, design: Design):
        storage = SlowStorage(delay=0.2)
        manager = AutoSaveManager(storage, debounce_ms=50, saved_reset_ms=0)

        design.background_color = "#111111"
        manager.schedule_auto_save(design)
        await asyncio.sleep(0.1)
        assert storage.writes_started == 1

        design.background_color = "#222222"
        assert await manager.force_save(design) is True

        await asyncio.sleep(0.3)
        assert [d.background_color for d in storage.saved] == ["#111111", "#222222"]
        assert manager.get_status() == SaveStatus.SAVED

    @pytest.mark.asyncio
    async def test_force_save_supersedes_fired_timer(self, recording: RecordingStorage, design: Design):
        manager = AutoSaveManager(recording, debounce_ms=50, saved_reset_ms=0)

        async with manager._write_lock:
            design.background_color = "#111111"
            manager.schedule_auto_save(design)
            # the timer fires and waits behind the held lock
            await asyncio.sleep(0.1)
            assert not manager.has_pending_save()

            design.background_color = "#222222"
            force = asyncio.create_task(manager.force_save(design))
            await asyncio.sleep(0)

        assert await force is True
        await asyncio.sleep(0.05)
        assert [d.background_color for d in recording.saved] == ["#222222"]

    @pytest.mark.asyncio
    async def test_cancel_drops_pending_write(self, autosave: AutoSaveManager, recording: RecordingStorage, design: Design):
        autosave.schedule_auto_save(design)
        autosave.cancel_pending_save()

        await asyncio.sleep(DEBOUNCE_MS / 1000 + 0.15)

        assert recording.saved == []
        assert autosave.get_status() == SaveStatus.IDLE
        assert not autosave.has_pending_save()


class TestFailures:
    """Write failures surface as status, not exceptions."""

    @pytest.mark.asyncio
    async def test_failed_debounced_write_sets_error(self, design: Design):
        manager = AutoSaveManager(RecordingStorage(fail=True), debounce_ms=DEBOUNCE_MS, error_reset_ms=0)

        manager.schedule_auto_save(design)
        await asyncio.sleep(DEBOUNCE_MS / 1000 + 0.15)

        assert manager.get_status() == SaveStatus.ERROR
        assert manager.get_last_error() == "disk full"
        assert manager.get_last_save_time() == 0

    @pytest.mark.asyncio
    async def test_failed_force_save_returns_false(self, design: Design):
        manager = AutoSaveManager(RecordingStorage(fail=True), debounce_ms=DEBOUNCE_MS, error_reset_ms=0)

        assert await manager.force_save(design) is False
        assert manager.get_status() == SaveStatus.ERROR

    @pytest.mark.asyncio
    async def test_error_resets_to_idle(self, design: Design):
        manager = AutoSaveManager(RecordingStorage(fail=True), debounce_ms=0, error_reset_ms=50)

        await manager.force_save(design)
        assert manager.get_status() == SaveStatus.ERROR

        await asyncio.sleep(0.15)
        assert manager.get_status() == SaveStatus.IDLE
        assert manager.get_last_error() is None

    @pytest.mark.asyncio
    async def test_saved_resets_to_idle(self, recording: RecordingStorage, design: Design):
        manager = AutoSaveManager(recording, debounce_ms=0, saved_reset_ms=50)

        await manager.force_save(design)
        assert manager.get_status() == SaveStatus.SAVED

        await asyncio.sleep(0.15)
        assert manager.get_status() == SaveStatus.IDLE


class TestDesignEditor:
    """Edits go through the manager and schedule auto-save."""

    @pytest.mark.asyncio
    async def test_edits_are_saved_once(self, storage: StorageService):
        manager = DesignManager(canvas_width=800, canvas_height=600)
        autosave = AutoSaveManager(storage, debounce_ms=DEBOUNCE_MS, saved_reset_ms=0)
        editor = DesignEditor(manager, autosave)

        design = manager.create_design("u1", "theme_a", "alice")
        editor.place_asset(design.id, "chair_1", 10, 10)
        editor.place_asset(design.id, "desk", 900, 20)
        editor.rotate_asset(design.id, 1)
        editor.update_background_color(design.id, "#00FF00")

        assert await storage.load_design(design.id) is None

        await asyncio.sleep(DEBOUNCE_MS / 1000 + 0.2)

        stored = await storage.load_design(design.id)
        assert stored.background_color == "#00FF00"
        assert [(a.asset_id, a.x, a.rotation) for a in stored.assets] == [("chair_1", 10, 0), ("desk", 800, 90)]
        editor.close()

    @pytest.mark.asyncio
    async def test_submit_flushes_pending_edits(self, storage: StorageService, auth_as):
        manager = DesignManager(canvas_width=800, canvas_height=600)
        autosave = AutoSaveManager(storage, debounce_ms=10_000, saved_reset_ms=0)
        submissions = SubmissionHandler(storage, auth_as("u1", "alice"), LeaderboardIndex(storage))
        editor = DesignEditor(manager, autosave, submissions)

        design = manager.create_design("u1", "theme_a", "alice")
        editor.place_asset(design.id, "plant_3", 50, 60)

        submitted = await editor.submit(design.id)

        assert submitted.submitted is True
        assert not autosave.has_pending_save()
        stored = await storage.load_design(design.id)
        assert stored.submitted is True
        assert [a.asset_id for a in stored.assets] == ["plant_3"]
        assert manager.get_design(design.id).submitted is True
        editor.close()

    @pytest.mark.asyncio
    async def test_submit_without_handler(self, recording: RecordingStorage):
        manager = DesignManager(canvas_width=800, canvas_height=600)
        editor = DesignEditor(manager, AutoSaveManager(recording, debounce_ms=DEBOUNCE_MS))
        design = manager.create_design("u1", "theme_a")

        with pytest.raises(RuntimeError):
            await editor.submit(design.id)
