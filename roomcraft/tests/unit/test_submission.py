"""Unit tests for SubmissionHandler."""

import pytest

from roomcraft.app.core.exceptions import (
    AlreadySubmittedError,
    AuthenticationRequiredError,
    NotOwnerError,
)
from roomcraft.app.services.leaderboard import LeaderboardIndex
from roomcraft.app.services.submission import SubmissionHandler
from roomcraft.app.storage.storage_service import StorageService, leaderboard_key


@pytest.fixture
def handler_as(storage: StorageService, auth_as):
    """Build a SubmissionHandler acting as the given user."""
    def _handler(user_id: str | None, username: str | None = None) -> SubmissionHandler:
        return SubmissionHandler(storage, auth_as(user_id, username), LeaderboardIndex(storage))

    return _handler


class TestSubmitDesign:
    """submit_design."""

    @pytest.mark.asyncio
    async def test_submit_marks_and_indexes(self, storage, handler_as, make_design):
        handler = handler_as("u1", "Alice")
        design = make_design(user_id="u1")
        await storage.save_design(design)

        assert await handler.has_user_submitted("u1", "theme_a") is False

        submitted = await handler.submit_design(design)

        assert submitted.submitted is True
        assert submitted.username == "Alice"
        assert await handler.has_user_submitted("u1", "theme_a") is True
        assert await handler.get_submitted_design_id("u1", "theme_a") == design.id
        assert await handler.has_user_submitted("u1", "theme_b") is False
        assert (await storage.load_design(design.id)).submitted is True
        assert await storage.store.ranked_score(leaderboard_key("theme_a"), design.id) == 0

    @pytest.mark.asyncio
    async def test_submit_unsaved_design(self, storage, handler_as, make_design):
        design = make_design(user_id="u1")

        await handler_as("u1").submit_design(design)

        assert (await storage.load_design(design.id)).submitted is True

    @pytest.mark.asyncio
    async def test_other_users_design_rejected(self, storage, handler_as, make_design):
        design = make_design(user_id="u1")
        await storage.save_design(design)

        with pytest.raises(NotOwnerError):
            await handler_as("u2").submit_design(design)

        assert await handler_as("u2").has_user_submitted("u1", "theme_a") is False

    @pytest.mark.asyncio
    async def test_anonymous_rejected(self, handler_as, make_design):
        with pytest.raises(AuthenticationRequiredError):
            await handler_as(None).submit_design(make_design(user_id="u1"))

    @pytest.mark.asyncio
    async def test_second_design_for_theme_rejected(self, handler_as, make_design):
        handler = handler_as("u1")
        await handler.submit_design(make_design(user_id="u1"))

        with pytest.raises(AlreadySubmittedError):
            await handler.submit_design(make_design(user_id="u1"))

    @pytest.mark.asyncio
    async def test_other_theme_allowed(self, handler_as, make_design):
        handler = handler_as("u1")
        await handler.submit_design(make_design(user_id="u1", theme_id="theme_a"))
        await handler.submit_design(make_design(user_id="u1", theme_id="theme_b"))

        assert await handler.has_user_submitted("u1", "theme_b") is True

    @pytest.mark.asyncio
    async def test_resubmit_updates_in_place_and_keeps_votes(self, storage, handler_as, make_design):
        handler = handler_as("u1")
        design = make_design(user_id="u1")
        await handler.submit_design(design)

        # votes arrive between submissions
        stored = await storage.load_design(design.id)
        await storage.save_design(stored.model_copy(update={"vote_count": 4}))

        edited = design.model_copy(update={"background_color": "#123456"})
        resubmitted = await handler.submit_design(edited)

        assert resubmitted.vote_count == 4
        assert resubmitted.background_color == "#123456"
        assert len(await handler.get_submitted_designs("theme_a")) == 1


class TestListing:
    """get_submitted_designs and lookups."""

    @pytest.mark.asyncio
    async def test_newest_first_with_pagination(self, handler_as, make_design):
        created = [1_700_000_000_000 + n * 1000 for n in range(5)]
        for n, timestamp in enumerate(created):
            await handler_as(f"u{n}").submit_design(make_design(user_id=f"u{n}", created_at=timestamp))

        handler = handler_as("viewer")
        first_page = await handler.get_submitted_designs("theme_a", limit=2, offset=0)
        second_page = await handler.get_submitted_designs("theme_a", limit=2, offset=2)
        past_end = await handler.get_submitted_designs("theme_a", limit=2, offset=10)

        assert [d.created_at for d in first_page] == [created[4], created[3]]
        assert [d.created_at for d in second_page] == [created[2], created[1]]
        assert past_end == []

    @pytest.mark.asyncio
    async def test_unsubmitted_designs_not_listed(self, storage, handler_as, make_design):
        await storage.save_design(make_design(user_id="u1"))

        assert await handler_as("u1").get_submitted_designs("theme_a") == []

    @pytest.mark.asyncio
    async def test_lookups(self, storage, handler_as, make_design):
        handler = handler_as("u1")
        design = make_design(user_id="u1")
        await storage.save_design(design)

        assert (await handler.get_design_by_id(design.id)).id == design.id
        assert await handler.get_design_by_id("missing") is None
        assert [d.id for d in await handler.get_user_designs("u1")] == [design.id]
