"""
Social API: Post Service Unit Tests
===================================

What:  Tests for PostService statement sequencing and error translation.
How:   Uses mock sessions (no real database); each execute() call is fed a
       canned result in order.

What we test:
    ✅ Missing / soft-deleted rows raise NotFoundError
    ✅ Zero affected rows on edit and like stop before the read-back
    ✅ Delete answers with the snapshot read before the update
    ✅ SQLAlchemy failures become DatabaseError
"""

import pytest
from unittest.mock import AsyncMock
from sqlalchemy.exc import OperationalError

from conftest import make_result, make_row
from social_api.exceptions import DatabaseError, NotFoundError
from social_api.services.post_service import PostService


class TestPostServiceRead:
    """Tests for list_posts and get_post."""

    def setup_method(self):
        self.service = PostService()

    @pytest.mark.asyncio
    async def test_list_posts_maps_rows(self, mock_db_session, sample_post_data):
        """Rows should map to PostResponse objects in query order."""
        newer = make_row(**{**sample_post_data, "id": 8})
        older = make_row(**sample_post_data)
        mock_db_session.execute.return_value = make_result(rows=[newer, older])

        result = await self.service.list_posts(mock_db_session)

        assert [post.id for post in result] == [8, 7]
        assert result[1].content == "hello world"

    @pytest.mark.asyncio
    async def test_list_posts_empty(self, mock_db_session):
        mock_db_session.execute.return_value = make_result(rows=[])

        assert await self.service.list_posts(mock_db_session) == []

    @pytest.mark.asyncio
    async def test_get_post_found(self, mock_db_session, sample_post_data):
        mock_db_session.execute.return_value = make_result(first=make_row(**sample_post_data))

        result = await self.service.get_post(mock_db_session, 7)

        assert result.id == 7
        assert result.likes == 5
        assert result.created == sample_post_data["created"]

    @pytest.mark.asyncio
    async def test_get_post_not_found(self, mock_db_session):
        """Absent or soft-deleted rows select nothing and raise NotFoundError."""
        mock_db_session.execute.return_value = make_result(first=None)

        with pytest.raises(NotFoundError):
            await self.service.get_post(mock_db_session, 404)

    @pytest.mark.asyncio
    async def test_query_failure_becomes_database_error(self, mock_db_session):
        mock_db_session.execute = AsyncMock(
            side_effect=OperationalError("SELECT 1", {}, Exception("connection refused"))
        )

        with pytest.raises(DatabaseError) as exc_info:
            await self.service.get_post(mock_db_session, 1)

        assert exc_info.value.context["post_id"] == 1
        assert exc_info.value.context["error_type"] == "OperationalError"


class TestPostServiceWrite:
    """Tests for create, edit, delete and restore."""

    def setup_method(self):
        self.service = PostService()

    @pytest.mark.asyncio
    async def test_create_post_reads_back_generated_id(self, mock_db_session, sample_post_data):
        stored = make_row(**{**sample_post_data, "content": "hi", "likes": 0})
        mock_db_session.execute = AsyncMock(side_effect=[
            make_result(scalar=7),
            make_result(first=stored),
        ])

        result = await self.service.create_post(mock_db_session, "hi")

        assert result.id == 7
        assert result.content == "hi"
        assert result.likes == 0
        assert mock_db_session.execute.await_count == 2

    @pytest.mark.asyncio
    async def test_edit_post_not_found_skips_read_back(self, mock_db_session):
        mock_db_session.execute = AsyncMock(return_value=make_result(rowcount=0))

        with pytest.raises(NotFoundError):
            await self.service.edit_post(mock_db_session, 3, "new text")

        assert mock_db_session.execute.await_count == 1

    @pytest.mark.asyncio
    async def test_edit_post_returns_refreshed_row(self, mock_db_session, sample_post_data):
        refreshed = make_row(**{**sample_post_data, "content": "edited"})
        mock_db_session.execute = AsyncMock(side_effect=[
            make_result(rowcount=1),
            make_result(first=refreshed),
        ])

        result = await self.service.edit_post(mock_db_session, 7, "edited")

        assert result.content == "edited"

    @pytest.mark.asyncio
    async def test_delete_post_returns_snapshot(self, mock_db_session, sample_post_data):
        """The response is the row as read before the flag was set."""
        mock_db_session.execute = AsyncMock(side_effect=[
            make_result(first=make_row(**sample_post_data)),
            make_result(rowcount=1),
        ])

        result = await self.service.delete_post(mock_db_session, 7)

        assert result.id == 7
        assert result.content == "hello world"

    @pytest.mark.asyncio
    async def test_delete_post_missing(self, mock_db_session):
        mock_db_session.execute = AsyncMock(side_effect=[
            make_result(first=None),
            make_result(rowcount=0),
        ])

        with pytest.raises(NotFoundError):
            await self.service.delete_post(mock_db_session, 99)

    @pytest.mark.asyncio
    async def test_restore_post_missing(self, mock_db_session):
        mock_db_session.execute = AsyncMock(side_effect=[
            make_result(first=None),
            make_result(rowcount=0),
        ])

        with pytest.raises(NotFoundError):
            await self.service.restore_post(mock_db_session, 99)


class TestPostServiceLikes:
    """Tests for like_post and dislike_post."""

    def setup_method(self):
        self.service = PostService()

    @pytest.mark.asyncio
    async def test_like_returns_row_after_update(self, mock_db_session, sample_post_data):
        mock_db_session.execute = AsyncMock(side_effect=[
            make_result(rowcount=1),
            make_result(first=make_row(**{**sample_post_data, "likes": 6})),
        ])

        result = await self.service.like_post(mock_db_session, 7)

        assert result.likes == 6

    @pytest.mark.asyncio
    async def test_dislike_removed_post_not_found(self, mock_db_session):
        mock_db_session.execute = AsyncMock(return_value=make_result(rowcount=0))

        with pytest.raises(NotFoundError):
            await self.service.dislike_post(mock_db_session, 7)

        assert mock_db_session.execute.await_count == 1
