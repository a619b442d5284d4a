"""Request-scoped session handling in database.get_db (no PostgreSQL needed)."""
from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from naijatax import database
from naijatax.models import ChatHistoryORM, HistoryRecordORM


class _SessionContext:
    def __init__(self, session) -> None:
        self.session = session

    async def __aenter__(self):
        return self.session

    async def __aexit__(self, *exc_info) -> bool:
        return False


@pytest.fixture
def mock_session(monkeypatch) -> MagicMock:
    session = MagicMock(name="AsyncSession")
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    monkeypatch.setattr(database, "AsyncSessionLocal", lambda: _SessionContext(session))
    return session


@pytest.mark.asyncio
async def test_get_db_commits_after_successful_request(mock_session: MagicMock) -> None:
    gen = database.get_db()
    assert await gen.__anext__() is mock_session
    with pytest.raises(StopAsyncIteration):
        await gen.__anext__()
    mock_session.commit.assert_awaited_once()
    mock_session.rollback.assert_not_awaited()


@pytest.mark.asyncio
async def test_get_db_rolls_back_when_handler_raises(mock_session: MagicMock) -> None:
    gen = database.get_db()
    await gen.__anext__()
    with pytest.raises(RuntimeError):
        await gen.athrow(RuntimeError("handler failed"))
    mock_session.rollback.assert_awaited_once()
    mock_session.commit.assert_not_awaited()


@pytest.mark.parametrize("model,expected", [
    (HistoryRecordORM, "ix_history_records_session_id"),
    (ChatHistoryORM, "ix_chat_history_session_id"),
])
def test_session_index_names_match_migration(model, expected) -> None:
    assert {index.name for index in model.__table__.indexes} == {expected}
