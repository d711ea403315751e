"""Unit tests for request session handling."""

import pytest

from remark.domain.error import DepthExceededError
from remark.persistence import database
from remark.persistence.database import session_scope


class FakeSession:
    """Records commit and rollback calls."""

    def __init__(self) -> None:
        self.committed = False
        self.rolled_back = False

    async def __aenter__(self) -> "FakeSession":
        return self

    async def __aexit__(self, *exc_info) -> None:
        return None

    async def commit(self) -> None:
        self.committed = True

    async def rollback(self) -> None:
        self.rolled_back = True


@pytest.fixture
def warnings(monkeypatch):
    """Capture Session rollback warnings."""
    recorded = []
    monkeypatch.setattr(
        database.logfire, "warn", lambda msg, **kw: recorded.append((msg, kw))
    )
    return recorded


class TestSessionScope:
    """Tests for session_scope."""

    @pytest.mark.asyncio
    async def test_commits_on_success(self, warnings):
        session = FakeSession()

        async with session_scope(lambda: session):
            pass

        assert session.committed
        assert not session.rolled_back
        assert warnings == []

    @pytest.mark.asyncio
    async def test_domain_error_rolls_back_without_logging(self, warnings):
        """Rejections were logged where raised; the session stays quiet."""
        session = FakeSession()

        with pytest.raises(DepthExceededError):
            async with session_scope(lambda: session):
                raise DepthExceededError(3, 2)

        assert session.rolled_back
        assert not session.committed
        assert warnings == []

    @pytest.mark.asyncio
    async def test_unexpected_error_rolls_back_and_logs(self, warnings):
        session = FakeSession()

        with pytest.raises(RuntimeError):
            async with session_scope(lambda: session):
                raise RuntimeError("boom")

        assert session.rolled_back
        assert [msg for msg, _ in warnings] == ["Session rollback"]
