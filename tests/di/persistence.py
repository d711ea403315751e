"""Mock persistence providers for testing."""

from dishka import Scope, provide

from remark.domain.repository import CommentRepository
from remark.persistence.repository.inmemory import InMemoryCommentRepository
from remark.util.di.infrastructure.persistence import PersistenceProvider


class MockPersistenceProvider(PersistenceProvider):
    """Mock persistence provider using in-memory repositories.

    Uses APP scope so stored comments outlive a single HTTP request; every
    test builds its own container, which keeps tests isolated.
    """

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_comment_repository(self) -> CommentRepository:
        """Provide in-memory comment repository."""
        return InMemoryCommentRepository()
