"""Unit tests for DI provider selection and comment settings."""

import pytest
from pydantic import ValidationError as PydanticValidationError

from remark.config import CommentSettings, Settings
from remark.domain.repository import CommentRepository
from remark.domain.service import CommentService, DepthValidator
from remark.persistence.repository.inmemory import InMemoryCommentRepository
from remark.util.di import PersistenceProvider, ProdPersistenceProvider, get_provider
from tests.di import MockPersistenceProvider, build_test_container
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestGetProvider:
    """Tests for get_provider."""

    def test_selects_mock_and_production_implementations(self):
        assert get_provider(PersistenceProvider, use_mock=True) is MockPersistenceProvider
        assert (
            get_provider(PersistenceProvider, use_mock=False)
            is ProdPersistenceProvider
        )

    def test_unknown_component_rejected(self):
        with pytest.raises(ValueError, match="Unknown components"):
            build_test_container(unmock={"cache"})


class TestUnitContainer:
    """Tests for the mocked container."""

    @pytest.mark.asyncio
    async def test_wires_in_memory_repository(self, unit_env):
        repo = await unit_env.get(CommentRepository)
        service = await unit_env.get(CommentService)

        assert isinstance(repo, InMemoryCommentRepository)
        assert service.comment_repository is repo

    @pytest.mark.asyncio
    async def test_validator_uses_configured_bounds(self, unit_env):
        settings = await unit_env.get(Settings)
        validator = await unit_env.get(DepthValidator)

        assert validator.max_depth == settings.comments.max_depth
        assert validator.max_hops == settings.comments.max_chain_hops


class TestCommentSettings:
    """Tests for CommentSettings validation."""

    def test_defaults(self):
        settings = CommentSettings()

        assert settings.max_depth == 2
        assert settings.max_chain_hops == 4
        assert settings.approval_scope == "roots"

    def test_hop_bound_must_exceed_depth(self):
        with pytest.raises(PydanticValidationError):
            CommentSettings(max_depth=3, max_chain_hops=3)

    def test_unknown_scope_rejected(self):
        with pytest.raises(PydanticValidationError):
            CommentSettings(approval_scope="everything")

    def test_nested_environment_variables(self, monkeypatch):
        monkeypatch.setenv("COMMENTS__APPROVAL_SCOPE", "tree")
        monkeypatch.setenv("DATABASE__POOL_SIZE", "12")

        settings = Settings()

        assert settings.comments.approval_scope == "tree"
        assert settings.database.pool_size == 12
