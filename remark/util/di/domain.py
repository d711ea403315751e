"""Domain layer DI providers."""

from dishka import Scope, provide

from remark.config import CommentSettings
from remark.domain.repository import CommentRepository
from remark.domain.service import CommentService, DepthValidator, TreeAssembler
from remark.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_depth_validator(
        self, comment_repository: CommentRepository, comment_settings: CommentSettings
    ) -> DepthValidator:
        """Provide reply depth validator."""
        return DepthValidator(
            comment_repository=comment_repository,
            max_depth=comment_settings.max_depth,
            max_hops=comment_settings.max_chain_hops,
        )

    @provide
    def get_tree_assembler(self, comment_settings: CommentSettings) -> TreeAssembler:
        """Provide tree assembler."""
        return TreeAssembler(max_depth=comment_settings.max_depth)

    @provide
    def get_comment_service(
        self,
        comment_repository: CommentRepository,
        depth_validator: DepthValidator,
        tree_assembler: TreeAssembler,
        comment_settings: CommentSettings,
    ) -> CommentService:
        """Provide comment domain service."""
        return CommentService(
            comment_repository=comment_repository,
            depth_validator=depth_validator,
            tree_assembler=tree_assembler,
            approval_scope=comment_settings.approval_scope,
            write_timeout_seconds=comment_settings.write_timeout_seconds,
        )
