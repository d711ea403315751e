"""FastAPI application."""

from dishka import AsyncContainer
from fastapi import FastAPI

from remark import __version__
from remark.interface.api.routes import comments, health
from remark.util.di.container import create_container, setup_di
from remark.util.observability import instrument_fastapi


def create_app(
    container: AsyncContainer | None = None, instrument: bool = True
) -> FastAPI:
    """Create FastAPI application.

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.

    Args:
        container: DI container to use; the production container by default
        instrument: Whether to trace requests with Logfire

    Returns:
        Configured application
    """
    app_instance = FastAPI(
        title="Remark API",
        description="Threaded comments with bounded reply depth",
        version=__version__,
    )

    if instrument:
        # Instrument FastAPI for automatic tracing of HTTP requests
        instrument_fastapi(app_instance)

    # Setup dependency injection
    # Settings are loaded from environment automatically
    if container is None:
        container = create_container()
    setup_di(app_instance, container)

    # Register routes
    app_instance.include_router(health.router)
    app_instance.include_router(comments.router)

    return app_instance
