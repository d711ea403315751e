"""Mapping of domain errors to HTTP responses."""

from fastapi import HTTPException, status

from remark.domain.error import (
    DataIntegrityError,
    DepthExceededError,
    DomainError,
    NotFoundError,
    StoreError,
    ValidationError,
)


def to_http_exception(error: DomainError) -> HTTPException:
    """Convert a domain error into the HTTP error shown to callers.

    Errors were logged where they were raised. Server-side failures get a
    fixed message so no store detail reaches the response.

    Args:
        error: Domain error raised by a use case

    Returns:
        HTTP exception to raise from the route
    """
    if isinstance(error, ValidationError):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(error))
    if isinstance(error, NotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(error))
    if isinstance(error, DepthExceededError):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(error))
    if isinstance(error, (DataIntegrityError, StoreError)):
        return HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Comments are temporarily unavailable",
        )
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="Internal server error",
    )
