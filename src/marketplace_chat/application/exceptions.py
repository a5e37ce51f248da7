"""Application error taxonomy.

Each error carries the HTTP status the API answers with, so the FastAPI layer
needs one handler for the whole family and the HTTP client can map a status
back to the same class.
"""
from __future__ import annotations


class AppError(Exception):
    status_code: int = 500

    def __init__(self, detail: str = "") -> None:
        self.detail = detail
        super().__init__(detail)


class NotFoundError(AppError):
    status_code = 404


class ForbiddenError(AppError):
    status_code = 403


class ValidationError(AppError):
    status_code = 422


class TransientStoreError(AppError):
    """Persistence is temporarily unavailable; the caller decides whether to retry."""

    status_code = 503
    retry_after: int = 3


ERRORS_BY_STATUS: dict[int, type[AppError]] = {
    cls.status_code: cls
    for cls in (NotFoundError, ForbiddenError, ValidationError, TransientStoreError)
}
