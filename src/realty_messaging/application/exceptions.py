from __future__ import annotations


class AppError(Exception):
    """Base application error, mapped to an HTTP response at the request boundary."""

    status_code: int = 400

    def __init__(self, detail: str = "") -> None:
        self.detail = detail
        super().__init__(detail)


class NotFoundError(AppError):
    status_code = 404


class ForbiddenError(AppError):
    status_code = 403


class ConflictError(AppError):
    status_code = 409


class ValidationError(AppError):
    status_code = 422


class InternalError(AppError):
    """Store unavailable or an invariant broken. Detail is logged, never returned."""

    status_code = 500
