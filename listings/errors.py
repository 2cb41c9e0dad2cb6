"""Failures raised by the listings HTTP client."""

from __future__ import annotations

from typing import Optional


class ApiError(Exception):
    """Base class for anything that stopped a backend call from producing data."""

    def __init__(self, message: str, url: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.url = url


class TransportError(ApiError):
    """Connection refused, DNS failure, timeout."""


class HttpStatusError(ApiError):
    """Non-success status; ``detail`` is the backend's own message when it sent one."""

    def __init__(
        self,
        status_code: int,
        message: str,
        url: Optional[str] = None,
        detail: Optional[str] = None,
    ) -> None:
        super().__init__(message, url=url)
        self.status_code = status_code
        self.detail = detail


class NotFoundError(HttpStatusError):
    def __init__(self, message: str = "Not found", url: Optional[str] = None, detail: Optional[str] = None) -> None:
        super().__init__(404, message, url=url, detail=detail)


class MalformedResponseError(ApiError):
    """The backend answered but the body is not the expected shape."""


__all__ = ["ApiError", "HttpStatusError", "MalformedResponseError", "NotFoundError", "TransportError"]
