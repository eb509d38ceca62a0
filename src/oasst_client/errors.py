"""Error raised for non-success backend responses."""

from __future__ import annotations

from typing import Any


class OasstError(Exception):
    """Backend answered with a status >= 300.

    ``message`` is usually a string, but falls back to the whole parsed error body
    when the backend omits a ``message`` field. ``error_code`` is the backend's
    domain code (``0`` when the body was not JSON); ``http_status_code`` is the
    transport status.
    """

    def __init__(
        self,
        message: Any,
        error_code: int | None,
        http_status_code: int | None = None,
    ) -> None:
        super().__init__(message, error_code, http_status_code)
        self.message = message
        self.error_code = error_code
        self.http_status_code = http_status_code

    def __str__(self) -> str:
        return (
            f"{self.message} (http_status={self.http_status_code}, error_code={self.error_code})"
        )
