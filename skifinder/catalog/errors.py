from __future__ import annotations

TIMEOUT = "timeout"
FAILED = "failed"


class CatalogError(Exception):
    """Base class for every failure of a catalog fetch.

    Carries the HTTP status the proxy answers with and a ``kind`` that lets
    the caller tell a timeout apart from any other failure.
    """

    status_code: int = 502
    kind: str = FAILED

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class CatalogNotConfiguredError(CatalogError):
    status_code = 500


class CatalogTimeoutError(CatalogError):
    status_code = 504
    kind = TIMEOUT


class CatalogFetchError(CatalogError):
    status_code = 502


class CatalogUpstreamError(CatalogError):
    """The backend answered with a non-2xx status."""
