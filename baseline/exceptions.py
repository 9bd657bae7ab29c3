"""Exception types for pybaseline."""

from __future__ import annotations


class BaselineError(Exception):
    """Base exception for expected application errors."""


class NetworkError(BaselineError):
    """Raised when a network operation fails."""

    def __init__(self, url: str, *, cause: str | None = None) -> None:
        detail = f"Unable to connect to {url}"
        if cause:
            detail = f"{detail} ({cause})"
        super().__init__(detail)


class RequestTimeoutError(BaselineError):
    """Raised when a request times out."""

    def __init__(self, url: str) -> None:
        super().__init__(f"Request timed out for {url}")


class HttpStatusError(BaselineError):
    """Raised when a non-200 HTTP response is returned."""

    def __init__(self, status_code: int, url: str) -> None:
        self.status_code = status_code
        self.url = url
        super().__init__(f"Request failed with HTTP {status_code} for {url}")


class ContentError(BaselineError):
    """Raised when a response body is invalid or unexpectedly empty."""

    def __init__(self, url: str) -> None:
        super().__init__(f"Received empty or invalid JSON content from {url}")


class CatalogError(BaselineError):
    """Raised when the feature catalog cannot be read or has the wrong shape."""

    def __init__(self, source: str, reason: str) -> None:
        self.source = source
        super().__init__(f"Unable to load feature catalog from {source}: {reason}")


class SourceDiscoveryError(BaselineError):
    """Raised when the scan root cannot be enumerated."""

    def __init__(self, root: str) -> None:
        self.root = root
        super().__init__(f"Scan root does not exist or is not a directory: {root}")
