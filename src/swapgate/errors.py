"""Exception taxonomy shared by the API layer and the upstream client."""

from typing import Optional


class SwapgateError(Exception):
    """Base class for errors that are reported back to the caller."""

    @property
    def message(self) -> str:
        return str(self)


class RequestValidationFailed(SwapgateError):
    """Raised when a request body does not match its schema."""

    pass


class OriginNotAllowedError(SwapgateError):
    """Raised when the Origin header is not on the allow-list."""

    def __init__(self, origin: str):
        self.origin = origin
        super().__init__("CORS: origin not allowed")


class UpstreamError(SwapgateError):
    """Raised when the aggregator call does not produce a usable response."""

    pass


class UpstreamTimeoutError(UpstreamError):
    """Raised when the aggregator does not answer before the deadline."""

    def __init__(self, url: str, timeout_ms: int):
        self.url = url
        self.timeout_ms = timeout_ms
        super().__init__(f"Upstream request timed out after {timeout_ms}ms")


class UpstreamStatusError(UpstreamError):
    """Raised when the aggregator answers with a non-2xx status."""

    def __init__(self, status_code: int, upstream_message: Optional[str] = None):
        self.status_code = status_code
        super().__init__(upstream_message or f"Fetch failed: {status_code}")


class UpstreamUnreachableError(UpstreamError):
    """Raised when the aggregator cannot be reached at all."""

    pass


class PayloadTooLargeError(SwapgateError):
    """Raised when a request body exceeds the configured size cap."""

    def __init__(self, max_bytes: int):
        self.max_bytes = max_bytes
        super().__init__("Request body too large")
