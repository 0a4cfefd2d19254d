"""Custom exception hierarchy."""

from __future__ import annotations

# Generic descriptions for documented status codes, used when the server
# does not send a reason of its own.
HTTP_REASONS: dict[int, str] = {
    403: "Forbidden: Access denied. May indicate that your request lacks a User-Agent header.",
    404: "Not Found",
    412: "Precondition failed",
    420: "Invalid Record: Record could not be saved",
    421: "User Throttled: User is throttled, try again later",
    422: "Locked: The resource is locked and cannot be modified",
    423: "Already Exists: Resource already exists",
    424: "Invalid Parameters: The given parameters were invalid",
    500: "Internal Server Error: Some unknown error occurred on the server",
    502: "Bad Gateway: A gateway server received an invalid response from the e621 servers",
    503: (
        "Service Unavailable: Server cannot currently handle the request or you have "
        "exceeded the request rate limit. Try again later or decrease your rate of requests."
    ),
    520: "Unknown Error: Unexpected server response which violates protocol",
    522: "Origin Connection Time-out: CloudFlare's attempt to connect to the e621 servers timed out",
    524: (
        "Origin Connection Time-out: A connection was established between CloudFlare and "
        "the e621 servers, but it timed out before an HTTP response was received"
    ),
    525: "SSL Handshake Failed: The SSL handshake between CloudFlare and the e621 servers failed",
}

# Statuses the server uses to reject a client for going too fast.
RATE_LIMIT_STATUSES = frozenset({421, 429, 503})


class DataError(Exception):
    """Base exception for all library errors."""

    pass


class ClientConfigError(DataError):
    """Client could not be created from the given configuration."""

    pass


class AboveLimitError(DataError, ValueError):
    """A query option exceeds the maximum the server accepts."""

    def __init__(self, option: str, value: int, maximum: int) -> None:
        super().__init__(
            f"{option}:{value} is above the maximum value allowed in this context ({maximum})"
        )
        self.option = option
        self.value = value
        self.maximum = maximum


class TransportError(DataError):
    """Request could not be sent or no response was received.

    Covers connection failures, TLS errors and timeouts. Never retried by
    the library.
    """

    pass


class ServerError(DataError):
    """Server answered with a non-2xx status."""

    def __init__(
        self,
        message: str | None = None,
        *,
        status_code: int,
        reason: str | None = None,
        url: str | None = None,
        rate_limited: bool = False,
    ) -> None:
        if message is None:
            message = format_http_error(status_code, reason)
        super().__init__(message)
        self.status_code = status_code
        self.reason = reason
        self.url = url
        self.rate_limited = rate_limited

    @property
    def not_found(self) -> bool:
        return self.status_code == 404


class RateLimitError(ServerError):
    """Server rejected the request because the client is going too fast."""

    def __init__(
        self,
        message: str | None = None,
        *,
        status_code: int = 503,
        reason: str | None = None,
        url: str | None = None,
    ) -> None:
        super().__init__(
            message,
            status_code=status_code,
            reason=reason,
            url=url,
            rate_limited=True,
        )


class DecodeError(DataError):
    """Response payload does not match the expected schema."""

    pass


class NotFoundError(DataError):
    """A requested identifier is absent from an otherwise successful response."""

    def __init__(self, record_id: int, message: str | None = None) -> None:
        super().__init__(message or f"Record #{record_id} not found")
        self.record_id = record_id


def format_http_error(status_code: int, reason: str | None = None) -> str:
    """Build the message for an HTTP error.

    Examples:
        >>> format_http_error(500, "foo")
        'HTTP error 500: foo'
        >>> format_http_error(404)
        'HTTP error 404 Not Found'
    """
    if reason:
        return f"HTTP error {status_code}: {reason}"
    generic = HTTP_REASONS.get(status_code)
    if generic:
        return f"HTTP error {status_code} {generic}"
    return f"HTTP error {status_code}"


def server_error_for(
    status_code: int, reason: str | None = None, url: str | None = None
) -> ServerError:
    """Create the ServerError subclass matching a status code."""
    if status_code in RATE_LIMIT_STATUSES:
        return RateLimitError(status_code=status_code, reason=reason, url=url)
    return ServerError(status_code=status_code, reason=reason, url=url)
