"""REST runtime abstractions."""

from .http_client import HTTPClient
from .issuer import Limiter, RequestIssuer, ResponseAdapter, RestEndpointSpec

__all__ = [
    "HTTPClient",
    "Limiter",
    "RequestIssuer",
    "RestEndpointSpec",
    "ResponseAdapter",
]
