"""e621 REST endpoints."""

from .endpoints import get_endpoint_adapter, get_endpoint_spec

__all__ = ["get_endpoint_adapter", "get_endpoint_spec"]
