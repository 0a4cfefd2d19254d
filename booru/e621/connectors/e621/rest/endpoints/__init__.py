"""e621 REST endpoint registry.

Maps endpoint ids to their specs and adapters so the client can look
them up by name.
"""

from __future__ import annotations

from booru.e621.runtime.rest import ResponseAdapter, RestEndpointSpec

from . import pools, posts, tags

_ENDPOINTS: dict[str, tuple[RestEndpointSpec, type[ResponseAdapter]]] = {
    posts.SEARCH_SPEC.id: (posts.SEARCH_SPEC, posts.Adapter),
    posts.BY_ID_SPEC.id: (posts.BY_ID_SPEC, posts.Adapter),
    pools.SEARCH_SPEC.id: (pools.SEARCH_SPEC, pools.Adapter),
    pools.BY_ID_SPEC.id: (pools.BY_ID_SPEC, pools.Adapter),
    tags.SEARCH_SPEC.id: (tags.SEARCH_SPEC, tags.Adapter),
}


def get_endpoint_spec(endpoint_id: str) -> RestEndpointSpec | None:
    entry = _ENDPOINTS.get(endpoint_id)
    return entry[0] if entry else None


def get_endpoint_adapter(endpoint_id: str) -> type[ResponseAdapter] | None:
    entry = _ENDPOINTS.get(endpoint_id)
    return entry[1] if entry else None


__all__ = ["get_endpoint_adapter", "get_endpoint_spec"]
