"""Shared e621 constants.

This module centralizes URLs, page size limits and rate limit settings used
by the REST endpoints and the client so they stay in one place.
"""

from __future__ import annotations

from booru.e621.core import Site

# Site-specific REST base URLs
# - e621: full site
# - e926: safe-rated posts only, same API
BASE_URLS = {
    Site.E621: "https://e621.net",
    Site.E926: "https://e926.net",
}

# Hard cap on records per request (posts, pools and tags alike)
MAX_PAGE_SIZE = 320

# Page size the server uses when none is given; always sent explicitly so a
# short page can be told apart from a full one
DEFAULT_PAGE_SIZE = 75

# The API allows at most two requests per second and asks clients to keep to
# about one per second when sustained; 600 ms per request keeps a margin.
REQUEST_COOLDOWN_S = 0.6
RATE_LIMIT_CAPACITY = 1

DEFAULT_TIMEOUT_S = 30.0


def get_base_url(site: Site | str) -> str:
    """Get the REST base URL of a site.

    Args:
        site: Site enum member or its value

    Returns:
        Base URL string

    Examples:
        >>> get_base_url(Site.E926)
        'https://e926.net'
        >>> get_base_url("e621")
        'https://e621.net'
    """
    return BASE_URLS[Site(site)]
