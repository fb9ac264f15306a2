"""HTTP client factory for the directory client.

Each DirectoryClient owns one pooled AsyncClient. The write timeout is
generous because add/edit requests may carry a profile picture. Requests are
sent exactly once; there is no retry layer.
"""

import httpx

USER_AGENT = "peopledir-client/0.1"

DEFAULT_TIMEOUT = httpx.Timeout(10.0, connect=5.0, write=30.0, pool=5.0)
DEFAULT_LIMITS = httpx.Limits(max_connections=20, max_keepalive_connections=10)


def create_http_client(
    base_url: str = "",
    *,
    timeout: httpx.Timeout = DEFAULT_TIMEOUT,
    limits: httpx.Limits = DEFAULT_LIMITS,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Create an AsyncClient for the directory API.

    `transport` replaces the network layer, e.g. httpx.ASGITransport to call
    the app in-process or httpx.MockTransport in tests. `limits` only apply
    to the default network transport.
    """
    return httpx.AsyncClient(
        base_url=base_url,
        timeout=timeout,
        limits=limits,
        headers={"Accept": "application/json", "User-Agent": USER_AGENT},
        transport=transport,
    )
