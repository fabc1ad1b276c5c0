"""HTTP client factory for external API calls.

Per-service HTTP clients with connection pooling and timeouts, closed
during application shutdown.
"""

import httpx

DEFAULT_CONNECT_TIMEOUT = 5.0
DEFAULT_READ_TIMEOUT = 10.0
DEFAULT_WRITE_TIMEOUT = 10.0
DEFAULT_POOL_TIMEOUT = 5.0

_identity_client: httpx.AsyncClient | None = None


def create_http_client(
    base_url: str = "",
    max_connections: int = 20,
    max_keepalive_connections: int = 10,
    connect_timeout: float = DEFAULT_CONNECT_TIMEOUT,
    read_timeout: float = DEFAULT_READ_TIMEOUT,
    write_timeout: float = DEFAULT_WRITE_TIMEOUT,
    pool_timeout: float = DEFAULT_POOL_TIMEOUT,
) -> httpx.AsyncClient:
    """Create a configured async HTTP client."""
    return httpx.AsyncClient(
        base_url=base_url,
        timeout=httpx.Timeout(
            connect=connect_timeout,
            read=read_timeout,
            write=write_timeout,
            pool=pool_timeout,
        ),
        limits=httpx.Limits(
            max_connections=max_connections,
            max_keepalive_connections=max_keepalive_connections,
        ),
    )


def get_identity_client() -> httpx.AsyncClient:
    """Get the shared HTTP client for the Identity Toolkit API.

    Created lazily; released by close_identity_client() on shutdown.
    """
    global _identity_client
    if _identity_client is None:
        _identity_client = create_http_client(
            base_url="https://identitytoolkit.googleapis.com",
            max_connections=50,
            max_keepalive_connections=10,
        )
    return _identity_client


async def close_identity_client() -> None:
    """Close the Identity Toolkit HTTP client and release its connections."""
    global _identity_client
    if _identity_client is not None:
        await _identity_client.aclose()
        _identity_client = None
