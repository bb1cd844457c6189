"""HTTP client factory for the hosted backend (auth + row API).

One pooled httpx.AsyncClient per process; adapters receive it explicitly so
tests can swap in an httpx.MockTransport.
"""

import httpx

from config.settings import settings

_http_client: httpx.AsyncClient | None = None


def create_http_client(
    base_url: str | None = None,
    anon_key: str | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Build a client pre-configured with the project's public API key."""
    key = settings.SUPABASE_ANON_KEY if anon_key is None else anon_key
    return httpx.AsyncClient(
        base_url=base_url or settings.SUPABASE_URL,
        headers={"apikey": key, "Content-Type": "application/json"},
        timeout=settings.HTTP_TIMEOUT_SECONDS,
        transport=transport,
    )


async def get_http_client() -> httpx.AsyncClient:
    """Get or create the shared client."""
    global _http_client  # noqa: PLW0603
    if _http_client is None:
        _http_client = create_http_client()
    return _http_client


async def close_http_client() -> None:
    """Close the shared client."""
    global _http_client  # noqa: PLW0603
    if _http_client is not None:
        await _http_client.aclose()
        _http_client = None


def bearer(access_token: str | None, anon_key: str | None = None) -> dict[str, str]:
    """Authorization header: the user's token when signed in, else the anon key."""
    token = access_token or (settings.SUPABASE_ANON_KEY if anon_key is None else anon_key)
    return {"Authorization": f"Bearer {token}"}
