"""Shared async HTTP client for gateway calls.

No retry is configured here: a failed call surfaces immediately and retrying
is left to whoever triggered the load.
"""

import httpx

from tubefinder.config import get_settings

_client: httpx.AsyncClient | None = None


def get_client() -> httpx.AsyncClient:
    """Return the process-wide AsyncClient, creating it on first use."""
    global _client
    if _client is None or _client.is_closed:
        settings = get_settings()
        _client = httpx.AsyncClient(
            timeout=httpx.Timeout(settings.request_timeout),
            headers={"Accept": "application/json"},
        )
    return _client


async def close_client() -> None:
    global _client
    if _client is not None:
        await _client.aclose()
        _client = None
