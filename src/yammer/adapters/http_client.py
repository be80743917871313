"""httpx client builder.

Every outgoing request shares the same timeout, User-Agent and redirect
policy; tests swap the transport for an `httpx.MockTransport`.
"""

from __future__ import annotations

import httpx

from yammer.core.config import AppSettings


def build_async_client(
    settings: AppSettings | None = None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Create an `httpx.AsyncClient` configured from `AppSettings`."""

    settings = settings or AppSettings()
    headers = {
        "User-Agent": settings.user_agent,
        "Accept": "text/plain, application/x-yaml, */*;q=0.8",
    }
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        headers=headers,
        transport=transport,
    )
