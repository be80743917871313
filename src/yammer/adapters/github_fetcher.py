"""Fetcher for files hosted on GitHub (raw content host).

`<raw_base_url>/<owner>/<repo>/<reference>/<path>` resolves branches, tags
and commit SHAs alike.
"""

from __future__ import annotations

import logging
from urllib.parse import quote

import httpx

from yammer.adapters.http_client import build_async_client
from yammer.core.config import AppSettings
from yammer.core.domain.errors import SourceUnavailable
from yammer.core.interfaces.fetcher import DocumentFetcher

logger = logging.getLogger(__name__)


class GitHubRawFetcher(DocumentFetcher):
    """Downloads compose files from raw.githubusercontent.com (or a mirror).

    When constructed with `client`, every fetch goes through that client and
    the caller owns its lifetime; otherwise a client is opened per fetch.
    """

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._client = client

    def file_url(self, coordinate: str, reference: str, path: str) -> str:
        base = self._settings.raw_base_url.rstrip("/")
        return "/".join(
            (
                base,
                quote(coordinate, safe="/"),
                quote(reference, safe="/"),
                quote(path.lstrip("/"), safe="/"),
            )
        )

    async def fetch(self, coordinate: str, reference: str, path: str) -> str:
        url = self.file_url(coordinate, reference, path)
        if self._client is not None:
            return await self._get(self._client, url)
        async with build_async_client(self._settings) as client:
            return await self._get(client, url)

    async def _get(self, client: httpx.AsyncClient, url: str) -> str:
        try:
            resp = await client.get(url)
        except httpx.TimeoutException as exc:
            raise SourceUnavailable(url, f"timed out ({exc.__class__.__name__})") from exc
        except httpx.HTTPError as exc:
            raise SourceUnavailable(url, str(exc) or exc.__class__.__name__) from exc

        logger.debug("GET %s -> HTTP %d", url, resp.status_code)
        if resp.status_code == 404:
            raise SourceUnavailable(
                url,
                "not found (check the repository, reference and path)",
                status_code=404,
            )
        if resp.status_code >= 400:
            raise SourceUnavailable(url, f"HTTP {resp.status_code}", status_code=resp.status_code)
        return resp.text
