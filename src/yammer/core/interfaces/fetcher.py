"""Document fetcher contract."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class DocumentFetcher(Protocol):
    """Returns the raw text of `path` in repository `coordinate` at `reference`.

    Rules:
    - `fetch` is asynchronous; the pipeline runs several at once and makes no
      assumption about completion order.
    - Failures (missing repository/reference/path, transport errors) are raised
      as `SourceUnavailable`. Implementations do not retry.
    """

    async def fetch(self, coordinate: str, reference: str, path: str) -> str:
        ...
