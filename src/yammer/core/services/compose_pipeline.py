"""Compose pipeline orchestration.

Fetch + extract run concurrently, one task per selector. The merge is a
sequential fold over the results in selector order, so the output does not
depend on which fetch finishes first. The first failure cancels the
remaining fetches and is re-raised; nothing is merged in that case.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Callable, Sequence

from yammer.core.domain.errors import FetchError, SourceUnavailable
from yammer.core.domain.models import CompositeDocument, ConflictPolicy, Entry, Selector
from yammer.core.extractor import extract
from yammer.core.interfaces.fetcher import DocumentFetcher
from yammer.core.interfaces.parser import DocumentParser
from yammer.core.merge import merge_entries

logger = logging.getLogger(__name__)


@dataclass
class PipelineHooks:
    """Optional callbacks for UI layers (progress)."""

    resolved: Callable[[Selector, int], None] | None = None


@dataclass
class ComposeRequest:
    """Parameters that control one compose run."""

    selectors: Sequence[Selector]
    policy: ConflictPolicy = ConflictPolicy.FAIL
    max_concurrency: int = 8
    base: CompositeDocument | None = None


@dataclass
class ComposeResult:
    """Output of a pipeline invocation."""

    composite: CompositeDocument
    resolved: list[tuple[Selector, list[Entry]]] = field(default_factory=list)


async def resolve_selector(
    fetcher: DocumentFetcher,
    parser: DocumentParser,
    selector: Selector,
    *,
    semaphore: asyncio.Semaphore | None = None,
) -> list[Entry]:
    """Fetch the selector's document and extract its requested entries."""

    async def fetch() -> str:
        logger.info("fetching %s from %s@%s", selector.path, selector.coordinate, selector.reference)
        try:
            return await fetcher.fetch(selector.coordinate, selector.reference, selector.path)
        except SourceUnavailable as exc:
            raise FetchError(selector, exc.reason, status_code=exc.status_code) from exc

    if semaphore is None:
        text = await fetch()
    else:
        async with semaphore:
            text = await fetch()
    return extract(text, selector.names, parse=parser, selector=selector)


async def resolve_all(
    fetcher: DocumentFetcher,
    parser: DocumentParser,
    selectors: Sequence[Selector],
    *,
    max_concurrency: int = 8,
    hooks: PipelineHooks | None = None,
) -> list[list[Entry]]:
    """Resolve every selector concurrently; results come back in selector order."""

    hooks = hooks or PipelineHooks()
    semaphore = asyncio.Semaphore(max(1, max_concurrency))
    completed = 0

    async def run(selector: Selector) -> list[Entry]:
        nonlocal completed
        entries = await resolve_selector(fetcher, parser, selector, semaphore=semaphore)
        completed += 1
        if hooks.resolved:
            hooks.resolved(selector, completed)
        return entries

    tasks = [asyncio.create_task(run(selector)) for selector in selectors]
    try:
        for finished in asyncio.as_completed(tasks):
            await finished
    finally:
        pending = [task for task in tasks if not task.done()]
        for task in pending:
            task.cancel()
        # Collect everything so no task exception goes unretrieved.
        await asyncio.gather(*tasks, return_exceptions=True)

    return [task.result() for task in tasks]


async def compose(
    *,
    fetcher: DocumentFetcher,
    parser: DocumentParser,
    request: ComposeRequest,
    hooks: PipelineHooks | None = None,
) -> ComposeResult:
    """Resolve every selector, then fold the entries into one composite."""

    results = await resolve_all(
        fetcher,
        parser,
        request.selectors,
        max_concurrency=request.max_concurrency,
        hooks=hooks,
    )

    composite = request.base if request.base is not None else CompositeDocument()
    resolved: list[tuple[Selector, list[Entry]]] = []
    for selector, entries in zip(request.selectors, results):
        merge_entries(composite, entries, source=str(selector), policy=request.policy)
        resolved.append((selector, entries))

    logger.info(
        "composed %d service(s) and %d extension field(s) from %d selector(s)",
        len(composite.services),
        len(composite.extensions),
        len(request.selectors),
    )
    return ComposeResult(composite=composite, resolved=resolved)
