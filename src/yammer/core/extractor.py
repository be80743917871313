"""Pulls the requested services and extension fields out of one compose file."""

from __future__ import annotations

import copy
import logging
from typing import Any, Sequence

from yammer.core.domain.errors import DocumentParseError, UnknownEntry
from yammer.core.domain.models import Entry, EntryKind, Selector, is_extension_name
from yammer.core.interfaces.parser import DocumentParser

logger = logging.getLogger(__name__)


def parse_compose_text(
    text: str,
    *,
    parse: DocumentParser,
    selector: Selector | None = None,
) -> dict[str, Any]:
    """Parse compose text with `parse` and check its top-level shape.

    An empty document is an empty mapping. A root that is not a mapping, or a
    `services` key that is neither null nor a mapping, is a `DocumentParseError`.
    """

    try:
        tree = parse(text)
    except ValueError as exc:
        raise DocumentParseError(selector, f"invalid YAML: {exc}") from exc

    if tree is None:
        return {}
    if not isinstance(tree, dict):
        raise DocumentParseError(selector, f"top level is a {type(tree).__name__}, expected a mapping")

    services = tree.get("services")
    if services is not None and not isinstance(services, dict):
        raise DocumentParseError(selector, f"'services' is a {type(services).__name__}, expected a mapping")
    return tree


def select_entries(
    tree: dict[str, Any],
    requested_names: Sequence[str],
    *,
    selector: Selector | None = None,
) -> list[Entry]:
    """Look up every requested name, in the order requested.

    A name under `services` is a service, even when it also carries the
    extension prefix and exists at the root. Otherwise an `x-` name is looked
    up among the root keys. Any miss fails the whole selector.
    """

    services = tree.get("services") or {}
    entries: list[Entry] = []
    for name in requested_names:
        if name in services:
            kind = EntryKind.SERVICE
            value = services[name]
        elif is_extension_name(name) and name in tree:
            kind = EntryKind.EXTENSION
            value = tree[name]
        else:
            raise UnknownEntry(selector, name)
        entries.append(Entry(name=name, kind=kind, value=copy.deepcopy(value)))
    return entries


def extract(
    text: str,
    requested_names: Sequence[str],
    *,
    parse: DocumentParser,
    selector: Selector | None = None,
) -> list[Entry]:
    """Parse `text` and return the requested entries, or raise `ExtractionError`."""

    tree = parse_compose_text(text, parse=parse, selector=selector)
    entries = select_entries(tree, requested_names, selector=selector)
    logger.debug(
        "extracted %d entr%s from %s",
        len(entries),
        "y" if len(entries) == 1 else "ies",
        selector if selector is not None else "document",
    )
    return entries
