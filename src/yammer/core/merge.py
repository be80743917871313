"""Merge accumulator and composite document assembly.

Selectors are folded strictly in command-line order, and entries within a
selector in requested order; that order is the output order. A name seen
again never moves.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable

from yammer.core.domain.errors import ConflictingDefinition
from yammer.core.domain.models import (
    CompositeDocument,
    ConflictPolicy,
    Entry,
    EntryKind,
    is_extension_name,
    values_equal,
)

logger = logging.getLogger(__name__)


def merge_entries(
    composite: CompositeDocument,
    entries: Iterable[Entry],
    *,
    source: str,
    policy: ConflictPolicy = ConflictPolicy.FAIL,
) -> CompositeDocument:
    """Fold one source's entries into `composite` (mutated and returned).

    - new name: appended
    - same kind, structurally identical value: no-op
    - seeded from an existing file: replaced in place
    - otherwise: `ConflictingDefinition`, or replaced in place under `last-wins`
    """

    for entry in entries:
        key = (entry.kind, entry.name)
        section = composite.section(entry.kind)

        if entry.name not in section:
            section[entry.name] = entry.value
            composite.origins[key] = source
            continue

        first_source = composite.origins.get(key, "")
        if key in composite.replaceable:
            logger.info("%s %r from %s replaces the one in %s", entry.kind.label(), entry.name, source, first_source)
            section[entry.name] = entry.value
            composite.origins[key] = source
            composite.replaceable.discard(key)
            continue

        if values_equal(section[entry.name], entry.value):
            logger.debug("%s %r from %s is identical to %s, skipped", entry.kind.label(), entry.name, source, first_source)
            continue

        if policy is ConflictPolicy.LAST_WINS:
            logger.warning(
                "%s %r from %s overrides the definition from %s",
                entry.kind.label(),
                entry.name,
                source,
                first_source,
            )
            section[entry.name] = entry.value
            composite.origins[key] = source
            continue

        raise ConflictingDefinition(entry.name, entry.kind, first_source, source)

    return composite


def seed_composite(tree: dict[str, Any], *, source: str) -> CompositeDocument:
    """Start a composite from an existing compose file.

    Its services and `x-` root keys are kept in their order and marked
    replaceable; every other top-level key is dropped.
    """

    composite = CompositeDocument()
    entries = [
        Entry(name=name, kind=EntryKind.SERVICE, value=value)
        for name, value in (tree.get("services") or {}).items()
        if isinstance(name, str)
    ]
    entries.extend(
        Entry(name=name, kind=EntryKind.EXTENSION, value=value)
        for name, value in tree.items()
        if isinstance(name, str) and is_extension_name(name)
    )
    merge_entries(composite, entries, source=source)
    composite.replaceable.update(composite.origins)
    return composite


def build_document_tree(composite: CompositeDocument) -> dict[str, Any]:
    """Final document: `version`, `services`, then extension fields at the root."""

    tree: dict[str, Any] = {
        "version": composite.version,
        "services": dict(composite.services),
    }
    tree.update(composite.extensions)
    return tree
