"""Error taxonomy.

Every failure is terminal for the invocation. Errors carry enough context
(selector text, entry name, both sides of a conflict) for the CLI to print a
single actionable line.
"""

from __future__ import annotations

from yammer.core.domain.models import EntryKind, Selector


class YammerError(Exception):
    """Base class for every error the compose pipeline reports."""


class MalformedSelector(YammerError):
    def __init__(self, text: str, reason: str) -> None:
        self.text = text
        self.reason = reason
        super().__init__(f"malformed selector {text!r}: {reason}")


class SourceUnavailable(YammerError):
    """Raised by fetchers: the file could not be retrieved.

    Fetchers do not know which selector asked for the file; the pipeline
    turns this into a `FetchError` naming the selector.
    """

    def __init__(self, location: str, reason: str, *, status_code: int | None = None) -> None:
        self.location = location
        self.reason = reason
        self.status_code = status_code
        super().__init__(f"{location}: {reason}")


class FetchError(YammerError):
    """The document behind a selector could not be retrieved."""

    def __init__(self, selector: Selector, reason: str, *, status_code: int | None = None) -> None:
        self.selector = selector
        self.reason = reason
        self.status_code = status_code
        super().__init__(f"could not fetch {selector}: {reason}")


class ExtractionError(YammerError):
    """The fetched document could not provide the requested entries."""

    def __init__(self, selector: Selector | None, reason: str) -> None:
        self.selector = selector
        self.reason = reason
        where = f" ({selector})" if selector is not None else ""
        super().__init__(f"{reason}{where}")


class UnknownEntry(ExtractionError):
    def __init__(self, selector: Selector | None, name: str) -> None:
        self.name = name
        document = selector.path if selector is not None else "the document"
        super().__init__(
            selector,
            f"{name!r} is neither a service nor an extension field of {document}",
        )


class DocumentParseError(ExtractionError):
    pass


class MergeError(YammerError):
    """Entries from different selectors cannot be combined."""


class ConflictingDefinition(MergeError):
    def __init__(self, name: str, kind: EntryKind, first_source: str, conflicting_source: str) -> None:
        self.name = name
        self.kind = kind
        self.first_source = first_source
        self.conflicting_source = conflicting_source
        super().__init__(
            f"{kind.label()} {name!r} is defined differently by {first_source} and {conflicting_source}"
        )
