"""Selector parsing.

Grammar (delimiters are taken at their first occurrence, left to right):

    <owner>/<repo>+<reference>:<path>@<name>(,<name>)*

- coordinate: non-empty, no `+`, exactly one `/` between non-empty owner/repo
- reference:  non-empty, no `:`
- path:       non-empty, no `@`
- names:      comma separated, each non-empty, no surrounding whitespace,
              no duplicates
"""

from __future__ import annotations

from typing import Iterable

from yammer.core.domain.errors import MalformedSelector
from yammer.core.domain.models import Selector


def _split_once(text: str, remainder: str, delimiter: str, segment: str) -> tuple[str, str]:
    head, sep, tail = remainder.partition(delimiter)
    if not sep:
        raise MalformedSelector(text, f"missing {delimiter!r} after the {segment}")
    if not head.strip():
        raise MalformedSelector(text, f"empty {segment}")
    return head, tail


def parse_selector(text: str) -> Selector:
    """Parse one selector string into a `Selector`.

    Raises `MalformedSelector` on a missing delimiter, an empty segment, a
    coordinate that is not `owner/repo`, a name with surrounding whitespace or
    a name requested twice.
    """

    coordinate, rest = _split_once(text, text, "+", "repository coordinate")
    reference, rest = _split_once(text, rest, ":", "reference")
    path, names_csv = _split_once(text, rest, "@", "path")

    owner, slash, repository = coordinate.partition("/")
    if not slash or not owner or not repository or "/" in repository:
        raise MalformedSelector(text, f"coordinate {coordinate!r} is not of the form owner/repo")

    names: list[str] = []
    for name in names_csv.split(","):
        if not name.strip():
            raise MalformedSelector(text, "empty name in the requested names")
        if name != name.strip():
            raise MalformedSelector(text, f"name {name!r} has surrounding whitespace")
        if name in names:
            raise MalformedSelector(text, f"name {name!r} is requested more than once")
        names.append(name)

    return Selector(coordinate=coordinate, reference=reference, path=path, names=tuple(names))


def parse_selectors(texts: Iterable[str]) -> list[Selector]:
    """Parse every selector, failing on the first malformed one."""

    return [parse_selector(text) for text in texts]
