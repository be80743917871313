"""Document parser contract."""

from __future__ import annotations

from typing import Any, Protocol


class DocumentParser(Protocol):
    """Turns document text into a tree of `dict`/`list`/scalar values.

    Anchors and aliases are expanded by the parser. Invalid text raises
    `ValueError` (or a subclass) carrying a readable message.
    """

    def __call__(self, text: str) -> Any:
        ...
