"""Domain models.

A `Selector` says where a compose file lives and which names to take out of it.
Each requested name becomes an `Entry`; entries from every selector are folded
into a single `CompositeDocument`.

Entry values are the YAML-native trees produced by the parser: `dict` for
mappings, `list` for sequences, and scalars (`str`, `int`, `float`, `bool`,
`None`, dates). `values_equal` defines structural equality over them.
"""

from __future__ import annotations

import datetime
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union

from pydantic import BaseModel, ConfigDict, Field

COMPOSE_FORMAT_VERSION = "3.8"
EXTENSION_PREFIX = "x-"

Scalar = Union[str, int, float, bool, None, datetime.date, datetime.datetime]
Value = Union[Scalar, list["Value"], dict[str, "Value"]]


class EntryKind(str, Enum):
    """Where an entry lives in a compose file."""

    SERVICE = "service"
    EXTENSION = "extension"

    def label(self) -> str:
        return "extension field" if self is EntryKind.EXTENSION else "service"


class ConflictPolicy(str, Enum):
    """How two differing definitions of the same name are reconciled."""

    FAIL = "fail"
    LAST_WINS = "last-wins"


def is_extension_name(name: str) -> bool:
    return name.startswith(EXTENSION_PREFIX)


class Selector(BaseModel):
    """One `owner/repo+ref:path@name1,name2` argument, parsed.

    Immutable once built; `str()` gives back the canonical selector text.
    """

    model_config = ConfigDict(frozen=True)

    coordinate: str = Field(..., min_length=1, description="`owner/repo` of the source repository.")
    reference: str = Field(..., min_length=1, description="Branch, tag or commit.")
    path: str = Field(..., min_length=1, description="File path inside the repository.")
    names: tuple[str, ...] = Field(
        ...,
        min_length=1,
        description="Requested services / extension fields, in the order given.",
    )

    def __str__(self) -> str:
        return f"{self.coordinate}+{self.reference}:{self.path}@{','.join(self.names)}"


class Entry(BaseModel):
    """A named service or extension fragment taken out of one document."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    kind: EntryKind
    value: Any = Field(default=None, description="Document subtree (mapping, sequence or scalar).")


@dataclass
class CompositeDocument:
    """Accumulated result of merging every selector.

    `services` and `extensions` keep first-seen insertion order. `origins`
    remembers which source contributed each `(kind, name)` so conflicts can
    name both sides; `replaceable` marks entries seeded from an existing output
    file, which selectors are allowed to overwrite.
    """

    version: str = COMPOSE_FORMAT_VERSION
    services: dict[str, Any] = field(default_factory=dict)
    extensions: dict[str, Any] = field(default_factory=dict)
    origins: dict[tuple[EntryKind, str], str] = field(default_factory=dict)
    replaceable: set[tuple[EntryKind, str]] = field(default_factory=set)

    def section(self, kind: EntryKind) -> dict[str, Any]:
        return self.services if kind is EntryKind.SERVICE else self.extensions

    def entries(self) -> list[tuple[EntryKind, str, str]]:
        """`(kind, name, origin)` for everything composed so far, in output order."""

        out: list[tuple[EntryKind, str, str]] = []
        for kind in (EntryKind.SERVICE, EntryKind.EXTENSION):
            for name in self.section(kind):
                out.append((kind, name, self.origins.get((kind, name), "")))
        return out


def values_equal(left: Value, right: Value) -> bool:
    """Structural, type-aware equality of two document trees.

    Mappings compare by key set and value (key order is irrelevant), sequences
    element by element. Scalars must share a type: `True != 1`, `1 != 1.0`.
    """

    if isinstance(left, dict) or isinstance(right, dict):
        if not (isinstance(left, dict) and isinstance(right, dict)):
            return False
        if left.keys() != right.keys():
            return False
        return all(values_equal(left[key], right[key]) for key in left)

    if isinstance(left, (list, tuple)) or isinstance(right, (list, tuple)):
        if not (isinstance(left, (list, tuple)) and isinstance(right, (list, tuple))):
            return False
        if len(left) != len(right):
            return False
        return all(values_equal(a, b) for a, b in zip(left, right))

    if type(left) is not type(right):
        return False
    return left == right
