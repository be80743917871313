"""YAML text <-> document tree.

Loading uses a `SafeLoader` whose implicit typing follows the YAML 1.2 core
schema: only `true`/`false` are booleans, there are no base-60 numbers or
timestamps, and `0o`/`0x` are the only non-decimal integers. Compose values
such as `22:22`, `no` or `0755` therefore stay strings. Anchors, aliases and
`<<` merge keys are expanded while loading, so extracted subtrees are
self-contained.

Dumping never emits anchors, keeps insertion order and uses block style. A
string is quoted whenever a YAML 1.1 or 1.2 reader would take it for
something else.
"""

from __future__ import annotations

import re
from typing import Any

import yaml

_CORE_RESOLVERS = (
    (
        "tag:yaml.org,2002:bool",
        re.compile(r"^(?:true|True|TRUE|false|False|FALSE)$"),
        list("tTfF"),
    ),
    (
        "tag:yaml.org,2002:int",
        re.compile(r"^(?:[-+]?(?:0|[1-9][0-9]*)|0o[0-7]+|0x[0-9a-fA-F]+)$"),
        list("-+0123456789"),
    ),
    (
        "tag:yaml.org,2002:float",
        re.compile(
            r"""^(?:[-+]?(?:\.[0-9]+|[0-9]+\.[0-9]*)(?:[eE][-+]?[0-9]+)?
                |[-+]?[0-9]+[eE][-+]?[0-9]+
                |[-+]?\.(?:inf|Inf|INF)
                |\.(?:nan|NaN|NAN))$""",
            re.X,
        ),
        list("-+0123456789."),
    ),
    (
        "tag:yaml.org,2002:null",
        re.compile(r"^(?:~|null|Null|NULL|)$"),
        ["~", "n", "N", ""],
    ),
    (
        "tag:yaml.org,2002:merge",
        re.compile(r"^(?:<<)$"),
        ["<"],
    ),
)


class YamlSyntaxError(ValueError):
    """The text is not valid YAML."""


class _CoreSchemaLoader(yaml.SafeLoader):
    pass


_CoreSchemaLoader.yaml_implicit_resolvers = {}
for _tag, _pattern, _first in _CORE_RESOLVERS:
    _CoreSchemaLoader.add_implicit_resolver(_tag, _pattern, _first)


class _NoAliasDumper(yaml.SafeDumper):
    def ignore_aliases(self, data: Any) -> bool:
        return True

    def increase_indent(self, flow: bool = False, indentless: bool = False) -> None:
        # Indent sequences under their parent key, the way compose files are written.
        return super().increase_indent(flow, False)


# Core resolvers go after the YAML 1.1 ones: a plain scalar keeps its own
# type when 1.1 resolves it first, and any other match forces quotes.
for _tag, _pattern, _first in _CORE_RESOLVERS:
    _NoAliasDumper.add_implicit_resolver(_tag, _pattern, _first)


def load_document(text: str) -> Any:
    """Parse YAML text into plain `dict`/`list`/scalar values (first document only)."""

    try:
        return yaml.load(text, Loader=_CoreSchemaLoader)
    except yaml.YAMLError as exc:
        raise YamlSyntaxError(str(exc)) from exc


def dump_document(tree: Any) -> str:
    """Serialize a document tree to block-style YAML, preserving key order."""

    return yaml.dump(
        tree,
        Dumper=_NoAliasDumper,
        sort_keys=False,
        default_flow_style=False,
        allow_unicode=True,
    )
