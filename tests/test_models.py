from __future__ import annotations

import datetime

import pytest
from pydantic import ValidationError

from yammer.core.domain.models import CompositeDocument, EntryKind, Selector, values_equal


@pytest.mark.parametrize(
    "left, right",
    [
        ({"image": "redis", "ports": ["6379"]}, {"ports": ["6379"], "image": "redis"}),
        ([1, "a", None], [1, "a", None]),
        ({"a": {"b": [True, 1.5]}}, {"a": {"b": [True, 1.5]}}),
        (datetime.date(2024, 1, 1), datetime.date(2024, 1, 1)),
        (None, None),
    ],
)
def test_equal_values(left: object, right: object) -> None:
    assert values_equal(left, right)


@pytest.mark.parametrize(
    "left, right",
    [
        (True, 1),
        (1, 1.0),
        ("1", 1),
        ({"a": 1}, {"a": 1, "b": 2}),
        (["a", "b"], ["b", "a"]),
        ({"a": [1]}, {"a": 1}),
        ({"a": None}, {}),
        ("redis", None),
    ],
)
def test_different_values(left: object, right: object) -> None:
    assert not values_equal(left, right)


def test_selector_is_immutable() -> None:
    selector = Selector(coordinate="a/b", reference="main", path="f.yml", names=("web",))

    with pytest.raises(ValidationError):
        selector.path = "other.yml"


def test_selector_requires_names() -> None:
    with pytest.raises(ValidationError):
        Selector(coordinate="a/b", reference="main", path="f.yml", names=())


def test_composite_entries_list_services_then_extensions() -> None:
    composite = CompositeDocument()
    composite.extensions["x-a"] = {}
    composite.services["web"] = {}
    composite.origins[(EntryKind.SERVICE, "web")] = "one"
    composite.origins[(EntryKind.EXTENSION, "x-a")] = "two"

    assert composite.entries() == [
        (EntryKind.SERVICE, "web", "one"),
        (EntryKind.EXTENSION, "x-a", "two"),
    ]
