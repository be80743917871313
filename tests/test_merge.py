from __future__ import annotations

import logging

import pytest

from yammer.core.domain.errors import ConflictingDefinition, MergeError
from yammer.core.domain.models import COMPOSE_FORMAT_VERSION, CompositeDocument, ConflictPolicy, Entry, EntryKind
from yammer.core.merge import build_document_tree, merge_entries, seed_composite


def service(name: str, value: object) -> Entry:
    return Entry(name=name, kind=EntryKind.SERVICE, value=value)


def extension(name: str, value: object) -> Entry:
    return Entry(name=name, kind=EntryKind.EXTENSION, value=value)


def test_first_seen_order_across_sources() -> None:
    composite = CompositeDocument()
    merge_entries(composite, [service("redis", {"image": "redis"}), service("api", {"build": "."})], source="A")
    merge_entries(composite, [service("mongo", {"image": "mongo"}), extension("x-pg", {"image": "postgres"})], source="B")

    assert list(composite.services) == ["redis", "api", "mongo"]
    assert list(composite.extensions) == ["x-pg"]
    assert composite.origins[(EntryKind.SERVICE, "mongo")] == "B"


def test_identical_duplicate_is_accepted_once() -> None:
    composite = CompositeDocument()
    merge_entries(composite, [service("redis", {"image": "redis", "ports": ["6379"]})], source="A")
    merge_entries(composite, [service("redis", {"ports": ["6379"], "image": "redis"})], source="B")

    assert list(composite.services) == ["redis"]
    assert composite.origins[(EntryKind.SERVICE, "redis")] == "A"


def test_differing_definition_is_a_conflict() -> None:
    composite = CompositeDocument()
    merge_entries(composite, [service("redis", {"image": "redis:6"})], source="A/B+main:f.yml@redis")

    with pytest.raises(ConflictingDefinition) as excinfo:
        merge_entries(composite, [service("redis", {"image": "redis:7"})], source="C/D+main:f.yml@redis")

    error = excinfo.value
    assert isinstance(error, MergeError)
    assert error.name == "redis"
    assert error.first_source == "A/B+main:f.yml@redis"
    assert error.conflicting_source == "C/D+main:f.yml@redis"


def test_same_name_different_kind_is_not_a_conflict() -> None:
    composite = CompositeDocument()
    merge_entries(composite, [service("x-shared", {"image": "a"})], source="A")
    merge_entries(composite, [extension("x-shared", {"image": "b"})], source="B")

    assert composite.services == {"x-shared": {"image": "a"}}
    assert composite.extensions == {"x-shared": {"image": "b"}}


def test_last_wins_replaces_in_place(caplog: pytest.LogCaptureFixture) -> None:
    composite = CompositeDocument()
    merge_entries(composite, [service("redis", {"image": "redis:6"}), service("api", {})], source="A")

    with caplog.at_level(logging.WARNING, logger="yammer.core.merge"):
        merge_entries(composite, [service("redis", {"image": "redis:7"})], source="B", policy=ConflictPolicy.LAST_WINS)

    assert list(composite.services) == ["redis", "api"]
    assert composite.services["redis"] == {"image": "redis:7"}
    assert composite.origins[(EntryKind.SERVICE, "redis")] == "B"
    assert "overrides" in caplog.text


def test_seeded_entries_are_replaced_without_conflict() -> None:
    existing = {
        "version": "3",
        "services": {"web": {"image": "nginx:1.24"}, "redis": {"image": "redis:6"}},
        "x-logging": {"driver": "json-file"},
        "volumes": {"data": {}},
    }
    composite = seed_composite(existing, source="existing:docker-compose.yml")

    merge_entries(composite, [service("redis", {"image": "redis:7"}), service("mongo", {})], source="S")

    assert list(composite.services) == ["web", "redis", "mongo"]
    assert composite.services["redis"] == {"image": "redis:7"}
    assert composite.extensions == {"x-logging": {"driver": "json-file"}}
    assert (EntryKind.SERVICE, "web") in composite.replaceable
    assert (EntryKind.SERVICE, "redis") not in composite.replaceable


def test_replaced_seed_entry_then_conflicts_between_selectors() -> None:
    composite = seed_composite({"services": {"redis": {"image": "redis:5"}}}, source="existing")
    merge_entries(composite, [service("redis", {"image": "redis:6"})], source="A")

    with pytest.raises(ConflictingDefinition):
        merge_entries(composite, [service("redis", {"image": "redis:7"})], source="B")


def test_document_tree_key_order() -> None:
    composite = CompositeDocument()
    merge_entries(composite, [extension("x-pg", {"image": "postgres"}), service("web", {"image": "nginx"})], source="A")

    tree = build_document_tree(composite)

    assert list(tree) == ["version", "services", "x-pg"]
    assert tree["version"] == COMPOSE_FORMAT_VERSION
    assert tree["services"] == {"web": {"image": "nginx"}}


def test_empty_composite_still_has_services() -> None:
    assert build_document_tree(CompositeDocument()) == {"version": COMPOSE_FORMAT_VERSION, "services": {}}
