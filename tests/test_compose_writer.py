from __future__ import annotations

from pathlib import Path

import pytest

from yammer.adapters.compose_writer import read_existing_compose, write_compose_file
from yammer.core.domain.errors import DocumentParseError


def test_write_creates_parent_directories(tmp_path: Path) -> None:
    target = tmp_path / "deploy" / "docker-compose.yml"

    written = write_compose_file(text="version: '3.8'\n", output_path=target)

    assert written == target
    assert target.read_text(encoding="utf-8") == "version: '3.8'\n"
    assert list(target.parent.iterdir()) == [target]


def test_write_replaces_existing_file(tmp_path: Path) -> None:
    target = tmp_path / "docker-compose.yml"
    target.write_text("old\n", encoding="utf-8")

    write_compose_file(text="new\n", output_path=target)

    assert target.read_text(encoding="utf-8") == "new\n"


def test_read_existing(tmp_path: Path) -> None:
    target = tmp_path / "docker-compose.yml"
    target.write_text("services:\n  web:\n    image: nginx\n", encoding="utf-8")

    assert read_existing_compose(target) == {"services": {"web": {"image": "nginx"}}}


def test_read_existing_malformed(tmp_path: Path) -> None:
    target = tmp_path / "docker-compose.yml"
    target.write_text("- just\n- a list\n", encoding="utf-8")

    with pytest.raises(DocumentParseError) as excinfo:
        read_existing_compose(target)

    assert str(target) in str(excinfo.value)


def test_read_existing_rejects_non_utf8(tmp_path: Path) -> None:
    target = tmp_path / "docker-compose.yml"
    target.write_bytes(b"\xff\xfeservices: {}\n")

    with pytest.raises(DocumentParseError) as excinfo:
        read_existing_compose(target)

    assert excinfo.value.reason == f"{target}: not valid UTF-8"
    assert excinfo.value.selector is None
