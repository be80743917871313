"""Reading and writing the compose file on disk."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Any

from yammer.adapters.yaml_codec import load_document
from yammer.core.domain.errors import DocumentParseError
from yammer.core.extractor import parse_compose_text


def read_existing_compose(path: Path) -> dict[str, Any]:
    """Load an existing compose file, checking its top-level shape."""

    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise DocumentParseError(None, f"{path}: not valid UTF-8") from exc
    try:
        return parse_compose_text(text, parse=load_document)
    except DocumentParseError as exc:
        raise DocumentParseError(None, f"{path}: {exc.reason}") from exc


def write_compose_file(*, text: str, output_path: Path) -> Path:
    """Write `text` to `output_path` atomically (UTF-8).

    The content goes to a temporary file next to the target which then
    replaces it, so a reader never sees a half-written file.
    """

    output_path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(
        prefix=f".{output_path.name}.",
        suffix=".tmp",
        dir=str(output_path.parent),
    )
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(text)
        os.chmod(tmp_name, 0o644)
        os.replace(tmp_name, output_path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise
    return output_path
