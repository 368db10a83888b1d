"""Package manifests (``package.json``, ``bower.json``, ...).

A Manifest is one or more JSON documents describing the same package.
Reads come from the first document defining a field, writes go to all of
them, so the version stays in sync across files.

Usage:
    match load([ManifestFile(root / "package.json"),
                ManifestFile(root / "bower.json", optional=True)]):
        case Ok(manifest):
            manifest.set("version", "1.2.4")
            manifest.write()
        case Err(e):
            print(e.message)
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from publicist.core.result import Err, Ok, Result
from publicist.core.structured import StrDict, as_str_dict, get_str
from publicist.platform.files import atomic_write_text
from publicist.release.errors import ReleaseError

__all__ = ["Manifest", "ManifestFile", "load"]


@dataclass(frozen=True, slots=True)
class ManifestFile:
    path: Path
    optional: bool = False


@dataclass(slots=True)
class _Document:
    path: Path
    data: StrDict


class Manifest:
    def __init__(self, documents: list[_Document]) -> None:
        self._documents = documents

    def get(self, field: str) -> object | None:
        for doc in self._documents:
            if field in doc.data:
                return doc.data[field]
        return None

    def get_str(self, field: str) -> str | None:
        for doc in self._documents:
            if field in doc.data:
                return get_str(doc.data, field)
        return None

    def set(self, field: str, value: object) -> Manifest:
        """Set ``field`` on every document. Returns self for chaining."""
        for doc in self._documents:
            doc.data[field] = value
        return self

    def paths(self) -> list[Path]:
        return [doc.path for doc in self._documents]

    def write(self) -> Result[list[Path], ReleaseError]:
        """Persist every document, two-space indented with a trailing newline."""
        written: list[Path] = []
        for doc in self._documents:
            try:
                text = json.dumps(doc.data, indent=2, ensure_ascii=False) + "\n"
                atomic_write_text(doc.path, text)
            except OSError as e:
                return Err(
                    ReleaseError(
                        kind="manifest_failed",
                        message=f"failed to write {doc.path.name}: {e}",
                        hint=str(doc.path),
                    )
                )
            written.append(doc.path)
        return Ok(written)


def load(files: Sequence[ManifestFile]) -> Result[Manifest, ReleaseError]:
    """Load manifest documents in order.

    Missing optional files are skipped; a missing required file, invalid
    JSON or a non-object root fails the whole load.
    """
    documents: list[_Document] = []
    for file in files:
        if file.optional and not file.path.exists():
            continue
        doc = _read_document(file.path)
        if isinstance(doc, Err):
            return doc
        documents.append(doc.value)

    if not documents:
        return Err(
            ReleaseError(
                kind="manifest_failed",
                message="no manifest found",
                hint=", ".join(str(f.path) for f in files) or None,
            )
        )
    return Ok(Manifest(documents))


def _read_document(path: Path) -> Result[_Document, ReleaseError]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        return Err(
            ReleaseError(
                kind="manifest_failed",
                message=f"failed to read {path.name}: {e}",
                hint=str(path),
            )
        )

    try:
        obj: object = json.loads(text)
    except json.JSONDecodeError as e:
        return Err(
            ReleaseError(
                kind="manifest_failed",
                message=f"invalid JSON in {path.name}: {e}",
                hint=str(path),
            )
        )

    data = as_str_dict(obj)
    if data is None:
        return Err(
            ReleaseError(
                kind="manifest_failed",
                message=f"invalid JSON root in {path.name}",
                hint=str(path),
            )
        )
    return Ok(_Document(path=path, data=data))
