from __future__ import annotations

import json
from pathlib import Path

import pytest

from publicist.core.result import Err, Ok
from publicist.release.manifest import ManifestFile, load


def _files(root: Path) -> list[ManifestFile]:
    return [ManifestFile(root / "package.json"), ManifestFile(root / "bower.json", optional=True)]


def _read(path: Path) -> dict[str, object]:
    return json.loads(path.read_text(encoding="utf-8"))


def test_load_reads_first_definition(package_repo: Path) -> None:
    (package_repo / "bower.json").write_text('{"name": "widget-bower", "version": "0.0.1"}')

    result = load(_files(package_repo))

    assert isinstance(result, Ok)
    manifest = result.value
    assert manifest.get("name") == "widget"
    assert manifest.get_str("version") == "1.2.3"
    assert manifest.get("main") == "lib/index.js"
    assert manifest.get("missing") is None


def test_optional_file_skipped_when_absent(package_repo: Path) -> None:
    (package_repo / "bower.json").unlink()

    result = load(_files(package_repo))

    assert isinstance(result, Ok)
    assert result.value.paths() == [package_repo / "package.json"]


def test_required_file_missing_fails(tmp_path: Path) -> None:
    result = load(_files(tmp_path))

    assert isinstance(result, Err)
    assert result.error.kind == "manifest_failed"
    assert "package.json" in result.error.message


@pytest.mark.parametrize(
    ("content", "fragment"),
    [("{not json", "invalid JSON in"), ('["array"]', "invalid JSON root")],
)
def test_malformed_file_fails(tmp_path: Path, content: str, fragment: str) -> None:
    (tmp_path / "package.json").write_text(content, encoding="utf-8")

    result = load(_files(tmp_path))

    assert isinstance(result, Err)
    assert fragment in result.error.message


def test_malformed_optional_file_still_fails(package_repo: Path) -> None:
    (package_repo / "bower.json").write_text("{", encoding="utf-8")

    assert isinstance(load(_files(package_repo)), Err)


def test_no_files_at_all(tmp_path: Path) -> None:
    result = load([ManifestFile(tmp_path / "bower.json", optional=True)])

    assert isinstance(result, Err)
    assert result.error.message == "no manifest found"


def test_set_and_write_updates_every_file(package_repo: Path) -> None:
    manifest = load(_files(package_repo)).unwrap()
    assert manifest is not None

    written = manifest.set("version", "1.2.4").write()

    assert written == Ok([package_repo / "package.json", package_repo / "bower.json"])
    assert _read(package_repo / "package.json")["version"] == "1.2.4"
    assert _read(package_repo / "bower.json")["version"] == "1.2.4"


def test_write_preserves_key_order_and_format(package_repo: Path) -> None:
    manifest = load([ManifestFile(package_repo / "package.json")]).unwrap()
    assert manifest is not None

    manifest.set("version", "2.0.0").write()

    assert (package_repo / "package.json").read_text(encoding="utf-8") == (
        '{\n  "name": "widget",\n  "version": "2.0.0",\n  "main": "lib/index.js"\n}\n'
    )


def test_write_keeps_non_ascii_text(tmp_path: Path) -> None:
    path = tmp_path / "package.json"
    path.write_text(
        '{\n  "name": "widget",\n  "version": "1.2.3",\n  "author": "José Müller ✓"\n}\n',
        encoding="utf-8",
    )

    load([ManifestFile(path)]).unwrap().set("version", "1.2.4").write()

    assert path.read_text(encoding="utf-8") == (
        '{\n  "name": "widget",\n  "version": "1.2.4",\n  "author": "José Müller ✓"\n}\n'
    )


def test_write_failure(package_repo: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    import publicist.release.manifest as manifest_mod

    def fail_write(path: Path, content: str, *, encoding: str = "utf-8") -> None:
        raise PermissionError("read-only")

    monkeypatch.setattr(manifest_mod, "atomic_write_text", fail_write)
    manifest = load(_files(package_repo)).unwrap()
    assert manifest is not None

    result = manifest.set("version", "1.2.4").write()

    assert isinstance(result, Err)
    assert result.error.kind == "manifest_failed"
    assert "read-only" in result.error.message
