import hashlib

import pytest

from iphone_meta import manifest as manifest_module
from iphone_meta import rewriter as rewriter_module
from iphone_meta.manifest import ManifestError, file_md5, manifest_entries, write_manifest
from iphone_meta.rewriter import ResponseRewriter

A_TXT = b"hello world\n"
B_PNG = b"\x89PNG fake image"


def _md5(data: bytes) -> str:
    return hashlib.md5(data).hexdigest()


@pytest.fixture
def site(tmp_path, monkeypatch):
    (tmp_path / "b.png").write_bytes(B_PNG)
    (tmp_path / "a.txt").write_bytes(A_TXT)
    (tmp_path / "app.manifest").write_text("stale\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    return tmp_path


def test_write_manifest_lists_files_with_md5(site):
    count = write_manifest("app.manifest")

    lines = (site / "app.manifest").read_text(encoding="utf-8").splitlines()
    assert lines == [
        "CACHE MANIFEST",
        f"a.txt #{_md5(A_TXT)}",
        f"b.png #{_md5(B_PNG)}",
    ]
    assert count == 2


def test_manifest_skips_names_without_dot_hidden_files_and_directories(site):
    (site / "README").write_text("no extension", encoding="utf-8")
    (site / ".env.local").write_text("SECRET=1", encoding="utf-8")
    (site / "assets.d").mkdir()

    entries = manifest_entries(site)

    assert [name for name, _ in entries] == ["a.txt", "app.manifest", "b.png"]


def test_manifest_entries_honours_exclude(site):
    entries = manifest_entries(site, exclude=[site / "app.manifest", "b.png"])

    assert [name for name, _ in entries] == ["a.txt"]


def test_write_manifest_with_explicit_root(tmp_path):
    root = tmp_path / "public"
    root.mkdir()
    (root / "index.html").write_text("<html></html>", encoding="utf-8")
    target = tmp_path / "offline.manifest"

    write_manifest(target, root=root)

    assert target.read_text(encoding="utf-8").splitlines()[1] == f"index.html #{_md5(b'<html></html>')}"


def test_rewriter_writes_manifest_at_construction(site, monkeypatch):
    # Pretend the middleware module lives in the scanned directory.
    (site / "iphone.py").write_text("# middleware\n", encoding="utf-8")
    monkeypatch.setattr(rewriter_module, "__file__", str(site / "iphone.py"))

    ResponseRewriter(manifest="app.manifest")

    lines = (site / "app.manifest").read_text(encoding="utf-8").splitlines()
    assert lines[0] == "CACHE MANIFEST"
    assert [line.split(" #")[0] for line in lines[1:]] == ["a.txt", "b.png"]


def test_rewriter_without_manifest_writes_nothing(site):
    ResponseRewriter(icon="icon.png")

    assert (site / "app.manifest").read_text(encoding="utf-8") == "stale\n"


def test_unwritable_manifest_is_fatal(tmp_path):
    with pytest.raises(ManifestError) as excinfo:
        write_manifest(tmp_path / "missing" / "app.manifest", root=tmp_path)

    assert isinstance(excinfo.value.__cause__, OSError)


def test_unwritable_manifest_fails_construction(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    with pytest.raises(ManifestError, match="Unable to write manifest"):
        ResponseRewriter(manifest=str(tmp_path / "missing" / "app.manifest"))


def test_unreadable_file_is_fatal(site, monkeypatch):
    def unreadable(path):
        raise PermissionError(13, "Permission denied", str(path))

    monkeypatch.setattr(manifest_module, "file_md5", unreadable)

    with pytest.raises(ManifestError):
        write_manifest("app.manifest")


def test_file_md5_reads_in_chunks(tmp_path):
    payload = bytes(range(256)) * 100
    path = tmp_path / "blob.bin"
    path.write_bytes(payload)

    assert file_md5(path) == _md5(payload)
