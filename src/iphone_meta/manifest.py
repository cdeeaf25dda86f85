"""Cache manifest generation."""

from __future__ import annotations

import hashlib
import logging
from pathlib import Path
from typing import Iterable, Optional

from .constants import MANIFEST_ENCODING, MANIFEST_GLOB, MANIFEST_HEADER

LOGGER = logging.getLogger(__name__)

_CHUNK_SIZE = 8192


class ManifestError(RuntimeError):
    """Raised when the cache manifest cannot be written or a listed file cannot be read."""


def file_md5(path: str | Path) -> str:
    """Return the hex MD5 digest of the raw bytes of *path*."""

    digest = hashlib.md5()
    with open(path, "rb") as handle:
        for chunk in iter(lambda: handle.read(_CHUNK_SIZE), b""):
            digest.update(chunk)
    return digest.hexdigest()


def manifest_entries(
    root: str | Path,
    *,
    exclude: Iterable[str | Path] = (),
) -> list[tuple[str, Path]]:
    """Return ``(name, path)`` pairs for the files in *root* whose name contains a dot.

    The scan is not recursive. Hidden files are skipped as a shell glob would,
    and so are directories. Entries are sorted by name.
    """

    excluded = {Path(item).resolve() for item in exclude}
    entries: list[tuple[str, Path]] = []
    for path in sorted(Path(root).glob(MANIFEST_GLOB), key=lambda item: item.name):
        if path.name.startswith("."):
            continue
        if not path.is_file():
            continue
        if path.resolve() in excluded:
            continue
        entries.append((path.name, path))
    return entries


def write_manifest(
    path: str | Path,
    *,
    root: Optional[str | Path] = None,
    exclude: Iterable[str | Path] = (),
) -> int:
    """Write a cache manifest listing every file in *root* with its MD5 digest.

    *root* defaults to the current working directory. The manifest itself and
    anything in *exclude* are left out. Returns the number of entries written.
    Any I/O failure is raised as :class:`ManifestError`.
    """

    target = Path(path)
    scan_root = Path(root) if root is not None else Path.cwd()
    count = 0
    try:
        with target.open("w", encoding=MANIFEST_ENCODING) as handle:
            handle.write(f"{MANIFEST_HEADER}\n")
            for name, entry in manifest_entries(scan_root, exclude=[target, *exclude]):
                # The digest changes whenever the file does, which makes clients refetch.
                handle.write(f"{name} #{file_md5(entry)}\n")
                count += 1
    except OSError as exc:
        raise ManifestError(f"Unable to write manifest {target}: {exc}") from exc
    LOGGER.info("Wrote cache manifest %s with %d entries", target, count)
    return count


__all__ = ["ManifestError", "file_md5", "manifest_entries", "write_manifest"]
