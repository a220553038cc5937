"""Extract the source tarball into a fresh scratch directory and locate its single top-level dir."""

from __future__ import annotations

import logging
import shutil
import tarfile
from pathlib import Path

from rdseed_tooling.errors import (
    AmbiguousArchiveLayout,
    ExtractionEmpty,
    ExtractionFailed,
    FileNotFound,
)

log = logging.getLogger(__name__)


def _top_level_dirs(scratch_dir: Path) -> list[Path]:
    return sorted(p for p in scratch_dir.iterdir() if p.is_dir() and not p.is_symlink())


def _check_members(tf: tarfile.TarFile, archive_path: Path) -> None:
    for m in tf.getmembers():
        name = m.name
        if name.startswith("/") or ".." in Path(name).parts:
            msg = f"Refusing unsafe path in {archive_path.name}: {name}"
            raise ExtractionFailed(msg)
        if m.isdev():
            msg = f"Refusing device or FIFO member in {archive_path.name}: {name}"
            raise ExtractionFailed(msg)


def extract(archive_path: Path, scratch_dir: Path) -> Path:
    """Recreate scratch_dir, extract archive_path into it, return the single top-level directory.

    Compression (gzip, bzip2, xz or none) is detected from the file contents.
    Raises FileNotFound, ExtractionFailed, ExtractionEmpty or AmbiguousArchiveLayout.
    """
    if not archive_path.is_file():
        raise FileNotFound(archive_path, what="Input file")

    if scratch_dir.exists():
        shutil.rmtree(scratch_dir)
    scratch_dir.mkdir(parents=True)

    print(f"📦 Extracting {archive_path} to {scratch_dir}...")
    try:
        with tarfile.open(archive_path, "r:*") as tf:
            _check_members(tf, archive_path)
            tf.extractall(scratch_dir, filter="data")
    except (OSError, tarfile.TarError) as e:
        msg = f"Could not extract {archive_path}: {e}"
        raise ExtractionFailed(msg) from e

    dirs = _top_level_dirs(scratch_dir)
    if not dirs:
        msg = f"No directory found after extraction in {scratch_dir}"
        raise ExtractionEmpty(
            msg, hint="The archive must contain a single top-level source directory."
        )
    if len(dirs) > 1:
        names = ", ".join(d.name for d in dirs)
        msg = f"Archive has {len(dirs)} top-level directories ({names}); expected exactly one"
        raise AmbiguousArchiveLayout(msg)

    source_dir = dirs[0]
    print(f"✅ Source extracted to: {source_dir}")
    return source_dir


def find_source_dir(scratch_dir: Path) -> Path | None:
    """Existing extracted tree in scratch_dir if there is exactly one, else None. Never raises."""
    if not scratch_dir.is_dir():
        return None
    dirs = _top_level_dirs(scratch_dir)
    if len(dirs) != 1:
        log.debug("No single source tree in %s (%d dirs)", scratch_dir, len(dirs))
        return None
    return dirs[0]
