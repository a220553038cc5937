"""Reduce a buildx local export (full root filesystem of the builder stage) to just the binary."""

from __future__ import annotations

import logging
from pathlib import Path

from rdseed_tooling.errors import BuildFailed
from rdseed_tooling.helpers import remove_path

log = logging.getLogger(__name__)

# Top-level entries of a debian root filesystem as exported by `--output type=local`.
ROOTFS_DIRS: tuple[str, ...] = (
    "bin",
    "boot",
    "dev",
    "etc",
    "home",
    "lib",
    "lib64",
    "media",
    "mnt",
    "opt",
    "proc",
    "root",
    "run",
    "sbin",
    "srv",
    "sys",
    "tmp",
    "usr",
    "var",
)


def normalize(output_subdir: Path, binary_name: str = "rdseed", workdir: str = "src") -> Path:
    """Move <workdir>/<binary_name> to the top of output_subdir and delete the exported rootfs.

    Idempotent. Returns the binary path; raises BuildFailed when it is absent.
    """
    nested = output_subdir / workdir / binary_name
    binary = output_subdir / binary_name
    if nested.is_file():
        if binary.exists():
            remove_path(binary)
        nested.rename(binary)

    for name in (*ROOTFS_DIRS, workdir):
        p = output_subdir / name
        if p.exists() or p.is_symlink():
            remove_path(p)
            log.debug("Removed exported %s", p)

    if not binary.is_file():
        msg = f"Binary not found for {output_subdir.name}"
        raise BuildFailed(msg, platform=output_subdir.name)
    return binary
