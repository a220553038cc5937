"""Teardown: make clean in a stale source tree, remove output root, scratch dir and legacy binary.

The buildx builder is left alone; remove it with `docker buildx rm rdseed-multiarch`.
"""

from __future__ import annotations

import logging
from pathlib import Path

from rdseed_tooling.errors import BuildToolingError
from rdseed_tooling.helpers import BestEffortResult, log_ignored, remove_path, run_best_effort
from rdseed_tooling.source.extract import find_source_dir

log = logging.getLogger(__name__)


def clean(
    output_root_dir: Path,
    *,
    scratch_dir: Path,
    project_root: Path,
    source_dir: Path | None = None,
    binary_name: str = "rdseed",
) -> list[Path]:
    """Remove build artifacts. Idempotent. Returns the paths that were removed.

    Raises BuildToolingError if the output root or scratch dir cannot be removed;
    the legacy binary is best-effort.
    """
    print("🧹 Cleaning build artifacts...")
    if source_dir is None:
        source_dir = find_source_dir(scratch_dir)
    if source_dir is not None and (source_dir / "Makefile").is_file():
        log_ignored("make clean", run_best_effort(["make", "-C", str(source_dir), "clean"]))

    removed: list[Path] = []
    for p in (output_root_dir, scratch_dir):
        if not p.is_dir():
            continue
        try:
            remove_path(p)
        except OSError as e:
            msg = f"Could not remove {p}: {e}"
            raise BuildToolingError(msg, hint="Check permissions and remove it by hand.") from e
        print(f"   Removed: {p}")
        removed.append(p)

    legacy = project_root / binary_name
    if legacy.is_file():
        try:
            remove_path(legacy)
        except OSError as e:
            log_ignored(f"rm {legacy}", BestEffortResult(ok=False, returncode=None, detail=str(e)))
        else:
            print(f"   Removed: {legacy}")
            removed.append(legacy)

    print("✅ Clean complete!")
    return removed
