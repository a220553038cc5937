"""Shared helpers for rdseed_tooling (best-effort commands, binary probe, path removal).

Used by build, docker, clean and the orchestrator.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path

log = logging.getLogger(__name__)


# --- Best-effort commands ---


@dataclass(frozen=True, slots=True)
class BestEffortResult:
    """Outcome of a command whose failure is tolerated (e.g. make clean on a fresh tree)."""

    ok: bool
    returncode: int | None
    detail: str = ""


def run_best_effort(cmd: list[str], cwd: Path | None = None) -> BestEffortResult:
    """Run cmd, capturing output. Never raises; failures are reported in the result."""
    try:
        r = subprocess.run(
            cmd,
            cwd=str(cwd) if cwd is not None else None,
            capture_output=True,
            text=True,
        )
    except OSError as e:
        return BestEffortResult(ok=False, returncode=None, detail=str(e))
    detail = (r.stderr or r.stdout or "").strip()
    return BestEffortResult(ok=r.returncode == 0, returncode=r.returncode, detail=detail)


def log_ignored(what: str, result: BestEffortResult) -> None:
    """Log a tolerated failure at DEBUG. Successful results are not logged."""
    if result.ok:
        return
    log.debug("Ignoring failure of %s (rc=%s): %s", what, result.returncode, result.detail[:200])


# --- Binary ---


def describe_binary(path: Path) -> str | None:
    """Output of `file <path>` (format and architecture), or None if file(1) is unavailable."""
    if not shutil.which("file"):
        return None
    result = run_best_effort(["file", str(path)])
    if not result.ok:
        log_ignored(f"file {path}", result)
        return None
    return result.detail


# --- Path ---


def remove_path(p: Path) -> bool:
    """Remove a file, symlink or directory tree. Returns True if something was removed."""
    if p.is_symlink() or p.is_file():
        p.unlink()
        return True
    if p.is_dir():
        shutil.rmtree(p)
        return True
    return False
