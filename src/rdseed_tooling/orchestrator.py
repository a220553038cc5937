"""Orchestrator: validate the invocation, extract once, run build steps for the mode in order.

Modes map to explicit step lists; the first failing step aborts the rest and
outputs already produced are left in place.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from rdseed_tooling.build.native import build_native
from rdseed_tooling.clean import clean
from rdseed_tooling.config import default_project_root, resolve_config, resolve_path
from rdseed_tooling.docker.backend import ContainerBackend, DockerBuildxBackend
from rdseed_tooling.docker.build_multiarch import build_containerized
from rdseed_tooling.docker.generate_dockerfile import resolve_dockerfile
from rdseed_tooling.errors import BuildToolingError, FileNotFound, InvalidArguments
from rdseed_tooling.source.extract import extract

log = logging.getLogger(__name__)

MODES: tuple[str, ...] = ("native", "containerized", "clean", "all")
DEFAULT_MODE = "containerized"

STEP_EXTRACT = "extract"
STEP_CONTAINERIZED = "containerized"
STEP_NATIVE = "native"
STEP_CLEAN = "clean"

MODE_STEPS: dict[str, tuple[str, ...]] = {
    "native": (STEP_EXTRACT, STEP_NATIVE),
    "containerized": (STEP_EXTRACT, STEP_CONTAINERIZED),
    "clean": (STEP_CLEAN,),
    "all": (STEP_EXTRACT, STEP_CONTAINERIZED, STEP_NATIVE),
}


@dataclass(frozen=True, slots=True)
class InvocationRequest:
    input_archive_path: Path | None = None
    output_root_dir: Path | None = None
    build_mode: str = DEFAULT_MODE
    project_root: Path = field(default_factory=default_project_root)


def plan_steps(mode: str) -> tuple[str, ...]:
    """Steps for a build mode, in execution order. Raises InvalidArguments for unknown modes."""
    if mode not in MODE_STEPS:
        msg = f"Unknown build type: {mode}"
        raise InvalidArguments(msg, hint=f"Valid types: {', '.join(MODES)}")
    return MODE_STEPS[mode]


def _banner(title: str) -> None:
    print("=" * 45)
    print(title)
    print("=" * 45)


def _validate(request: InvocationRequest, steps: tuple[str, ...]) -> Path | None:
    """Absolute archive path for modes that extract, None for clean."""
    if STEP_EXTRACT not in steps:
        return None
    if request.input_archive_path is None or not str(request.input_archive_path):
        msg = "Input file is required"
        raise InvalidArguments(
            msg, hint="Use -i or --input-file to specify the tar.gz source archive"
        )
    archive = resolve_path(request.input_archive_path, request.project_root)
    if not archive.is_file():
        raise FileNotFound(archive, what="Input file")
    return archive


def execute(
    request: InvocationRequest,
    *,
    backend: ContainerBackend | None = None,
    config: dict[str, Any] | None = None,
) -> dict[str, Path]:
    """Run the steps for request.build_mode. Returns {target: artifact path}. Raises BuildToolingError."""
    cfg = config if config is not None else resolve_config(None)
    steps = plan_steps(request.build_mode)
    archive = _validate(request, steps)

    root = request.project_root
    output_root = resolve_path(request.output_root_dir or cfg["output_dir"], root)
    scratch_dir = resolve_path(cfg["scratch_dir"], root)
    binary_name = cfg["binary_name"]
    log.debug("Steps for %s: %s (output=%s)", request.build_mode, steps, output_root)

    source_dir: Path | None = None
    artifacts: dict[str, Path] = {}
    for step in steps:
        if step == STEP_EXTRACT:
            source_dir = extract(archive, scratch_dir)
        elif step == STEP_CONTAINERIZED:
            _banner(f"Building {binary_name} with Docker (multi-arch)")
            dockerfile = resolve_dockerfile(
                root,
                cfg["dockerfile"],
                scratch_dir,
                binary_name=binary_name,
                workdir=cfg["workdir"],
            )
            built = build_containerized(
                source_dir,
                output_root,
                cfg["platforms"],
                backend=backend if backend is not None else DockerBuildxBackend(),
                dockerfile=dockerfile,
                binary_name=binary_name,
                builder_name=cfg["builder_name"],
                stage=cfg["builder_stage"],
                workdir=cfg["workdir"],
            )
            artifacts.update(built)
        elif step == STEP_NATIVE:
            _banner(f"Building {binary_name} natively for host system")
            artifacts["native"] = build_native(source_dir, output_root, binary_name=binary_name)
        elif step == STEP_CLEAN:
            clean(
                output_root,
                scratch_dir=scratch_dir,
                project_root=root,
                binary_name=binary_name,
            )
    return artifacts


def run(
    request: InvocationRequest,
    *,
    backend: ContainerBackend | None = None,
    config: dict[str, Any] | None = None,
) -> int:
    """Run the invocation. Returns 0 on success, 1 on any error (printed to stderr)."""
    try:
        execute(request, backend=backend, config=config)
    except BuildToolingError as e:
        print(f"❌ Error: {e}", file=sys.stderr)
        return 1
    return 0
