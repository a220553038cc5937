"""Build the binary for several Linux platforms with docker buildx and export it per platform."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from rdseed_tooling.build.platform import target_for_platform
from rdseed_tooling.config import DEFAULT_PLATFORMS
from rdseed_tooling.docker.backend import ContainerBackend
from rdseed_tooling.docker.normalize import normalize
from rdseed_tooling.helpers import describe_binary, remove_path

log = logging.getLogger(__name__)


def build_platform(
    backend: ContainerBackend,
    platform: str,
    source_dir: Path,
    output_root_dir: Path,
    dockerfile: Path,
    *,
    binary_name: str = "rdseed",
    stage: str = "builder",
    workdir: str = "src",
) -> Path:
    """Export the builder stage for one platform into output_root_dir/{os}-{arch} and normalize it."""
    target = target_for_platform(platform)
    print(f"🔨 Building for {platform}...")
    output_path = output_root_dir / target.name
    # buildx local export does not empty dest; a stale binary must not survive a bad export.
    remove_path(output_path)
    output_path.mkdir(parents=True)

    backend.build_stage(
        platform=platform,
        stage=stage,
        context=source_dir,
        dockerfile=dockerfile,
        dest=output_path,
    )
    binary = normalize(output_path, binary_name=binary_name, workdir=workdir)
    print(f"✅ Binary created: {binary}")
    description = describe_binary(binary)
    if description:
        print(f"   {description}")
    return binary


def build_containerized(
    source_dir: Path,
    output_root_dir: Path,
    platforms: Sequence[str] = DEFAULT_PLATFORMS,
    *,
    backend: ContainerBackend,
    dockerfile: Path,
    binary_name: str = "rdseed",
    builder_name: str = "rdseed-multiarch",
    stage: str = "builder",
    workdir: str = "src",
) -> dict[str, Path]:
    """Build every platform in order, stopping at the first failure. Returns {platform: binary path}.

    Raises BackendUnavailable before any build, or BuildFailed naming the failing platform;
    binaries of platforms built before the failure stay in place.
    """
    backend.check_available()
    backend.ensure_builder(builder_name)

    artifacts: dict[str, Path] = {}
    for platform in platforms:
        artifacts[platform] = build_platform(
            backend,
            platform,
            source_dir,
            output_root_dir,
            dockerfile,
            binary_name=binary_name,
            stage=stage,
            workdir=workdir,
        )

    print("🎉 Docker build complete! Binaries available in:")
    for path in artifacts.values():
        print(f"  - {path}")
    return artifacts
