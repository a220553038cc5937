"""Docker buildx helpers: backend, multi-arch build, export normalization, builder Dockerfile."""

from .backend import ContainerBackend, DockerBuildxBackend
from .build_multiarch import build_containerized
from .generate_dockerfile import generate_dockerfile, render_dockerfile, resolve_dockerfile
from .normalize import ROOTFS_DIRS, normalize

__all__ = [
    "ROOTFS_DIRS",
    "ContainerBackend",
    "DockerBuildxBackend",
    "build_containerized",
    "generate_dockerfile",
    "normalize",
    "render_dockerfile",
    "resolve_dockerfile",
]
