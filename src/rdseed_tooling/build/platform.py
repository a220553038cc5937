"""Host OS/arch -> canonical {os}-{arch} names used for output directories."""

from __future__ import annotations

import platform as _platform
from dataclasses import dataclass

OS_NAMES = {
    "Darwin": "macos",
    "Linux": "linux",
}

ARCH_NAMES = {
    "x86_64": "amd64",
    "aarch64": "arm64",
    "arm64": "arm64",
}


@dataclass(frozen=True, slots=True)
class TargetDescriptor:
    os_name: str
    arch_name: str

    @property
    def name(self) -> str:
        """Output subdirectory name, e.g. linux-arm64."""
        return f"{self.os_name}-{self.arch_name}"

    def __str__(self) -> str:
        return self.name


def canonical_os(raw: str) -> str:
    """Darwin -> macos, Linux -> linux, anything else lower-cased."""
    return OS_NAMES.get(raw, raw.lower())


def canonical_arch(raw: str) -> str:
    """x86_64 -> amd64, aarch64/arm64 -> arm64, anything else unchanged."""
    return ARCH_NAMES.get(raw, raw)


def resolve_target(os_raw: str, arch_raw: str) -> TargetDescriptor:
    return TargetDescriptor(canonical_os(os_raw), canonical_arch(arch_raw))


def resolve_host_target() -> TargetDescriptor:
    """Target for this machine, from uname -s / uname -m."""
    return resolve_target(_platform.system(), _platform.machine())


def target_for_platform(docker_platform: str) -> TargetDescriptor:
    """linux/arm64 -> linux-arm64. Variants (linux/arm/v7) are joined: linux-arm-v7."""
    os_part, _, arch_part = docker_platform.partition("/")
    arch = canonical_arch(arch_part) if "/" not in arch_part else arch_part.replace("/", "-")
    return TargetDescriptor(os_part.lower(), arch)
