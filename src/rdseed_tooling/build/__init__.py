"""Host platform resolution and native (make) builds."""

from .native import Toolchain, build_native, select_toolchain
from .platform import (
    TargetDescriptor,
    canonical_arch,
    canonical_os,
    resolve_host_target,
    resolve_target,
    target_for_platform,
)

__all__ = [
    "TargetDescriptor",
    "Toolchain",
    "build_native",
    "canonical_arch",
    "canonical_os",
    "resolve_host_target",
    "resolve_target",
    "select_toolchain",
    "target_for_platform",
]
