"""Native build on the host toolchain: make clean (best-effort), make with CC/CFLAGS/LDFLAGS, copy binary.

The legacy rdseed sources need gnu89 with implicit declarations and missing
returns tolerated. On Linux the AH output format needs rpc/rpc.h, which modern
glibc no longer ships; libtirpc provides it when installed.
"""

from __future__ import annotations

import logging
import platform as _platform
import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path

from rdseed_tooling.build.platform import resolve_target
from rdseed_tooling.errors import BuildFailed, FileNotFound
from rdseed_tooling.helpers import describe_binary, log_ignored, run_best_effort

log = logging.getLogger(__name__)

BASE_CFLAGS = "-O2 -g -std=gnu89 -Wno-return-type -Wno-implicit-function-declaration"
TIRPC_INCLUDE_DIR = Path("/usr/include/tirpc")


@dataclass(frozen=True, slots=True)
class Toolchain:
    cc: str
    cflags: str
    ldflags: str

    def make_overrides(self) -> list[str]:
        return [f"CC={self.cc}", f"CFLAGS={self.cflags}", f"LDFLAGS={self.ldflags}"]


def select_toolchain(os_raw: str, tirpc_include: Path = TIRPC_INCLUDE_DIR) -> Toolchain:
    """Compiler and flags for the host OS family (uname -s value)."""
    if os_raw == "Darwin":
        return Toolchain(cc="clang", cflags=BASE_CFLAGS, ldflags="-lm -lc")
    if os_raw == "Linux":
        if tirpc_include.is_dir():
            return Toolchain(
                cc="gcc",
                cflags=f"{BASE_CFLAGS} -fcommon -I{tirpc_include}",
                ldflags="-lm -ltirpc",
            )
        return Toolchain(cc="gcc", cflags=BASE_CFLAGS, ldflags="-lm")
    return Toolchain(cc="cc", cflags=BASE_CFLAGS, ldflags="-lm")


def _ensure_makefile(source_dir: Path) -> None:
    makefile = source_dir / "Makefile"
    if not makefile.is_file():
        raise FileNotFound(
            makefile, what="Makefile", hint="Is the archive an rdseed source tarball?"
        )


def build_native(
    source_dir: Path,
    output_root_dir: Path,
    *,
    binary_name: str = "rdseed",
    os_raw: str | None = None,
    arch_raw: str | None = None,
) -> Path:
    """Build source_dir with make on the host and copy the binary to output_root_dir/{os}-{arch}/.

    os_raw/arch_raw default to the host's uname values. Returns the artifact path.
    Raises FileNotFound (no Makefile) or BuildFailed.
    """
    os_raw = os_raw if os_raw is not None else _platform.system()
    arch_raw = arch_raw if arch_raw is not None else _platform.machine()
    target = resolve_target(os_raw, arch_raw)
    _ensure_makefile(source_dir)

    toolchain = select_toolchain(os_raw)
    print(f"🔎 Detected {os_raw} ({arch_raw}) -> {target.name}")

    print("🧹 Cleaning previous build...")
    log_ignored("make clean", run_best_effort(["make", "-C", str(source_dir), "clean"]))

    print(
        f"🔨 Compiling with: CC={toolchain.cc} CFLAGS=\"{toolchain.cflags}\" "
        f"LDFLAGS=\"{toolchain.ldflags}\""
    )
    print(f"   Source directory: {source_dir}")
    cmd = ["make", "-C", str(source_dir), *toolchain.make_overrides()]
    log.debug("Running %s", cmd)
    try:
        r = subprocess.run(cmd)
    except OSError as e:
        msg = f"Native build failed for {target.name}: {e}"
        raise BuildFailed(msg, platform=target.name) from e
    if r.returncode != 0:
        msg = f"Native build failed for {target.name} (make exited {r.returncode})"
        raise BuildFailed(msg, platform=target.name)

    built = source_dir / binary_name
    if not built.is_file():
        msg = f"Build failed for {target.name} - {binary_name} binary not created"
        raise BuildFailed(msg, platform=target.name)

    output_path = output_root_dir / target.name
    dest = output_path / binary_name
    try:
        output_path.mkdir(parents=True, exist_ok=True)
        shutil.copy2(built, dest)
    except OSError as e:
        msg = f"Could not copy {binary_name} to {dest}: {e}"
        raise BuildFailed(msg, platform=target.name) from e
    print(f"✅ Native build complete: {dest}")
    description = describe_binary(dest)
    if description:
        print(f"   {description}")
    return dest
