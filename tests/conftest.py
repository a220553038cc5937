"""Pytest fixtures for rdseed tooling tests."""

import io
import tarfile
from pathlib import Path

import pytest

from rdseed_tooling.docker.normalize import ROOTFS_DIRS
from rdseed_tooling.errors import BuildFailed


def _add_file(tf: tarfile.TarFile, name: str, data: bytes, mode: int = 0o644) -> None:
    info = tarfile.TarInfo(name)
    info.size = len(data)
    info.mode = mode
    tf.addfile(info, io.BytesIO(data))


def _add_dir(tf: tarfile.TarFile, name: str) -> None:
    info = tarfile.TarInfo(name)
    info.type = tarfile.DIRTYPE
    info.mode = 0o755
    tf.addfile(info)


@pytest.fixture
def make_tarball(tmp_path: Path):
    """Factory: make_tarball(dirs, files=None, name=...) -> Path of a .tar.gz.

    dirs: top-level directory names; each gets a Makefile.
    files: extra {member_name: content} entries (e.g. loose top-level files).
    """

    def _make(
        dirs: list[str],
        files: dict[str, str] | None = None,
        name: str = "rdseedv5.3.1.tar.gz",
    ) -> Path:
        archive = tmp_path / name
        with tarfile.open(archive, "w:gz") as tf:
            for d in dirs:
                _add_dir(tf, d)
                _add_file(tf, f"{d}/Makefile", b"all:\n\tcc -o rdseed main.c\nclean:\n\trm -f rdseed\n")
            for member, content in (files or {}).items():
                _add_file(tf, member, content.encode())
        return archive

    return _make


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    root = tmp_path / "project"
    root.mkdir()
    return root


class FakeBackend:
    """ContainerBackend double: simulates buildx local exports; fails for platforms in `fail`."""

    def __init__(
        self,
        fail: set[str] | None = None,
        available: bool = True,
        binary_name: str = "rdseed",
    ) -> None:
        self.fail = fail or set()
        self.available = available
        self.binary_name = binary_name
        self.builders: list[str] = []
        self.builds: list[dict] = []

    def check_available(self) -> None:
        from rdseed_tooling.errors import BackendUnavailable

        if not self.available:
            msg = "Docker is not installed"
            raise BackendUnavailable(msg)

    def ensure_builder(self, name: str) -> str:
        self.builders.append(name)
        return name

    def build_stage(self, *, platform, stage, context, dockerfile, dest) -> None:
        self.builds.append(
            {
                "platform": platform,
                "stage": stage,
                "context": context,
                "dockerfile": dockerfile,
                "dest": dest,
            }
        )
        if platform in self.fail:
            msg = f"Docker build failed for {platform} (exit 1)"
            raise BuildFailed(msg, platform=platform)
        simulate_export(dest, self.binary_name, content=platform)


def simulate_export(dest: Path, binary_name: str = "rdseed", content: str = "ELF") -> None:
    """Lay out what `buildx build --output type=local` writes for the builder stage."""
    dest.mkdir(parents=True, exist_ok=True)
    for d in ROOTFS_DIRS:
        (dest / d).mkdir(exist_ok=True)
    (dest / "etc" / "os-release").write_text("ID=debian\n")
    (dest / "usr" / "bin").mkdir(exist_ok=True)
    (dest / "src").mkdir(exist_ok=True)
    (dest / "src" / "main.o").write_text("obj")
    (dest / "src" / binary_name).write_text(content)


@pytest.fixture
def fake_backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def backend_factory():
    """FakeBackend class, for tests that need failing or unavailable backends."""
    return FakeBackend


@pytest.fixture
def export_tree():
    """simulate_export(dest, binary_name="rdseed", content="ELF")."""
    return simulate_export
