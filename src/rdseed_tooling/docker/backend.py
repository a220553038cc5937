"""Container backend used by the containerized build: availability probe, persistent buildx builder, stage export."""

from __future__ import annotations

import logging
import shutil
import subprocess
from pathlib import Path
from typing import Protocol

from rdseed_tooling.errors import BackendUnavailable, BuildFailed

log = logging.getLogger(__name__)


class ContainerBackend(Protocol):
    def check_available(self) -> None:
        """Raise BackendUnavailable unless the backend can run multi-platform builds."""

    def ensure_builder(self, name: str) -> str:
        """Create the named multi-platform builder if absent, select it, return its name."""

    def build_stage(
        self,
        *,
        platform: str,
        stage: str,
        context: Path,
        dockerfile: Path,
        dest: Path,
    ) -> None:
        """Build up to `stage` for `platform` and export its filesystem to `dest`. Raise BuildFailed."""


class DockerBuildxBackend:
    """ContainerBackend over the docker CLI and its buildx plugin."""

    def __init__(self, docker: str = "docker") -> None:
        self.docker = docker

    def _quiet(self, *args: str) -> subprocess.CompletedProcess:
        try:
            return subprocess.run([self.docker, *args], capture_output=True, text=True)
        except OSError as e:
            msg = f"Could not run {self.docker}: {e}"
            raise BackendUnavailable(msg) from e

    def check_available(self) -> None:
        if not shutil.which(self.docker):
            msg = "Docker is not installed"
            raise BackendUnavailable(msg)
        if self._quiet("info").returncode != 0:
            msg = "Docker daemon is not running"
            raise BackendUnavailable(msg)
        if self._quiet("buildx", "version").returncode != 0:
            msg = "Docker buildx is not available"
            raise BackendUnavailable(
                msg, hint="Please update Docker Desktop or install the buildx plugin."
            )

    def ensure_builder(self, name: str) -> str:
        print("🔧 Setting up Docker buildx for multi-architecture builds...")
        if self._quiet("buildx", "inspect", name).returncode != 0:
            print(f"   Creating buildx builder: {name}")
            try:
                r = subprocess.run(
                    [self.docker, "buildx", "create", "--name", name, "--use", "--bootstrap"]
                )
            except OSError as e:
                msg = f"Could not create buildx builder {name}: {e}"
                raise BackendUnavailable(msg) from e
            if r.returncode != 0:
                msg = f"Could not create buildx builder {name}"
                raise BackendUnavailable(msg)
        else:
            r = self._quiet("buildx", "use", name)
            if r.returncode != 0:
                msg = f"Could not select buildx builder {name}: {(r.stderr or '').strip()}"
                raise BackendUnavailable(msg)
        log.debug("Using buildx builder %s", name)
        return name

    def build_stage(
        self,
        *,
        platform: str,
        stage: str,
        context: Path,
        dockerfile: Path,
        dest: Path,
    ) -> None:
        cmd = [
            self.docker,
            "buildx",
            "build",
            "--platform",
            platform,
            "--target",
            stage,
            "--output",
            f"type=local,dest={dest}",
            "--file",
            str(dockerfile),
            str(context),
        ]
        log.debug("Running %s", cmd)
        try:
            r = subprocess.run(cmd)
        except OSError as e:
            msg = f"Docker build failed for {platform}: {e}"
            raise BuildFailed(msg, platform=platform) from e
        if r.returncode != 0:
            msg = f"Docker build failed for {platform} (exit {r.returncode})"
            raise BuildFailed(msg, platform=platform)
