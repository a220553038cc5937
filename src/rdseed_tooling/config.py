"""Build layout configuration (binary name, output/scratch paths, buildx settings).

Optional YAML config file (rdseed-build.yaml at the project root by default):
- binary_name: name of the binary the Makefile produces (default: rdseed)
- output_dir: output root, relative to project_root (default: output)
- scratch_dir: extraction area, relative to project_root (default: tmp)
- dockerfile: builder Dockerfile, relative to project_root (default: Dockerfile)
- builder_name: persistent buildx builder (default: rdseed-multiarch)
- builder_stage: Dockerfile stage exported for the binary (default: builder)
- workdir: WORKDIR of the builder stage, without leading slash (default: src)
- platforms: list of buildx platforms (default: linux/arm64, linux/amd64)
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml

from rdseed_tooling.errors import InvalidArguments

log = logging.getLogger(__name__)

CONFIG_FILE_NAME = "rdseed-build.yaml"
PROJECT_ROOT_ENV = "RDSEED_BUILD_ROOT"
USER_ROOT_DIRNAME = ".rdseed-build"

DEFAULT_PLATFORMS: tuple[str, ...] = ("linux/arm64", "linux/amd64")

DEFAULT_CONFIG: dict[str, Any] = {
    "binary_name": "rdseed",
    "output_dir": "output",
    "scratch_dir": "tmp",
    "dockerfile": "Dockerfile",
    "builder_name": "rdseed-multiarch",
    "builder_stage": "builder",
    "workdir": "src",
    "platforms": list(DEFAULT_PLATFORMS),
}


def default_project_root() -> Path:
    """Directory the tool lives in: $RDSEED_BUILD_ROOT, else the checkout root above src/rdseed_tooling.

    Installed outside a checkout (no pyproject.toml above the package), falls back to
    ~/.rdseed-build so relative paths never depend on the caller's working directory.
    """
    env = os.environ.get(PROJECT_ROOT_ENV)
    if env:
        return Path(env).expanduser().resolve()
    checkout = Path(__file__).resolve().parents[2]
    if (checkout / "pyproject.toml").is_file():
        return checkout
    return (Path.home() / USER_ROOT_DIRNAME).resolve()


def resolve_config(overrides: dict[str, Any] | None) -> dict[str, Any]:
    """Return config dict with defaults filled. Unknown keys are dropped."""
    out = dict(DEFAULT_CONFIG)
    out["platforms"] = list(DEFAULT_PLATFORMS)
    if overrides is None:
        return out
    for k, v in overrides.items():
        if k not in out:
            log.debug("Ignoring unknown config key %r", k)
            continue
        if k == "platforms":
            if isinstance(v, str):
                v = [v]
            out[k] = [str(p) for p in v]
        else:
            out[k] = str(v).strip("/") if k == "workdir" else str(v)
    return out


def load_config(config_path: Path | None, project_root: Path) -> dict[str, Any]:
    """Load config from YAML. With config_path None, use project_root/rdseed-build.yaml if present."""
    if config_path is None:
        candidate = project_root / CONFIG_FILE_NAME
        if not candidate.is_file():
            return resolve_config(None)
        config_path = candidate
    elif not config_path.is_absolute():
        config_path = project_root / config_path

    if not config_path.is_file():
        msg = f"Config file not found: {config_path}"
        raise InvalidArguments(msg)
    try:
        with config_path.open() as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        msg = f"Could not read config {config_path}: {e}"
        raise InvalidArguments(msg) from e
    if not isinstance(data, dict):
        msg = f"Config {config_path} must be a mapping, got {type(data).__name__}"
        raise InvalidArguments(msg)
    log.debug("Loaded config from %s", config_path)
    return resolve_config(data)


def resolve_path(p: Path | str, project_root: Path) -> Path:
    """Absolute path; relative paths are taken relative to project_root, not cwd."""
    path = Path(p).expanduser()
    if not path.is_absolute():
        path = project_root / path
    return path.resolve()
