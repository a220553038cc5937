"""Builder Dockerfile for the containerized build (used when the project root has none)."""

from __future__ import annotations

from pathlib import Path

DOCKERFILE_TEMPLATE = """\
# Multi-architecture build of {{binary_name}} (linux/arm64, linux/amd64)

FROM debian:bookworm-slim AS builder

# libtirpc-dev provides rpc/rpc.h, needed for AH format output
RUN apt-get update && \\
    apt-get install -y --no-install-recommends \\
        build-essential \\
        make \\
        libtirpc-dev \\
    && rm -rf /var/lib/apt/lists/*

WORKDIR /{{workdir}}

COPY . .

RUN make clean 2>/dev/null || true

# gnu89 + -fcommon for legacy C (implicit declarations, tentative definitions)
RUN make CC="gcc" \\
    CFLAGS="-O2 -g -std=gnu89 -fcommon -Wno-return-type -Wno-implicit-function-declaration -I/usr/include/tirpc" \\
    LDFLAGS="-lm -ltirpc"

RUN ls -la {{binary_name}}

FROM debian:bookworm-slim AS runtime

COPY --from=builder /{{workdir}}/{{binary_name}} /usr/local/bin/{{binary_name}}

RUN chmod +x /usr/local/bin/{{binary_name}}

CMD ["{{binary_name}}"]
"""


def render_dockerfile(binary_name: str = "rdseed", workdir: str = "src") -> str:
    content = DOCKERFILE_TEMPLATE.replace("{{binary_name}}", binary_name)
    return content.replace("{{workdir}}", workdir.strip("/"))


def generate_dockerfile(
    dest_dir: Path,
    binary_name: str = "rdseed",
    workdir: str = "src",
    file_name: str = "Dockerfile",
) -> Path:
    """Write the builder Dockerfile into dest_dir. Returns the output path."""
    out = dest_dir / file_name
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(render_dockerfile(binary_name, workdir))
    print(f"✅ Generated: {out}")
    return out


def resolve_dockerfile(
    project_root: Path,
    dockerfile: str,
    fallback_dir: Path,
    binary_name: str = "rdseed",
    workdir: str = "src",
) -> Path:
    """project_root/dockerfile if it exists (absolute paths taken as-is), else a generated one in fallback_dir."""
    p = Path(dockerfile)
    candidate = p if p.is_absolute() else project_root / p
    if candidate.is_file():
        return candidate
    return generate_dockerfile(fallback_dir, binary_name=binary_name, workdir=workdir)
