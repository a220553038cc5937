"""`rdseed-build` — build rdseed from a source tarball (Docker multi-arch and/or native)."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from rdseed_tooling.config import default_project_root, load_config
from rdseed_tooling.errors import BuildToolingError
from rdseed_tooling.orchestrator import DEFAULT_MODE, MODES, InvocationRequest, run

EPILOG = """\
Build types:
  containerized  Build for Linux (arm64 + x86_64) via Docker buildx (default)
  native         Build natively for the host system (macOS or Linux)
  clean          Clean all build artifacts (no input file needed)
  all            Build containerized, then native

Output:
  <output>/linux-arm64/rdseed    - Linux ARM64 binary (Docker)
  <output>/linux-amd64/rdseed    - Linux x86_64 binary (Docker)
  <output>/<os>-<arch>/rdseed    - Native binary (e.g., macos-arm64, linux-amd64)

Examples:
  %(prog)s -i soft/rdseedv5.3.1.tar.gz                    # Build Linux binaries (Docker)
  %(prog)s -i soft/rdseedv5.3.1.tar.gz -t native          # Build native binary
  %(prog)s -i soft/rdseedv5.3.1.tar.gz -t all             # Build all targets
  %(prog)s -i soft/rdseedv5.3.1.tar.gz -o ./dist -t all   # Custom output directory
  %(prog)s -t clean                                       # Remove output/ and tmp/
"""


class _Parser(argparse.ArgumentParser):
    """Usage errors exit 1 (argparse default is 2)."""

    def error(self, message: str) -> None:
        print(f"❌ Error: {message}", file=sys.stderr)
        self.print_help(sys.stderr)
        sys.exit(1)


def build_parser() -> argparse.ArgumentParser:
    ap = _Parser(
        prog="rdseed-build",
        description="Build rdseed from a source tarball for Linux (Docker) and the host system.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=EPILOG,
    )
    ap.add_argument(
        "-i",
        "--input-file",
        type=Path,
        default=None,
        help="Input tar.gz file containing rdseed source (required except for clean)",
    )
    ap.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Output directory for built binaries (default: ./output)",
    )
    ap.add_argument(
        "-t",
        "--type",
        dest="build_type",
        choices=MODES,
        default=DEFAULT_MODE,
        metavar="TYPE",
        help=f"Build type: {', '.join(MODES)} (default: {DEFAULT_MODE})",
    )
    ap.add_argument(
        "-c",
        "--config",
        type=Path,
        default=None,
        help="YAML config file (default: rdseed-build.yaml in the project root, if present)",
    )
    ap.add_argument(
        "--project-root",
        type=Path,
        default=None,
        help="Base for relative paths (default: the tool's own directory)",
    )
    ap.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return ap


def main(argv: list[str] | None = None) -> None:
    """Parse argv (default sys.argv[1:]) and run the build. Exits with the orchestrator's code."""
    ap = build_parser()
    args = ap.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    project_root = (
        args.project_root.resolve() if args.project_root is not None else default_project_root()
    )
    try:
        config = load_config(args.config, project_root)
    except BuildToolingError as e:
        print(f"❌ Error: {e}", file=sys.stderr)
        sys.exit(1)

    request = InvocationRequest(
        input_archive_path=args.input_file,
        output_root_dir=args.output,
        build_mode=args.build_type,
        project_root=project_root,
    )
    rc = run(request, config=config)
    if rc != 0 and args.build_type != "clean" and args.input_file is None:
        print("", file=sys.stderr)
        ap.print_usage(sys.stderr)
    sys.exit(rc)


if __name__ == "__main__":
    main()
