"""rdseed build tooling: extract the rdseed source tarball, build it with Docker buildx and natively."""

from .errors import BuildToolingError
from .orchestrator import InvocationRequest, run

__all__ = ["BuildToolingError", "InvocationRequest", "run"]

__version__ = "0.1.0"
