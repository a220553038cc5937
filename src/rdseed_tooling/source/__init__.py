"""Source acquisition: tarball extraction into the scratch directory."""

from .extract import extract, find_source_dir

__all__ = ["extract", "find_source_dir"]
