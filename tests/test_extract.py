"""Tests for rdseed_tooling.source.extract."""

import tarfile
from pathlib import Path

import pytest


class TestExtract:
    def test_returns_single_top_level_dir_under_scratch(self, tmp_path: Path, make_tarball) -> None:
        from rdseed_tooling.source import extract

        archive = make_tarball(["rdseedv5.3.1"])
        scratch = tmp_path / "tmp"
        src = extract(archive, scratch)
        assert src.is_dir()
        assert src == scratch / "rdseedv5.3.1"
        assert scratch in src.parents
        assert (src / "Makefile").is_file()

    def test_loose_top_level_files_are_ignored(self, tmp_path: Path, make_tarball) -> None:
        from rdseed_tooling.source import extract

        archive = make_tarball(["rdseed"], files={"README": "hello"})
        assert extract(archive, tmp_path / "tmp").name == "rdseed"

    def test_recreates_scratch_dir(self, tmp_path: Path, make_tarball) -> None:
        from rdseed_tooling.source import extract

        scratch = tmp_path / "tmp"
        (scratch / "stale").mkdir(parents=True)
        (scratch / "stale" / "old.o").write_text("x")
        archive = make_tarball(["rdseedv5.3.1"])
        src = extract(archive, scratch)
        assert not (scratch / "stale").exists()
        assert src.name == "rdseedv5.3.1"
        # Second run starts from an empty scratch dir again.
        (src / "rdseed").write_text("built")
        src2 = extract(archive, scratch)
        assert src2 == src
        assert not (src2 / "rdseed").exists()

    def test_missing_archive_raises_file_not_found(self, tmp_path: Path) -> None:
        from rdseed_tooling.errors import FileNotFound
        from rdseed_tooling.source import extract

        with pytest.raises(FileNotFound, match="Input file not found"):
            extract(tmp_path / "nope.tar.gz", tmp_path / "tmp")

    def test_directory_instead_of_archive_raises_file_not_found(self, tmp_path: Path) -> None:
        from rdseed_tooling.errors import FileNotFound
        from rdseed_tooling.source import extract

        with pytest.raises(FileNotFound):
            extract(tmp_path, tmp_path / "tmp")

    def test_no_top_level_dir_raises_extraction_empty(self, tmp_path: Path, make_tarball) -> None:
        from rdseed_tooling.errors import ExtractionEmpty
        from rdseed_tooling.source import extract

        archive = make_tarball([], files={"main.c": "int main(){}"})
        scratch = tmp_path / "tmp"
        with pytest.raises(ExtractionEmpty):
            extract(archive, scratch)
        # Left in place for inspection.
        assert (scratch / "main.c").is_file()

    def test_multiple_top_level_dirs_raise_ambiguous(self, tmp_path: Path, make_tarball) -> None:
        from rdseed_tooling.errors import AmbiguousArchiveLayout
        from rdseed_tooling.source import extract

        archive = make_tarball(["a_src", "b_src"])
        with pytest.raises(AmbiguousArchiveLayout, match="a_src, b_src"):
            extract(archive, tmp_path / "tmp")

    def test_corrupt_archive_raises_extraction_failed(self, tmp_path: Path) -> None:
        from rdseed_tooling.errors import ExtractionFailed
        from rdseed_tooling.source import extract

        bad = tmp_path / "bad.tar.gz"
        bad.write_bytes(b"not a tarball at all")
        with pytest.raises(ExtractionFailed):
            extract(bad, tmp_path / "tmp")

    def test_path_traversal_member_is_refused(self, tmp_path: Path) -> None:
        import io

        from rdseed_tooling.errors import ExtractionFailed
        from rdseed_tooling.source import extract

        archive = tmp_path / "evil.tar.gz"
        with tarfile.open(archive, "w:gz") as tf:
            info = tarfile.TarInfo("../escape.txt")
            info.size = 1
            tf.addfile(info, io.BytesIO(b"x"))
        with pytest.raises(ExtractionFailed, match="unsafe path"):
            extract(archive, tmp_path / "work" / "tmp")
        assert not (tmp_path / "work" / "escape.txt").exists()


class TestFindSourceDir:
    def test_none_when_scratch_missing(self, tmp_path: Path) -> None:
        from rdseed_tooling.source import find_source_dir

        assert find_source_dir(tmp_path / "tmp") is None

    def test_finds_single_tree(self, tmp_path: Path) -> None:
        from rdseed_tooling.source import find_source_dir

        (tmp_path / "tmp" / "rdseed").mkdir(parents=True)
        assert find_source_dir(tmp_path / "tmp") == tmp_path / "tmp" / "rdseed"

    def test_none_when_ambiguous(self, tmp_path: Path) -> None:
        from rdseed_tooling.source import find_source_dir

        (tmp_path / "tmp" / "a").mkdir(parents=True)
        (tmp_path / "tmp" / "b").mkdir()
        assert find_source_dir(tmp_path / "tmp") is None
