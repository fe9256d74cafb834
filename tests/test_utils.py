"""
Pytest unit tests for utility functions in weightedseq.utils.
"""

import gzip
import io
import pathlib

import pytest

from weightedseq.utils import open_file_transparently

# --- Fixtures ---


@pytest.fixture
def sample_text_content_fixture() -> str:
    return "2 AC\n1 0\n0 1\n"


@pytest.fixture
def plain_text_file_fixture(
    tmp_path: pathlib.Path, sample_text_content_fixture: str
) -> pathlib.Path:
    file_path = tmp_path / "test_plain_utils.txt"
    with open(file_path, "w") as f:
        f.write(sample_text_content_fixture)
    return file_path


@pytest.fixture
def gzipped_text_file_fixture(
    tmp_path: pathlib.Path, sample_text_content_fixture: str
) -> pathlib.Path:
    file_path = tmp_path / "test_gzipped_utils.txt.gz"
    with gzip.open(file_path, "wt") as f:
        f.write(sample_text_content_fixture)
    return file_path


# --- Tests for open_file_transparently ---


def test_open_plain_text_file(
    plain_text_file_fixture: pathlib.Path, sample_text_content_fixture: str
):
    with open_file_transparently(plain_text_file_fixture, mode="rt") as f:
        assert f.read() == sample_text_content_fixture
        assert isinstance(f, io.TextIOWrapper)


def test_open_gzipped_text_file(
    gzipped_text_file_fixture: pathlib.Path, sample_text_content_fixture: str
):
    with open_file_transparently(gzipped_text_file_fixture) as f:
        assert f.read() == sample_text_content_fixture


def test_open_accepts_string_path(
    plain_text_file_fixture: pathlib.Path, sample_text_content_fixture: str
):
    with open_file_transparently(str(plain_text_file_fixture), mode="r") as f:
        assert f.read() == sample_text_content_fixture


def test_write_gzipped_file(tmp_path: pathlib.Path):
    file_path = tmp_path / "written.txt.gz"
    with open_file_transparently(file_path, mode="wt") as f:
        f.write("1 A\n1\n")
    with gzip.open(file_path, "rt") as f:
        assert f.read() == "1 A\n1\n"


def test_open_non_existent_file(tmp_path: pathlib.Path):
    with pytest.raises(FileNotFoundError, match="File not found"):
        open_file_transparently(tmp_path / "non_existent_file.txt")


def test_open_invalid_path_type():
    with pytest.raises(TypeError, match="file_path must be a string or pathlib.Path"):
        open_file_transparently(12345)  # type: ignore


def test_open_binary_mode_rejected(plain_text_file_fixture: pathlib.Path):
    with pytest.raises(ValueError, match="Only text modes"):
        open_file_transparently(plain_text_file_fixture, mode="rb")


def test_open_defaults_to_utf8(tmp_path: pathlib.Path):
    file_path = tmp_path / "utf8_utils.txt"
    file_path.write_bytes("1 αβ\n1 0\n".encode("utf-8"))
    with open_file_transparently(file_path) as f:
        assert f.read() == "1 αβ\n1 0\n"
