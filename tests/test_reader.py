"""
Pytest unit tests for the weighted sequence text reader in weightedseq.reader.
"""

import gzip
import io
import logging
import pathlib
from functools import partial

import pytest

from weightedseq.distribution import DenseDistribution, SparseDistribution
from weightedseq.exceptions import InvalidProbabilityMassError, ParseError
from weightedseq.parameter_config import ParseOptions
from weightedseq.reader import (
    TokenStream,
    load_weighted_collection,
    load_weighted_sequence,
    read_weighted_collection,
    read_weighted_sequence,
)
from weightedseq.sequence import WeightedCollection, WeightedSequence

SIMPLE_MATRIX = """3 ab-
0.75 0.25 0
0    0.25 0.75
0.5  0.5  0
"""

COLLECTION_MATRIX = """2 ACGT
1
0.25 0.25 0.25 0.25
3
1    0    0    0
0    0    0.5  0.5
0    0.25 0    0.75
"""

# --- Fixtures ---


@pytest.fixture
def matrix_file_fixture(tmp_path: pathlib.Path) -> pathlib.Path:
    file_path = tmp_path / "simple_matrix.txt"
    file_path.write_text(SIMPLE_MATRIX)
    return file_path


@pytest.fixture
def gzipped_collection_file_fixture(tmp_path: pathlib.Path) -> pathlib.Path:
    file_path = tmp_path / "collection_matrix.txt.gz"
    with gzip.open(file_path, "wt") as f:
        f.write(COLLECTION_MATRIX)
    return file_path


# --- Single sequence ---


def test_read_sequence_consensus():
    ws = read_weighted_sequence(SIMPLE_MATRIX)
    assert len(ws) == 3
    assert ws.consensus() == "a-a"
    assert ws[1].probability("b") == 0.25
    assert ws[1].probability("-") == 0.75


def test_read_sequence_omits_zero_values():
    ws = read_weighted_sequence(SIMPLE_MATRIX)
    assert isinstance(ws[0].distribution, SparseDistribution)
    assert "-" not in ws[0].distribution
    assert len(ws[0].distribution) == 2
    assert ws[0].probability("-") == 0.0


def test_read_sequence_without_gap_option():
    ws = read_weighted_sequence(SIMPLE_MATRIX)
    assert ws.has_gap() is False
    assert ws.consensus(include_gap=False) == "a-a"


def test_read_sequence_gap_is_last_alphabet_symbol():
    ws = read_weighted_sequence(SIMPLE_MATRIX, ParseOptions(gap=True))
    assert ws.gap == "-"
    assert ws.consensus(include_gap=False) == "aa"


def test_gap_option_applies_to_any_last_symbol():
    ws = read_weighted_sequence("1 xyz\n0 0 1\n", ParseOptions(gap=True))
    assert ws.gap == "z"
    assert ws.consensus(include_gap=False) == ""


def test_read_sequence_from_stream():
    ws = read_weighted_sequence(io.StringIO(SIMPLE_MATRIX))
    assert ws.consensus() == "a-a"


def test_tokens_ignore_line_layout():
    ws = read_weighted_sequence("2\nAB 1 0\n0\n1")
    assert ws.consensus() == "AB"


def test_read_zero_length_sequence():
    ws = read_weighted_sequence("0 ACGT")
    assert len(ws) == 0


def test_trailing_tokens_are_left_unread():
    stream = io.StringIO("1 AB\n1 0 extra\n")
    ws = read_weighted_sequence(stream)
    assert len(ws) == 1


def test_read_sequence_with_dense_strategy():
    factory = partial(WeightedSequence, distribution_factory=partial(DenseDistribution, "ab-"))
    ws = read_weighted_sequence(SIMPLE_MATRIX, sequence_factory=factory)
    assert isinstance(ws[0].distribution, DenseDistribution)
    assert ws.consensus() == "a-a"


# --- Strictness and tolerance ---


def test_strict_parse_rejects_row_off_by_tenth():
    text = "2 AB\n1 0\n0.4 0.5\n"
    with pytest.raises(InvalidProbabilityMassError):
        read_weighted_sequence(text)
    with pytest.raises(InvalidProbabilityMassError):
        read_weighted_sequence(text, ParseOptions(strict=True, tolerance=0.0))


def test_strict_parse_accepts_row_within_tolerance():
    text = "2 AB\n1 0\n0.4 0.5\n"
    ws = read_weighted_sequence(text, ParseOptions(tolerance=0.2))
    assert ws.consensus() == "AB"
    assert ws[1].tolerance == 0.2
    assert ws[1].is_good() is True


def test_lenient_parse_keeps_bad_rows():
    text = "1 ab\n0.2 0.4\n"
    ws = read_weighted_sequence(text, ParseOptions(strict=False))
    assert ws.consensus() == "b"
    assert ws[0].is_good() is False


def test_failed_parse_is_logged(caplog: pytest.LogCaptureFixture):
    with caplog.at_level(logging.ERROR, logger="weightedseq.reader"):
        with pytest.raises(InvalidProbabilityMassError):
            read_weighted_sequence("1 ab\n0.2 0.4\n")
    assert "Rejected position 0" in caplog.text


def test_options_do_not_leak_between_calls():
    gapped = read_weighted_sequence(SIMPLE_MATRIX, ParseOptions(gap=True, strict=False))
    plain = read_weighted_sequence(SIMPLE_MATRIX)
    assert gapped.has_gap() is True
    assert plain.has_gap() is False
    with pytest.raises(InvalidProbabilityMassError):
        read_weighted_sequence("1 ab\n0.2 0.4\n")


# --- Malformed input ---


@pytest.mark.parametrize(
    "text, message",
    [
        ("", "end of input while reading sequence length"),
        ("3", "end of input while reading alphabet"),
        ("x ACGT", "Expected an integer for sequence length, got 'x'"),
        ("1.5 ACGT", "Expected an integer"),
        ("-1 ACGT", "non-negative sequence length"),
        ("1 ABA\n1 0 0", "duplicate symbols"),
        ("1 AB\n0.5", "end of input while reading probability of 'B' at position 0"),
        ("1 AB\n0.5 half", "Expected a decimal value"),
    ],
)
def test_malformed_sequence_raises_parse_error(text: str, message: str):
    with pytest.raises(ParseError, match=message):
        read_weighted_sequence(text)


def test_parse_error_reports_token_index():
    with pytest.raises(ParseError) as exc_info:
        read_weighted_sequence("1 AB\n0.5 half")
    assert exc_info.value.token_index == 3
    assert isinstance(exc_info.value, ValueError)


def test_token_stream_counts_consumed_tokens():
    tokens = TokenStream("2 AB\n 0.5")
    assert tokens.next_count("length") == 2
    assert tokens.next_alphabet() == "AB"
    assert tokens.next_float("value") == 0.5
    assert tokens.consumed == 3


# --- Collections ---


def test_read_collection_lengths_per_sequence():
    wsc = read_weighted_collection(COLLECTION_MATRIX)
    assert isinstance(wsc, WeightedCollection)
    assert len(wsc) == 2
    assert [len(ws) for ws in wsc] == [1, 3]
    assert wsc.consensus() == ["A", "AGT"]


def test_read_collection_gap_option():
    wsc = read_weighted_collection(COLLECTION_MATRIX, ParseOptions(gap=True))
    assert all(ws.gap == "T" for ws in wsc)
    assert wsc.consensus(include_gap=False) == ["A", "AG"]


def test_read_collection_aborts_on_bad_row():
    text = "2 AB\n1\n1 0\n1\n0.5 0.25\n"
    with pytest.raises(InvalidProbabilityMassError):
        read_weighted_collection(text)


def test_read_collection_missing_sequence_raises():
    with pytest.raises(ParseError, match="length of sequence 1"):
        read_weighted_collection("2 AB\n1\n1 0\n")


def test_read_empty_collection():
    assert len(read_weighted_collection("0 ACGT")) == 0


def test_read_collection_uses_sequence_factory():
    collection_factory = partial(
        WeightedCollection,
        sequence_factory=partial(
            WeightedSequence, distribution_factory=partial(DenseDistribution, "ACGT")
        ),
    )
    wsc = read_weighted_collection(COLLECTION_MATRIX, collection_factory=collection_factory)
    assert isinstance(wsc[1][0].distribution, DenseDistribution)
    assert wsc.consensus() == ["A", "AGT"]


# --- Files ---


def test_load_sequence_from_file(matrix_file_fixture: pathlib.Path):
    ws = load_weighted_sequence(matrix_file_fixture, ParseOptions(gap=True))
    assert ws.consensus(include_gap=False) == "aa"


def test_load_collection_from_gzip(gzipped_collection_file_fixture: pathlib.Path):
    wsc = load_weighted_collection(str(gzipped_collection_file_fixture))
    assert [len(ws) for ws in wsc] == [1, 3]


def test_load_missing_file_raises(tmp_path: pathlib.Path):
    with pytest.raises(FileNotFoundError):
        load_weighted_sequence(tmp_path / "missing.txt")


def test_load_sequence_with_non_ascii_alphabet(tmp_path: pathlib.Path):
    text = "2 αβγ\n0.5 0.5 0\n0 0.25 0.75\n"
    file_path = tmp_path / "greek_matrix.txt"
    file_path.write_text(text, encoding="utf-8")
    assert load_weighted_sequence(file_path).consensus() == read_weighted_sequence(text).consensus()
    assert load_weighted_sequence(file_path).consensus() == "αγ"


def test_load_undecodable_file_raises_parse_error(tmp_path: pathlib.Path):
    file_path = tmp_path / "binary_matrix.txt"
    file_path.write_bytes(b"1 AB\n\xff 0\n")
    with pytest.raises(ParseError, match="Undecodable input"):
        load_weighted_sequence(file_path)
