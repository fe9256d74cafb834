"""
Reader for the weighted sequence text format.

A single sequence is written as its length and alphabet followed by one row
of probabilities per position, in alphabet order::

    3 ACGT-
    0.1 0.1 0.7 0.1 0
    0   0   0   0.2 0.8
    0.9 0   0.1 0   0

A collection starts with the number of sequences and the shared alphabet;
each sequence then gives its own length followed by its rows::

    2 ACGT
    1
    0.25 0.25 0.25 0.25
    2
    1 0 0 0
    0 0 0 1

Tokens are whitespace separated and line breaks carry no meaning. A value of
exactly 0 leaves the symbol out of the position's distribution.
"""

import logging
import pathlib
from typing import Callable, Iterator, Optional, TextIO, Union

from .element import WeightedSymbol
from .exceptions import ParseError, WeightedSequenceError
from .parameter_config import ParseOptions
from .sequence import WeightedCollection, WeightedSequence
from .utils import open_file_transparently

logger = logging.getLogger(__name__)

TextSource = Union[str, TextIO]


class TokenStream:
    """Lazy, single-pass stream of whitespace-delimited tokens."""

    def __init__(self, source: TextSource) -> None:
        lines = source.splitlines() if isinstance(source, str) else source
        self._tokens: Iterator[str] = (token for line in lines for token in line.split())
        self.consumed: int = 0

    def next_token(self, what: str) -> str:
        try:
            token = next(self._tokens)
        except StopIteration:
            raise ParseError(
                f"Unexpected end of input while reading {what}", self.consumed
            ) from None
        except UnicodeDecodeError as e:
            raise ParseError(f"Undecodable input while reading {what}: {e}", self.consumed) from e
        self.consumed += 1
        return token

    def next_count(self, what: str) -> int:
        """Read a non-negative integer."""
        token = self.next_token(what)
        try:
            value = int(token)
        except ValueError:
            raise ParseError(
                f"Expected an integer for {what}, got {token!r}", self.consumed - 1
            ) from None
        if value < 0:
            raise ParseError(
                f"Expected a non-negative {what}, got {value}", self.consumed - 1
            )
        return value

    def next_float(self, what: str) -> float:
        token = self.next_token(what)
        try:
            return float(token)
        except ValueError:
            raise ParseError(
                f"Expected a decimal value for {what}, got {token!r}", self.consumed - 1
            ) from None

    def next_alphabet(self) -> str:
        alphabet = self.next_token("alphabet")
        if len(set(alphabet)) != len(alphabet):
            raise ParseError(
                f"Alphabet {alphabet!r} contains duplicate symbols", self.consumed - 1
            )
        return alphabet


def _fill_sequence(
    tokens: TokenStream,
    sequence: WeightedSequence,
    length: int,
    alphabet: str,
    options: ParseOptions,
) -> None:
    """Read `length` rows over `alphabet` and append them to `sequence`."""
    if options.gap:
        sequence.set_gap(alphabet[-1])

    for position in range(length):
        distribution = sequence.distribution_factory()
        for symbol in alphabet:
            value = tokens.next_float(f"probability of {symbol!r} at position {position}")
            if value != 0.0:
                distribution[symbol] = value
        try:
            element = WeightedSymbol(
                distribution, strict=options.strict, tolerance=options.tolerance
            )
        except WeightedSequenceError as e:
            logger.error(f"Rejected position {position} of weighted sequence: {e}")
            raise
        sequence.append(element)

    logger.debug(
        f"Parsed weighted sequence of length {length} over alphabet {alphabet!r} "
        f"(gap: {sequence.gap!r})"
    )


def read_weighted_sequence(
    source: TextSource,
    options: Optional[ParseOptions] = None,
    sequence_factory: Callable[[], WeightedSequence] = WeightedSequence,
) -> WeightedSequence:
    """
    Parse one weighted sequence.

    Args:
        source: The text itself, or a text stream to read from.
        options: Parse modes; defaults to strict, no gap, zero tolerance.
        sequence_factory: Builds the empty sequence to fill. Its storage
                          strategy is used for every position.

    Returns:
        The populated sequence.

    Raises:
        ParseError: If a token is missing or ill-typed.
        InvalidProbabilityMassError: If strict and a row does not sum to 1.
        UnknownSymbolError: If the alphabet has a symbol the storage strategy
                            cannot hold and that symbol has a non-zero value.
    """
    options = options or ParseOptions()
    tokens = TokenStream(source)

    length = tokens.next_count("sequence length")
    alphabet = tokens.next_alphabet()

    sequence = sequence_factory()
    _fill_sequence(tokens, sequence, length, alphabet, options)
    return sequence


def read_weighted_collection(
    source: TextSource,
    options: Optional[ParseOptions] = None,
    collection_factory: Callable[[], WeightedCollection] = WeightedCollection,
) -> WeightedCollection:
    """
    Parse a collection of weighted sequences sharing one alphabet.

    The whole parse fails on the first error; no partial collection is returned.

    Args:
        source: The text itself, or a text stream to read from.
        options: Parse modes applied to every sequence.
        collection_factory: Builds the empty collection; its
                            ``sequence_factory`` builds each sequence.

    Raises:
        Same as :func:`read_weighted_sequence`.
    """
    options = options or ParseOptions()
    tokens = TokenStream(source)

    count = tokens.next_count("collection size")
    alphabet = tokens.next_alphabet()

    collection = collection_factory()
    for index in range(count):
        length = tokens.next_count(f"length of sequence {index}")
        sequence = collection.new_sequence()
        _fill_sequence(tokens, sequence, length, alphabet, options)
        collection.append(sequence)

    logger.debug(f"Parsed collection of {count} weighted sequences over {alphabet!r}")
    return collection


def load_weighted_sequence(
    file_path: Union[str, pathlib.Path],
    options: Optional[ParseOptions] = None,
    sequence_factory: Callable[[], WeightedSequence] = WeightedSequence,
) -> WeightedSequence:
    """Read a weighted sequence from a plain or gzipped file."""
    with open_file_transparently(file_path) as handle:
        sequence = read_weighted_sequence(handle, options, sequence_factory)
    logger.info(f"Loaded weighted sequence of length {len(sequence)} from {file_path}")
    return sequence


def load_weighted_collection(
    file_path: Union[str, pathlib.Path],
    options: Optional[ParseOptions] = None,
    collection_factory: Callable[[], WeightedCollection] = WeightedCollection,
) -> WeightedCollection:
    """Read a collection of weighted sequences from a plain or gzipped file."""
    with open_file_transparently(file_path) as handle:
        collection = read_weighted_collection(handle, options, collection_factory)
    logger.info(f"Loaded {len(collection)} weighted sequences from {file_path}")
    return collection
