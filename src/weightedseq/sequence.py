"""
Weighted sequences and collections of weighted sequences.
"""

from collections.abc import MutableSequence
from typing import Callable, Iterable, Iterator, List, Optional, Sequence, overload

import pandas as pd

from .distribution import SparseDistribution
from .element import WeightedSymbol
from .weighted_types import ConsensusSymbols, DistributionFactory, Symbol


class WeightedSequence(MutableSequence):
    """
    Ordered list of weighted symbols with an optional gap symbol.

    The gap is interpretive metadata: it only affects :meth:`consensus` with
    ``include_gap=False`` and need not appear in any distribution. The
    `distribution_factory` records which storage strategy new positions use,
    which is how readers and :meth:`new_symbol` build elements for this
    sequence.

    Example:
        >>> seq = WeightedSequence(gap="-")
        >>> seq.append(WeightedSymbol({"G": 1.0}))
        >>> seq.append(WeightedSymbol({"-": 0.7, "A": 0.3}))
        >>> seq.consensus(), seq.consensus(include_gap=False)
        ('G-', 'G')
    """

    def __init__(
        self,
        elements: Iterable[WeightedSymbol] = (),
        gap: Optional[Symbol] = None,
        distribution_factory: DistributionFactory = SparseDistribution,
    ) -> None:
        self._elements: List[WeightedSymbol] = list(elements)
        self._gap: Optional[Symbol] = gap
        self.distribution_factory: DistributionFactory = distribution_factory

    # --- gap handling ---

    @property
    def gap(self) -> Optional[Symbol]:
        """The gap symbol, or None when no gap is configured."""
        return self._gap

    def set_gap(self, gap: Symbol) -> None:
        self._gap = gap

    def clear_gap(self) -> None:
        self._gap = None

    def has_gap(self) -> bool:
        return self._gap is not None

    # --- MutableSequence protocol ---

    @overload
    def __getitem__(self, index: int) -> WeightedSymbol: ...

    @overload
    def __getitem__(self, index: slice) -> List[WeightedSymbol]: ...

    def __getitem__(self, index):
        return self._elements[index]

    def __setitem__(self, index, value) -> None:
        self._elements[index] = value

    def __delitem__(self, index) -> None:
        del self._elements[index]

    def __len__(self) -> int:
        return len(self._elements)

    def __iter__(self) -> Iterator[WeightedSymbol]:
        return iter(self._elements)

    def insert(self, index: int, value: WeightedSymbol) -> None:
        self._elements.insert(index, value)

    # --- queries ---

    def new_symbol(self, strict: bool = False, tolerance: float = 0.0) -> WeightedSymbol:
        """Build an empty weighted symbol backed by this sequence's storage strategy."""
        return WeightedSymbol(self.distribution_factory(), strict=strict, tolerance=tolerance)

    def heaviest_symbols(self, include_gap: bool = True) -> ConsensusSymbols:
        """
        Heaviest symbol of every position.

        Args:
            include_gap: If False, positions whose heaviest symbol is the gap are
                         left out. Ignored when no gap is configured.

        Raises:
            EmptyDistributionError: If a position has an empty distribution.
        """
        symbols = [element.heaviest_symbol() for element in self._elements]
        if include_gap or not self.has_gap():
            return symbols
        return [symbol for symbol in symbols if symbol != self._gap]

    def consensus(self, include_gap: bool = True) -> str:
        """Concatenate the heaviest symbol of every position into a string."""
        return "".join(str(symbol) for symbol in self.heaviest_symbols(include_gap))

    def to_frame(self, columns: Optional[Sequence[Symbol]] = None) -> pd.DataFrame:
        """
        Probability matrix of the sequence as a DataFrame.

        Args:
            columns: Symbols to report, in order. Defaults to every stored symbol
                     in first-seen order across positions.

        Returns:
            A DataFrame indexed by position with one float column per symbol.
        """
        if columns is None:
            seen = {}
            for element in self._elements:
                for symbol in element.distribution:
                    seen.setdefault(symbol, None)
            columns = list(seen)
        rows = [[element.probability(symbol) for symbol in columns] for element in self._elements]
        frame = pd.DataFrame(rows, columns=list(columns), dtype=float)
        frame.index.name = "position"
        return frame

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, WeightedSequence):
            return NotImplemented
        return self._elements == other._elements

    def __ne__(self, other: object) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._elements!r}, gap={self._gap!r})"


class WeightedCollection(MutableSequence):
    """
    Ordered list of weighted sequences.

    `sequence_factory` builds the empty sequences a reader fills in, so a
    collection of DNA sequences keeps the DNA storage strategy and gap.
    """

    def __init__(
        self,
        sequences: Iterable[WeightedSequence] = (),
        sequence_factory: Callable[[], WeightedSequence] = WeightedSequence,
    ) -> None:
        self._sequences: List[WeightedSequence] = list(sequences)
        self.sequence_factory = sequence_factory

    def __getitem__(self, index):
        return self._sequences[index]

    def __setitem__(self, index, value) -> None:
        self._sequences[index] = value

    def __delitem__(self, index) -> None:
        del self._sequences[index]

    def __len__(self) -> int:
        return len(self._sequences)

    def __iter__(self) -> Iterator[WeightedSequence]:
        return iter(self._sequences)

    def insert(self, index: int, value: WeightedSequence) -> None:
        self._sequences.insert(index, value)

    def new_sequence(self) -> WeightedSequence:
        return self.sequence_factory()

    def consensus(self, include_gap: bool = True) -> List[str]:
        """Consensus string of every sequence, in order."""
        return [sequence.consensus(include_gap) for sequence in self._sequences]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, WeightedCollection):
            return NotImplemented
        return self._sequences == other._sequences

    def __ne__(self, other: object) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._sequences!r})"
