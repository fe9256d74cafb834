"""
Probability storage strategies for weighted elements.

Two interchangeable stores map symbols to probability mass:

* :class:`SparseDistribution` keeps a dict of the symbols that were written and
  accepts any hashable symbol.
* :class:`DenseDistribution` keeps one NumPy slot per symbol of a fixed
  :class:`Alphabet`, trading memory proportional to the alphabet for indexed
  access.

Both report 0.0 for symbols they do not hold, compare equal when every symbol
carries the same probability in both (absence counting as 0), and break
heaviest-symbol ties by returning the first maximal symbol in their own
iteration order: insertion order for sparse stores, alphabet order for dense
stores.
"""

import abc
import copy
from typing import (
    Dict,
    Iterable,
    Iterator,
    List,
    Mapping,
    Optional,
    Protocol,
    Sequence,
    Tuple,
    Union,
    runtime_checkable,
)

import numpy as np

from .exceptions import EmptyDistributionError, NoAlternativeError, UnknownSymbolError
from .weighted_types import Probability, Symbol, WeightVector


@runtime_checkable
class DistributionStore(Protocol):
    """Capabilities every probability store offers to a weighted element."""

    def get(self, symbol: Symbol) -> Probability: ...

    def __getitem__(self, symbol: Symbol) -> Probability: ...

    def __setitem__(self, symbol: Symbol, value: Probability) -> None: ...

    def slot(self, symbol: Symbol) -> Probability: ...

    def __contains__(self, symbol: object) -> bool: ...

    def __len__(self) -> int: ...

    def __iter__(self) -> Iterator[Symbol]: ...

    def items(self) -> List[Tuple[Symbol, Probability]]: ...

    def heaviest(self) -> Symbol: ...

    def heaviest_excluding(self, excluded: Symbol) -> Symbol: ...

    def total(self) -> Probability: ...

    def copy(self) -> "DistributionStore": ...


class _DistributionBase(abc.ABC):
    """Semantic equality and item access shared by the concrete stores."""

    __slots__ = ()

    @abc.abstractmethod
    def get(self, symbol: Symbol) -> Probability: ...

    @abc.abstractmethod
    def __iter__(self) -> Iterator[Symbol]: ...

    def __getitem__(self, symbol: Symbol) -> Probability:
        return self.get(symbol)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, _DistributionBase):
            return NotImplemented
        symbols = set(self) | set(other)
        return all(self.get(symbol) == other.get(symbol) for symbol in symbols)

    def __ne__(self, other: object) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    # Stores are mutable.
    __hash__ = None  # type: ignore[assignment]


class SparseDistribution(_DistributionBase):
    """
    Dict-backed distribution over an open alphabet.

    Only written symbols are stored; reading any other symbol yields 0.0.

    Example:
        >>> dist = SparseDistribution({"a": 0.6, "b": 0.4})
        >>> dist["a"], dist["z"]
        (0.6, 0.0)
        >>> dist.heaviest()
        'a'
    """

    __slots__ = ("_weights",)

    def __init__(
        self,
        mapping: Optional[
            Union[Mapping[Symbol, Probability], Iterable[Tuple[Symbol, Probability]]]
        ] = None,
    ) -> None:
        self._weights: Dict[Symbol, Probability] = {}
        if mapping is not None:
            for symbol, value in dict(mapping).items():
                self._weights[symbol] = float(value)

    def get(self, symbol: Symbol) -> Probability:
        return self._weights.get(symbol, 0.0)

    def __setitem__(self, symbol: Symbol, value: Probability) -> None:
        self._weights[symbol] = float(value)

    def slot(self, symbol: Symbol) -> Probability:
        """Return the stored value for `symbol`, creating a 0.0 entry if absent."""
        return self._weights.setdefault(symbol, 0.0)

    def __contains__(self, symbol: object) -> bool:
        try:
            return symbol in self._weights
        except TypeError:  # unhashable symbol
            return False

    def __len__(self) -> int:
        return len(self._weights)

    def __iter__(self) -> Iterator[Symbol]:
        return iter(self._weights)

    def items(self) -> List[Tuple[Symbol, Probability]]:
        return list(self._weights.items())

    def heaviest(self) -> Symbol:
        """
        Return the symbol with the highest probability.

        Ties go to the symbol inserted first.

        Raises:
            EmptyDistributionError: If no entry exists.
        """
        if not self._weights:
            raise EmptyDistributionError()
        return max(self._weights, key=self._weights.__getitem__)

    def heaviest_excluding(self, excluded: Symbol) -> Symbol:
        """
        Return the heaviest symbol other than `excluded`.

        Raises:
            EmptyDistributionError: If no entry exists.
            NoAlternativeError: If `excluded` is the only entry.
        """
        if not self._weights:
            raise EmptyDistributionError()
        candidates = [symbol for symbol in self._weights if symbol != excluded]
        if not candidates:
            raise NoAlternativeError(excluded)
        return max(candidates, key=self._weights.__getitem__)

    def total(self) -> Probability:
        return sum(self._weights.values(), 0.0)

    def copy(self) -> "SparseDistribution":
        clone = copy.copy(self)
        clone._weights = dict(self._weights)
        return clone

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._weights!r})"


class Alphabet:
    """
    Immutable bijection between a finite set of symbols and array indices.

    Lookups in both directions are O(1). A string is read as one symbol per
    character.

    Example:
        >>> alphabet = Alphabet("ACGT")
        >>> alphabet.index("G"), alphabet.symbol(0)
        (2, 'A')
    """

    __slots__ = ("_symbols", "_indices")

    def __init__(self, symbols: Iterable[Symbol]) -> None:
        self._symbols: Tuple[Symbol, ...] = tuple(symbols)
        self._indices: Dict[Symbol, int] = {
            symbol: index for index, symbol in enumerate(self._symbols)
        }
        if len(self._indices) != len(self._symbols):
            raise ValueError(f"Alphabet symbols must be unique, got {self._symbols!r}.")

    @property
    def symbols(self) -> Tuple[Symbol, ...]:
        return self._symbols

    def index(self, symbol: Symbol) -> int:
        """
        Translate a symbol to its array index.

        Raises:
            UnknownSymbolError: If the symbol is not part of the alphabet.
        """
        try:
            return self._indices[symbol]
        except (KeyError, TypeError):
            raise UnknownSymbolError(symbol, str(self)) from None

    def symbol(self, index: int) -> Symbol:
        """Translate an array index back to its symbol."""
        return self._symbols[index]

    def __contains__(self, symbol: object) -> bool:
        try:
            return symbol in self._indices
        except TypeError:
            return False

    def __len__(self) -> int:
        return len(self._symbols)

    def __iter__(self) -> Iterator[Symbol]:
        return iter(self._symbols)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Alphabet):
            return NotImplemented
        return self._symbols == other._symbols

    def __hash__(self) -> int:
        return hash(self._symbols)

    def __str__(self) -> str:
        return "".join(str(symbol) for symbol in self._symbols)

    def __repr__(self) -> str:
        return f"Alphabet({self._symbols!r})"


class DenseDistribution(_DistributionBase):
    """
    Array-backed distribution over a fixed :class:`Alphabet`.

    Every alphabet symbol owns one float64 slot, zero until written, so each
    symbol of the alphabet counts as an entry. Writing a symbol outside the
    alphabet raises :class:`UnknownSymbolError`; reading one returns 0.0.

    Args:
        alphabet: The alphabet, or any iterable of symbols to build one from.
        weights: Optional initial values, either in alphabet order or as a
                 mapping symbol -> probability.

    Raises:
        ValueError: If `weights` is a sequence whose length differs from the
                    alphabet size.
        UnknownSymbolError: If `weights` is a mapping naming a symbol outside
                            the alphabet.
    """

    __slots__ = ("_alphabet", "_weights")

    def __init__(
        self,
        alphabet: Union[Alphabet, Iterable[Symbol]],
        weights: Optional[Union[Mapping[Symbol, Probability], Sequence[Probability]]] = None,
    ) -> None:
        if not isinstance(alphabet, Alphabet):
            alphabet = Alphabet(alphabet)
        self._alphabet: Alphabet = alphabet
        self._weights: WeightVector = np.zeros(len(alphabet), dtype=np.float64)

        if weights is None:
            return
        if isinstance(weights, Mapping):
            for symbol, value in weights.items():
                self[symbol] = value
            return

        values = np.asarray(weights, dtype=np.float64)
        if values.shape != self._weights.shape:
            raise ValueError(
                f"Expected {len(alphabet)} weights for alphabet {alphabet}, got "
                f"{values.size}."
            )
        self._weights[:] = values

    @property
    def alphabet(self) -> Alphabet:
        return self._alphabet

    def get(self, symbol: Symbol) -> Probability:
        if symbol not in self._alphabet:
            return 0.0
        return float(self._weights[self._alphabet.index(symbol)])

    def __setitem__(self, symbol: Symbol, value: Probability) -> None:
        self._weights[self._alphabet.index(symbol)] = value

    def slot(self, symbol: Symbol) -> Probability:
        """
        Return the stored value for `symbol`. Every alphabet symbol already
        owns a slot, so nothing is created.

        Raises:
            UnknownSymbolError: If `symbol` is outside the alphabet.
        """
        return float(self._weights[self._alphabet.index(symbol)])

    def __contains__(self, symbol: object) -> bool:
        return symbol in self._alphabet

    def __len__(self) -> int:
        return len(self._alphabet)

    def __iter__(self) -> Iterator[Symbol]:
        return iter(self._alphabet)

    def items(self) -> List[Tuple[Symbol, Probability]]:
        return list(zip(self._alphabet, self._weights.tolist()))

    def heaviest(self) -> Symbol:
        """
        Return the symbol with the highest probability, lowest index on ties.

        Raises:
            EmptyDistributionError: If the alphabet is empty.
        """
        if not len(self._alphabet):
            raise EmptyDistributionError()
        return self._alphabet.symbol(int(np.argmax(self._weights)))

    def heaviest_excluding(self, excluded: Symbol) -> Symbol:
        """
        Return the heaviest symbol other than `excluded`, lowest index on ties.

        An `excluded` symbol outside the alphabet excludes nothing.

        Raises:
            EmptyDistributionError: If the alphabet is empty.
            NoAlternativeError: If the alphabet holds only `excluded`.
        """
        if not len(self._alphabet):
            raise EmptyDistributionError()
        candidates = np.arange(len(self._alphabet))
        if excluded in self._alphabet:
            candidates = candidates[candidates != self._alphabet.index(excluded)]
        if candidates.size == 0:
            raise NoAlternativeError(excluded)
        best = candidates[int(np.argmax(self._weights[candidates]))]
        return self._alphabet.symbol(int(best))

    def total(self) -> Probability:
        # Sequential sum in alphabet order, not NumPy's pairwise reduction.
        return sum(self._weights.tolist(), 0.0)

    def as_array(self) -> WeightVector:
        """Return a read-only copy of the weights in alphabet order."""
        values = self._weights.copy()
        values.flags.writeable = False
        return values

    def copy(self) -> "DenseDistribution":
        clone = copy.copy(self)
        clone._weights = self._weights.copy()
        return clone

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self._alphabet)!r}, {self._weights.tolist()!r})"
