"""
Weighted elements: a probability distribution over symbols with validation.
"""

from typing import Mapping, Optional, Union

from .distribution import DistributionStore, SparseDistribution
from .exceptions import InvalidProbabilityMassError
from .weighted_types import MACHINE_EPSILON, Probability, Symbol


class WeightedElement:
    """
    A single uncertain value: each symbol carries a probability.

    The element owns its distribution store and a tolerance used to decide
    whether the probabilities sum to one. Writes never re-validate; call
    :meth:`is_good` to check the current state.

    Attributes:
        distribution (DistributionStore): The owned probability store.
        tolerance (float): Allowed deviation of the total mass from 1.

    Example:
        >>> element = WeightedElement({"a": 0.6, "b": 0.4})
        >>> element.heaviest_symbol(), element.probability("c")
        ('a', 0.0)
        >>> element["a"] = 0.2
        >>> element.is_good()
        False
    """

    __slots__ = ("_distribution", "_tolerance")

    def __init__(
        self,
        distribution: Optional[Union[DistributionStore, Mapping[Symbol, Probability]]] = None,
        strict: bool = True,
        tolerance: float = 0.0,
    ) -> None:
        """
        Initialize the element, validating the probability mass if strict.

        Args:
            distribution: A distribution store, or a mapping symbol -> probability
                          which is wrapped into a :class:`SparseDistribution`.
                          If None, the element starts empty and is never checked
                          at construction, regardless of `strict`.
            strict: Require the probabilities to sum to 1 within `tolerance`.
            tolerance: Allowed deviation of the sum from 1. Must be >= 0.

        Raises:
            InvalidProbabilityMassError: If `strict` and the sum is off by more
                                         than `tolerance`.
            ValueError: If `tolerance` is negative.
        """
        self._tolerance: float = self._check_tolerance(tolerance)
        if distribution is None:
            self._distribution: DistributionStore = SparseDistribution()
            return
        if isinstance(distribution, Mapping):
            distribution = SparseDistribution(distribution)
        self._distribution = distribution

        if strict and not self.is_good():
            raise InvalidProbabilityMassError(self.total(), self._tolerance)

    @staticmethod
    def _check_tolerance(tolerance: float) -> float:
        tolerance = float(tolerance)
        if tolerance < 0.0:
            raise ValueError(f"tolerance must be non-negative, got {tolerance}.")
        return tolerance

    @property
    def distribution(self) -> DistributionStore:
        return self._distribution

    @property
    def tolerance(self) -> float:
        return self._tolerance

    @tolerance.setter
    def tolerance(self, value: float) -> None:
        self._tolerance = self._check_tolerance(value)

    def set_tolerance(self, value: float) -> None:
        """Change the tolerance used by later :meth:`is_good` calls."""
        self.tolerance = value

    def probability(self, symbol: Symbol) -> Probability:
        """Probability of `symbol`; 0.0 when it is absent."""
        return self._distribution.get(symbol)

    def set(self, symbol: Symbol, value: Probability) -> None:
        """Overwrite (or create) the probability of `symbol` without validation."""
        self._distribution[symbol] = value

    def __getitem__(self, symbol: Symbol) -> Probability:
        return self.probability(symbol)

    def __setitem__(self, symbol: Symbol, value: Probability) -> None:
        self.set(symbol, value)

    def heaviest_symbol(self) -> Symbol:
        """
        Return the most probable symbol.

        Ties resolve to the first maximal symbol in the store's iteration order.

        Raises:
            EmptyDistributionError: If the store has no entries.
        """
        return self._distribution.heaviest()

    def heaviest_probability(self) -> Probability:
        return self._distribution.get(self.heaviest_symbol())

    def total(self) -> Probability:
        return self._distribution.total()

    def is_good(self, tolerance: Optional[float] = None) -> bool:
        """
        Check whether the probabilities sum to one.

        Args:
            tolerance: Overrides the stored tolerance for this check only.

        Returns:
            True if ``abs(1 - total) < tolerance + machine epsilon``.
        """
        if tolerance is None:
            tolerance = self._tolerance
        return abs(1.0 - self.total()) < tolerance + MACHINE_EPSILON

    def copy(self) -> "WeightedElement":
        clone = type(self).__new__(type(self))
        clone._distribution = self._distribution.copy()
        clone._tolerance = self._tolerance
        return clone

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, WeightedElement):
            return NotImplemented
        return self._distribution == other._distribution

    def __ne__(self, other: object) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._distribution!r}, tolerance={self._tolerance!r})"


class WeightedSymbol(WeightedElement):
    """
    Weighted element over a single-character alphabet.

    Adds queries that skip one designated symbol, typically the gap marker of
    the enclosing sequence.
    """

    __slots__ = ()

    def heaviest_excluding(self, excluded: Symbol) -> Symbol:
        """
        Return the most probable symbol other than `excluded`.

        Raises:
            EmptyDistributionError: If the store has no entries.
            NoAlternativeError: If `excluded` is the only entry.
        """
        return self._distribution.heaviest_excluding(excluded)

    def heaviest_excluding_probability(self, excluded: Symbol) -> Probability:
        return self._distribution.get(self.heaviest_excluding(excluded))
