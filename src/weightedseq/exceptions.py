"""
Error taxonomy for weighted distributions, sequences and their text format.

Every error derives from :class:`WeightedSequenceError` and from the built-in
exception it refines (``ValueError`` or ``LookupError``).
"""

from typing import Hashable, Optional


class WeightedSequenceError(Exception):
    """Base class for all weightedseq errors."""


class InvalidProbabilityMassError(WeightedSequenceError, ValueError):
    """The probabilities of a strict element do not sum to 1 within tolerance."""

    def __init__(self, total: float, tolerance: float) -> None:
        self.total = total
        self.tolerance = tolerance
        super().__init__(
            f"The sum of probabilities is not equal to one (sum={total!r}, "
            f"tolerance={tolerance!r})."
        )


class EmptyDistributionError(WeightedSequenceError, ValueError):
    """A heaviest-symbol query was made on a distribution without entries."""

    def __init__(self, message: str = "There is no value in the distribution.") -> None:
        super().__init__(message)


class UnknownSymbolError(WeightedSequenceError, LookupError):
    """A symbol is outside the fixed alphabet of a dense distribution."""

    def __init__(self, symbol: Hashable, alphabet: Optional[str] = None) -> None:
        self.symbol = symbol
        message = f"Symbol {symbol!r} does not exist in the alphabet"
        if alphabet is not None:
            message += f" {alphabet}"
        super().__init__(message + ".")


class NoAlternativeError(WeightedSequenceError, ValueError):
    """Excluding a symbol leaves no other entry to choose from."""

    def __init__(self, excluded: Hashable) -> None:
        self.excluded = excluded
        super().__init__(
            f"No entry other than {excluded!r} exists, so the heaviest symbol "
            f"excluding it is undefined."
        )


class ParseError(WeightedSequenceError, ValueError):
    """Malformed weighted sequence text (missing or ill-typed token)."""

    def __init__(self, message: str, token_index: Optional[int] = None) -> None:
        self.token_index = token_index
        if token_index is not None:
            message = f"{message} (token {token_index})"
        super().__init__(message)
