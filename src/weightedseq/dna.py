"""
DNA specialisation of weighted sequences.

DNA positions are stored densely over ``ACGT`` (or ``ACGT-`` when gaps are
part of the data). Querying an IUPAC ambiguity code such as ``R`` returns the
summed probability of the bases it stands for.
"""

from types import MappingProxyType
from typing import Iterable, Mapping, Optional, Sequence, Tuple, Union

from Bio.Seq import Seq

from .distribution import Alphabet, DenseDistribution
from .sequence import WeightedCollection, WeightedSequence
from .weighted_types import Probability, Symbol

DNA_ALPHABET: Alphabet = Alphabet("ACGT")
DNA_GAP_ALPHABET: Alphabet = Alphabet("ACGT-")
DNA_GAP: str = "-"

# Ambiguity code -> represented bases. Sums follow the tuple order.
DNA_AMBIGUITY_CODES: Mapping[str, Tuple[str, ...]] = MappingProxyType(
    {
        "R": ("G", "A"),
        "Y": ("T", "C"),
        "M": ("A", "C"),
        "K": ("G", "T"),
        "S": ("G", "C"),
        "W": ("A", "T"),
        "H": ("A", "C", "T"),
        "B": ("G", "C", "T"),
        "V": ("G", "C", "A"),
        "D": ("G", "A", "T"),
        "N": ("G", "A", "T", "C"),
    }
)


class DnaDistribution(DenseDistribution):
    """
    Dense distribution over a DNA alphabet that decodes ambiguity codes.

    ``get(code)`` for a key of :data:`DNA_AMBIGUITY_CODES` is the sum of the
    probabilities of the represented bases; every other symbol is looked up
    as in :class:`DenseDistribution`. Codes cannot be written.

    Example:
        >>> dist = DnaDistribution({"A": 0.5, "C": 0.2, "G": 0.3})
        >>> dist.get("R")
        0.8
    """

    __slots__ = ()

    def __init__(
        self,
        weights: Optional[Union[Mapping[Symbol, Probability], Sequence[Probability]]] = None,
        alphabet: Union[Alphabet, Iterable[Symbol]] = DNA_ALPHABET,
    ) -> None:
        super().__init__(alphabet, weights)

    def get(self, symbol: Symbol) -> Probability:
        bases = DNA_AMBIGUITY_CODES.get(symbol) if isinstance(symbol, str) else None
        if bases is None:
            return super().get(symbol)
        probability = 0.0
        for base in bases:
            probability += super().get(base)
        return probability


def dna_distribution() -> DnaDistribution:
    return DnaDistribution(alphabet=DNA_ALPHABET)


def dna_gap_distribution() -> DnaDistribution:
    return DnaDistribution(alphabet=DNA_GAP_ALPHABET)


class DnaWeightedSequence(WeightedSequence):
    """Weighted DNA sequence over ``ACGT`` with no gap by default."""

    def __init__(self, elements=(), gap: Optional[Symbol] = None) -> None:
        super().__init__(elements, gap=gap, distribution_factory=dna_distribution)

    def consensus_seq(self, include_gap: bool = True) -> Seq:
        """Consensus as a Biopython :class:`~Bio.Seq.Seq`."""
        return Seq(self.consensus(include_gap))


class DnaGapWeightedSequence(DnaWeightedSequence):
    """Weighted DNA sequence over ``ACGT-`` whose gap is always preset to ``-``."""

    def __init__(self, elements=()) -> None:
        super().__init__(elements, gap=DNA_GAP)
        self.distribution_factory = dna_gap_distribution


class DnaWeightedCollection(WeightedCollection):
    def __init__(self, sequences=()) -> None:
        super().__init__(sequences, sequence_factory=DnaWeightedSequence)


class DnaGapWeightedCollection(WeightedCollection):
    """
    Collection of gapped DNA sequences.

    Every sequence inserted into the collection has its gap reset to ``-``,
    including sequences filled by the reader with the gap option on, where
    the header alphabet's last symbol would otherwise become the gap.
    """

    def __init__(self, sequences=()) -> None:
        super().__init__(sequence_factory=DnaGapWeightedSequence)
        for sequence in sequences:
            self.append(sequence)

    def insert(self, index: int, value: WeightedSequence) -> None:
        value.set_gap(DNA_GAP)
        super().insert(index, value)
