"""
weightedseq: Uncertain symbolic sequences for Python.

Each position of a weighted sequence holds a probability distribution over an
alphabet (for example a DNA base call with per-letter confidence). This
package provides the distribution stores, validated weighted elements,
sequences with gap-aware consensus extraction, IUPAC ambiguity decoding for
DNA, and a reader for the whitespace-delimited probability matrix format.
"""

__version__ = "0.1.0"

# Core classes and functions for easier access
from .distribution import Alphabet, DenseDistribution, DistributionStore, SparseDistribution
from .dna import (
    DNA_ALPHABET,
    DNA_AMBIGUITY_CODES,
    DNA_GAP,
    DNA_GAP_ALPHABET,
    DnaDistribution,
    DnaGapWeightedCollection,
    DnaGapWeightedSequence,
    DnaWeightedCollection,
    DnaWeightedSequence,
)
from .element import WeightedElement, WeightedSymbol
from .exceptions import (
    EmptyDistributionError,
    InvalidProbabilityMassError,
    NoAlternativeError,
    ParseError,
    UnknownSymbolError,
    WeightedSequenceError,
)
from .parameter_config import ParseOptions
from .reader import (
    load_weighted_collection,
    load_weighted_sequence,
    read_weighted_collection,
    read_weighted_sequence,
)
from .sequence import WeightedCollection, WeightedSequence

__all__ = [
    "Alphabet",
    "DenseDistribution",
    "DistributionStore",
    "SparseDistribution",
    "DNA_ALPHABET",
    "DNA_AMBIGUITY_CODES",
    "DNA_GAP",
    "DNA_GAP_ALPHABET",
    "DnaDistribution",
    "DnaGapWeightedCollection",
    "DnaGapWeightedSequence",
    "DnaWeightedCollection",
    "DnaWeightedSequence",
    "WeightedElement",
    "WeightedSymbol",
    "EmptyDistributionError",
    "InvalidProbabilityMassError",
    "NoAlternativeError",
    "ParseError",
    "UnknownSymbolError",
    "WeightedSequenceError",
    "ParseOptions",
    "load_weighted_collection",
    "load_weighted_sequence",
    "read_weighted_collection",
    "read_weighted_sequence",
    "WeightedCollection",
    "WeightedSequence",
    "__version__",
]
