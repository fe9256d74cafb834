"""
Type definitions for the weightedseq package.

This module centralizes common type aliases used throughout weightedseq
to ensure consistency and improve code readability.
"""

from typing import Any, Callable, Dict, Hashable, List, Mapping

import numpy as np
import numpy.typing as npt

# Type aliases for clarity
Symbol = Hashable  # Any hashable, comparable value; a single character in practice.
Probability = float  # Probability mass attached to a symbol.
WeightVector = npt.NDArray[
    np.float64
]  # Dense probability array, one slot per alphabet symbol.
ProbabilityMap = Mapping[Symbol, Probability]  # Symbol -> probability input mapping.
SymbolRow = Dict[Symbol, Probability]  # One parsed matrix row with zeros omitted.
ConsensusSymbols = List[Symbol]  # Heaviest symbol of each sequence position.
DistributionFactory = Callable[
    [], Any
]  # Zero-argument callable building an empty distribution store.

# float64 machine epsilon, added to every tolerance comparison.
MACHINE_EPSILON: float = float(np.finfo(np.float64).eps)
