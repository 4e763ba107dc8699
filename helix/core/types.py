# helix/core/types.py

"""
Core type annotations for the helix package.

Type aliases shared by the filter, factorization and utility modules. Arrays
are plain NumPy arrays; the aliases document the expected rank.
"""

from typing import Literal, Optional, Sequence, Tuple, Union

import numpy as np

# NumPy array type aliases by rank
Vector = np.ndarray  # 1D array
Matrix = np.ndarray  # 2D array
Tensor3D = np.ndarray  # 3D array

# Any array a filter can be applied to (rank 1, 2 or 3)
FilterArray = Union[Vector, Matrix, Tensor3D]

# Lag and coefficient inputs accepted at construction
LagSequence = Union[Sequence[int], np.ndarray]
CoefficientSequence = Union[Sequence[float], np.ndarray]
OptionalLags = Optional[LagSequence]

# Array shapes and offsets
Shape = Tuple[int, ...]
Offset = Tuple[int, ...]

# (min, max) of one lag sequence
LagExtrema = Tuple[int, int]

# Configuration types
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
