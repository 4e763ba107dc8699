# helix/filters/minimum_phase.py

"""
Minimum-phase filters on a helix.

A minimum-phase filter is a causal stable filter with a causal stable
inverse. The filter and its inverse also have corresponding transposes, which
are like the filter and inverse applied in the reverse direction.

Minimum-phase filters generalize to multi-dimensional arrays via filtering on
a helix: each coefficient a[j] is tied to a lag vector (lag1[j], lag2[j],
lag3[j]), and the lag vectors for j >= 1 are lexicographically positive with
the highest dimension compared first. Every term then refers strictly to the
causal past in the unrolled (C order) sequence of array positions, so the
ordinary 1-D recursions for the inverse and inverse transpose carry over to
2-D and 3-D arrays unchanged.

Arrays are indexed x[i3, i2, i1]: dimension 1 is the last (fastest) axis.

Classes:
    MinimumPhaseFilter: Immutable lag/coefficient table with the four
        linear-operator applications
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

import numpy as np

from helix.core.types import CoefficientSequence, FilterArray, LagSequence, Shape
from helix.core.validation import (
    check_argument, check_state, validate_coefficients, validate_filter_array,
    validate_lag_sequence, validate_output_array
)
from helix.filters._numba_core import helix_filter, interior_bounds
from helix.utils.array_ops import as_volume, impulse, lag_extrema, zeros

# Set up module-level logger
logger = logging.getLogger("helix.filters.minimum_phase")

_OPERATIONS = {
    "apply": (False, False),
    "apply_transpose": (True, False),
    "apply_inverse": (False, True),
    "apply_inverse_transpose": (True, True),
}


def _readonly(array: np.ndarray) -> np.ndarray:
    array.flags.writeable = False
    return array


@dataclass(frozen=True, eq=False)
class MinimumPhaseFilter:
    """Immutable minimum-phase filter.

    For j = 0 only, all lags are zero. For j >= 1 the lag vector must be
    causal: lag3[j] >= 0; if lag3[j] == 0 then lag2[j] >= 0; and if all
    higher-dimension lags are zero then lag1[j] > 0.

    Attributes:
        lag1: Lags in dimension 1
        a: Filter coefficients, one per lag
        lag2: Lags in dimension 2, or None for a 1-D filter
        lag3: Lags in dimension 3, or None; requires lag2
        m: Number of coefficients
        a0: Leading coefficient a[0]
        a0_inv: 1/a[0]
        min1, max1, min2, max2, min3, max3: Lag extrema per dimension
            (None for an absent dimension)

    Raises:
        InvalidArgumentError: If the lag table or coefficients violate an
            invariant

    Examples:
        >>> import numpy as np
        >>> mpf = MinimumPhaseFilter(lag1=[0, 1], a=[1.0, -0.5])
        >>> mpf.apply_inverse(np.array([1.0, 0.0, 0.0, 0.0]))
        array([1.   , 0.5  , 0.25 , 0.125])
    """

    lag1: LagSequence
    a: CoefficientSequence
    lag2: Optional[LagSequence] = None
    lag3: Optional[LagSequence] = None

    m: int = field(init=False, repr=False)
    a0: float = field(init=False, repr=False)
    a0_inv: float = field(init=False, repr=False)
    min1: int = field(init=False, repr=False)
    max1: int = field(init=False, repr=False)
    min2: Optional[int] = field(init=False, repr=False)
    max2: Optional[int] = field(init=False, repr=False)
    min3: Optional[int] = field(init=False, repr=False)
    max3: Optional[int] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Validate the lag table and cache extrema and a0."""
        lag1 = validate_lag_sequence(self.lag1, "lag1")
        a = validate_coefficients(self.a, "a")
        lag2 = None if self.lag2 is None else validate_lag_sequence(self.lag2, "lag2")
        lag3 = None if self.lag3 is None else validate_lag_sequence(self.lag3, "lag3")

        check_argument(lag3 is None or lag2 is not None, "lag3 requires lag2", argument="lag3")
        check_argument(len(lag1) > 0, "len(lag1) > 0", argument="lag1")
        check_argument(len(lag1) == len(a), "len(lag1) == len(a)", argument="lag1")
        if lag2 is not None:
            check_argument(len(lag2) == len(a), "len(lag2) == len(a)", argument="lag2")
        if lag3 is not None:
            check_argument(len(lag3) == len(a), "len(lag3) == len(a)", argument="lag3")

        check_argument(lag1[0] == 0, "lag1[0] == 0", argument="lag1", index=0)
        if lag2 is not None:
            check_argument(lag2[0] == 0, "lag2[0] == 0", argument="lag2", index=0)
        if lag3 is not None:
            check_argument(lag3[0] == 0, "lag3[0] == 0", argument="lag3", index=0)
        check_argument(a[0] != 0.0, "a[0] != 0", argument="a", index=0)

        for j in range(1, len(a)):
            if lag3 is not None:
                check_argument(lag3[j] >= 0, f"lag3[{j}] >= 0", argument="lag3", index=j)
                if lag3[j] > 0:
                    continue
                check_argument(lag2[j] >= 0, f"if lag3 == 0, lag2[{j}] >= 0",
                               argument="lag2", index=j)
                if lag2[j] > 0:
                    continue
                check_argument(lag1[j] > 0, f"if lag3 == 0 and lag2 == 0, lag1[{j}] > 0",
                               argument="lag1", index=j)
            elif lag2 is not None:
                check_argument(lag2[j] >= 0, f"lag2[{j}] >= 0", argument="lag2", index=j)
                if lag2[j] == 0:
                    check_argument(lag1[j] > 0, f"if lag2 == 0, lag1[{j}] > 0",
                                   argument="lag1", index=j)
            else:
                check_argument(lag1[j] > 0, f"lag1[{j}] > 0", argument="lag1", index=j)

        object.__setattr__(self, "lag1", _readonly(lag1))
        object.__setattr__(self, "a", _readonly(a))
        object.__setattr__(self, "lag2", None if lag2 is None else _readonly(lag2))
        object.__setattr__(self, "lag3", None if lag3 is None else _readonly(lag3))

        object.__setattr__(self, "m", len(a))
        object.__setattr__(self, "a0", float(a[0]))
        object.__setattr__(self, "a0_inv", 1.0 / float(a[0]))

        extrema = [lag_extrema(lag1),
                   None if lag2 is None else lag_extrema(lag2),
                   None if lag3 is None else lag_extrema(lag3)]
        for d, ext in enumerate(extrema, start=1):
            object.__setattr__(self, f"min{d}", None if ext is None else ext[0])
            object.__setattr__(self, f"max{d}", None if ext is None else ext[1])

        logger.debug(f"Constructed {self.dimensions}-D minimum-phase filter with {self.m} coefficients")

    @property
    def dimensions(self) -> int:
        """Number of lag sequences supplied at construction."""
        if self.lag3 is not None:
            return 3
        if self.lag2 is not None:
            return 2
        return 1

    def lag_vectors(self) -> np.ndarray:
        """
        Return the lag vectors as an (m, dimensions) int64 array.

        Row j is (lag1[j], lag2[j], lag3[j]) truncated to the supplied
        dimensions.
        """
        lags = [self.lag1, self.lag2, self.lag3][:self.dimensions]
        return np.stack(lags, axis=1)

    def with_coefficients(self, a: CoefficientSequence) -> "MinimumPhaseFilter":
        """Return a new filter with the same lag table and coefficients a."""
        return MinimumPhaseFilter(self.lag1, a, self.lag2, self.lag3)

    def to_dict(self) -> Dict[str, Any]:
        """Convert the filter to a dictionary of plain Python lists."""
        result = {"lag1": self.lag1.tolist(), "a": self.a.tolist()}
        if self.lag2 is not None:
            result["lag2"] = self.lag2.tolist()
        if self.lag3 is not None:
            result["lag3"] = self.lag3.tolist()
        return result

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MinimumPhaseFilter):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def _key(self) -> Tuple:
        return tuple(
            None if v is None else v.tobytes()
            for v in (self.lag1, self.a, self.lag2, self.lag3)
        )

    # Linear operators

    def apply(self, x: FilterArray, y: Optional[np.ndarray] = None) -> np.ndarray:
        """
        Apply this filter.

        Computes y[p] = a0*x[p] + sum_j a[j]*x[p - lag[j]], treating x as zero
        outside its bounds. Rank-1 arrays use lag1 only; rank-2 arrays use
        lag1 and lag2; rank-3 arrays require all three.

        Args:
            x: Input array of rank 1, 2 or 3
            y: Optional output array of the same shape

        Returns:
            np.ndarray: The output array
        """
        return self._run("apply", x, y)

    def apply_transpose(self, x: FilterArray, y: Optional[np.ndarray] = None) -> np.ndarray:
        """
        Apply the transpose of this filter.

        Computes y[p] = a0*x[p] + sum_j a[j]*x[p + lag[j]], processing from
        the high end of the array toward the low end.
        """
        return self._run("apply_transpose", x, y)

    def apply_inverse(self, x: FilterArray, y: Optional[np.ndarray] = None) -> np.ndarray:
        """
        Apply the inverse of this filter.

        Recursive deconvolution y[p] = (x[p] - sum_j a[j]*y[p - lag[j]])/a0
        in increasing helix order. May run in place (y is x).
        """
        return self._run("apply_inverse", x, y)

    def apply_inverse_transpose(self, x: FilterArray, y: Optional[np.ndarray] = None) -> np.ndarray:
        """
        Apply the inverse transpose of this filter.

        Recursive deconvolution y[p] = (x[p] - sum_j a[j]*y[p + lag[j]])/a0
        in decreasing helix order. May run in place (y is x).
        """
        return self._run("apply_inverse_transpose", x, y)

    def impulse_response(self, shape: Shape) -> np.ndarray:
        """
        Response of the inverse filter to a unit impulse at the origin.

        Args:
            shape: Shape of the response, of rank 1, 2 or 3

        Returns:
            np.ndarray: apply_inverse of the impulse
        """
        x = impulse(shape)
        return self.apply_inverse(x, x)

    def _run(self, operation: str, x: FilterArray, y: Optional[np.ndarray]) -> np.ndarray:
        transpose, inverse = _OPERATIONS[operation]

        x_in = x
        x = validate_filter_array(x, "x")
        ndim = x.ndim
        check_state(self.lag1 is not None, "lag1 has been specified", operation)
        if ndim >= 2:
            check_state(self.lag2 is not None, "lag2 has been specified", operation)
        if ndim == 3:
            check_state(self.lag3 is not None, "lag3 has been specified", operation)

        if y is None:
            y = zeros(x.shape)
        else:
            y = validate_output_array(y, x.shape, "y")
            in_place = inverse and y is x_in
            if not in_place and np.shares_memory(x, y):
                x = x.copy()
        if not x.flags.writeable:
            # The kernel takes input and output arrays of one array type
            x = x.copy()

        zero = np.zeros(self.m, dtype=np.int64)
        lag2 = self.lag2 if ndim >= 2 else zero
        lag3 = self.lag3 if ndim == 3 else zero
        extrema = (
            (self.min1, self.max1),
            (self.min2, self.max2) if ndim >= 2 else (0, 0),
            (self.min3, self.max3) if ndim == 3 else (0, 0),
        )

        xv = as_volume(x)
        yv = as_volume(y)
        bounds = interior_bounds(yv.shape, extrema, transpose)
        helix_filter(self.lag1, lag2, lag3, self.a, bounds, xv, yv, transpose, inverse)
        return y
