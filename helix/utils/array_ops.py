# helix/utils/array_ops.py
"""
Array Operations Module

Pure helper functions over lag sequences and floating-point arrays used by the
filter and factorization modules. None of these functions hold state.

Functions:
    lag_min: Smallest lag in a sequence
    lag_max: Largest lag in a sequence
    lag_extrema: (min, max) of a sequence
    zeros: Zero-filled float64 array of a given shape
    copy_region: Copy a rectangular region between arrays with offsets
    impulse: Zero array with a single unit sample
    as_volume: View a rank 1..3 array as rank 3
"""

import logging
from typing import Optional, Sequence, Union

import numpy as np

from helix.core.exceptions import raise_dimension_error
from helix.core.types import FilterArray, LagExtrema, LagSequence, Offset, Shape, Tensor3D

# Set up module-level logger
logger = logging.getLogger("helix.utils.array_ops")


def lag_min(lags: LagSequence) -> int:
    """
    Return the smallest lag in a non-empty sequence.

    Examples:
        >>> lag_min([0, 1, -2])
        -2
    """
    return int(np.min(np.asarray(lags)))


def lag_max(lags: LagSequence) -> int:
    """
    Return the largest lag in a non-empty sequence.

    Examples:
        >>> lag_max([0, 1, -2])
        1
    """
    return int(np.max(np.asarray(lags)))


def lag_extrema(lags: LagSequence) -> LagExtrema:
    """Return ``(lag_min(lags), lag_max(lags))``."""
    return lag_min(lags), lag_max(lags)


def zeros(shape: Union[int, Shape]) -> np.ndarray:
    """
    Allocate a zero-filled float64 array.

    Args:
        shape: Array shape, or a length for a 1-D array

    Returns:
        New C-contiguous float64 array of zeros
    """
    return np.zeros(shape, dtype=np.float64)


def copy_region(src: np.ndarray,
                dst: np.ndarray,
                shape: Optional[Shape] = None,
                src_offset: Optional[Offset] = None,
                dst_offset: Optional[Offset] = None) -> np.ndarray:
    """
    Copy a rectangular region of src into dst.

    The region has extent ``shape`` (default: all of src beyond src_offset)
    and starts at ``src_offset`` in src and ``dst_offset`` in dst (default:
    the origin). Both arrays must have the same rank.

    Args:
        src: Source array
        dst: Destination array, modified in place
        shape: Extent of the region to copy
        src_offset: Start of the region in src
        dst_offset: Start of the region in dst

    Returns:
        np.ndarray: dst

    Raises:
        DimensionError: If ranks differ or the region falls outside either array

    Examples:
        >>> dst = zeros(5)
        >>> copy_region(np.array([1.0, 2.0]), dst, dst_offset=(2,))
        array([0., 0., 1., 2., 0.])
    """
    src = np.asarray(src)
    ndim = src.ndim

    if dst.ndim != ndim:
        raise_dimension_error(
            f"dst has rank {dst.ndim}, expected rank {ndim} to match src",
            array_name="dst",
            expected_shape=f"rank {ndim}",
            actual_shape=dst.shape
        )

    src_offset = tuple(src_offset) if src_offset is not None else (0,) * ndim
    dst_offset = tuple(dst_offset) if dst_offset is not None else (0,) * ndim
    if shape is None:
        shape = tuple(n - o for n, o in zip(src.shape, src_offset))
    shape = tuple(shape)

    if not (len(shape) == len(src_offset) == len(dst_offset) == ndim):
        raise_dimension_error(
            "shape and offsets must have one entry per dimension",
            array_name="shape",
            expected_shape=f"length {ndim}",
            actual_shape=(len(shape), len(src_offset), len(dst_offset))
        )

    for name, array, offset in (("src", src, src_offset), ("dst", dst, dst_offset)):
        for n, o, extent in zip(array.shape, offset, shape):
            if o < 0 or extent < 0 or o + extent > n:
                raise_dimension_error(
                    f"Region of extent {shape} at offset {offset} falls outside {name}",
                    array_name=name,
                    expected_shape=shape,
                    actual_shape=array.shape
                )

    src_slices = tuple(slice(o, o + n) for o, n in zip(src_offset, shape))
    dst_slices = tuple(slice(o, o + n) for o, n in zip(dst_offset, shape))
    dst[dst_slices] = src[src_slices]
    return dst


def impulse(shape: Union[int, Shape], position: Optional[Sequence[int]] = None) -> np.ndarray:
    """
    Zero array with a single 1 at position (default: the origin).

    Examples:
        >>> impulse(4)
        array([1., 0., 0., 0.])
    """
    x = zeros(shape)
    if position is None:
        position = (0,) * x.ndim
    x[tuple(position)] = 1.0
    return x


def as_volume(x: FilterArray) -> Tensor3D:
    """
    View a rank 1, 2 or 3 array as rank 3 by prepending unit axes.

    An array of shape (n1,) becomes (1, 1, n1) and (n2, n1) becomes
    (1, n2, n1). For a C-contiguous input the result is a view, so writes
    through it reach x.
    """
    if x.ndim > 3:
        raise_dimension_error(
            f"Array must have rank at most 3, got rank {x.ndim}",
            array_name="x",
            expected_shape="rank 1, 2 or 3",
            actual_shape=x.shape
        )
    return x.reshape((1,) * (3 - x.ndim) + x.shape)
