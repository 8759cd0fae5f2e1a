"""
Shape and stride arithmetic shared by tensors and backends.
"""

from __future__ import annotations

import math
import operator
from typing import Any, Sequence

from ..domain._errors import InvalidShapeError


def normalize_shape(shape: Any) -> tuple[int, ...]:
    """
    Validate ``shape`` and return it as a tuple of non-negative ints.

    A bare integer is accepted as a 1D shape.

    Raises
    ------
    InvalidShapeError
        If any dimension is negative or not an integer.
    """
    if isinstance(shape, bool):
        raise InvalidShapeError(shape, "dimensions must be integers")
    try:
        dims = (operator.index(shape),)
    except TypeError:
        try:
            dims = tuple(shape)
        except TypeError as e:
            raise InvalidShapeError(shape, "expected a sequence of integers") from e

    out = []
    for d in dims:
        if isinstance(d, bool):
            raise InvalidShapeError(shape, "dimensions must be integers")
        try:
            d = operator.index(d)
        except TypeError as e:
            raise InvalidShapeError(shape, "dimensions must be integers") from e
        if d < 0:
            raise InvalidShapeError(shape, "dimensions must be non-negative")
        out.append(d)
    return tuple(out)


def shape_size(shape: Sequence[int]) -> int:
    """Number of elements implied by ``shape`` (1 for the empty shape)."""
    return math.prod(shape)


def compute_strides(shape: Sequence[int]) -> tuple[int, ...]:
    """
    Compute row-major strides (in elements) for ``shape``.

    The last stride is 1 and ``strides[i] = strides[i + 1] * shape[i + 1]``.

    Examples
    --------
    >>> compute_strides((2, 3, 4))
    (12, 4, 1)
    >>> compute_strides(())
    ()
    """
    strides = [1] * len(shape)
    for i in range(len(shape) - 2, -1, -1):
        strides[i] = strides[i + 1] * shape[i + 1]
    return tuple(strides)
