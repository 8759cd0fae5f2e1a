"""
NumPy realization of the numeric element contract.

This module is the boundary between the NumPy-free domain contract
(`kranium.domain.Numeric`) and the concrete NumPy buffers used by the CPU
backends. It validates dtypes, synthesizes the "zero" and "one" element
values, converts scalars written into tensors, and coerces array-like
inputs into flat buffers.
"""

from __future__ import annotations

from typing import Any, Optional

import numpy as np

from ..domain._errors import ElementValueError, InvalidShapeError, UnsupportedDTypeError
from ..domain._numeric import Numeric
from ._config import default_dtype_name

# signed int, unsigned int, floating point
_NUMERIC_KINDS = ("i", "u", "f")


def as_numeric_dtype(dtype: Optional[Any] = None) -> np.dtype:
    """
    Normalize ``dtype`` to a NumPy dtype satisfying the element contract.

    Parameters
    ----------
    dtype : Any, optional
        Anything accepted by ``np.dtype`` (dtype objects, scalar types,
        strings). ``None`` selects the configured default dtype.

    Returns
    -------
    np.dtype
        A signed integer, unsigned integer, or floating point dtype.

    Raises
    ------
    UnsupportedDTypeError
        If ``dtype`` cannot be interpreted or is not numeric
        (bool, complex, object, string, datetime, ...).
    """
    if dtype is None:
        dtype = default_dtype_name()
    try:
        dt = np.dtype(dtype)
    except TypeError as e:
        raise UnsupportedDTypeError(dtype) from e
    if dt.kind not in _NUMERIC_KINDS:
        raise UnsupportedDTypeError(dt)
    return dt


def zero_of(dtype: Any) -> np.generic:
    """Return the default ("zero") element of ``dtype``."""
    dt = as_numeric_dtype(dtype)
    return dt.type(0)


def one_of(dtype: Any) -> np.generic:
    """Return the "one" element of ``dtype``, built from an 8-bit unsigned literal."""
    dt = as_numeric_dtype(dtype)
    return dt.type(np.uint8(1))


def is_integer_dtype(dtype: Any) -> bool:
    return np.dtype(dtype).kind in ("i", "u")


def as_element(value: Any, dtype: Any) -> np.generic:
    """
    Convert ``value`` to a scalar of ``dtype`` without silent value changes.

    Parameters
    ----------
    value : Any
        Python or NumPy number.
    dtype : Any
        Target element dtype.

    Returns
    -------
    numpy.generic
        ``value`` as a ``dtype`` scalar. Floating point targets round to the
        nearest representable value.

    Raises
    ------
    ElementValueError
        If ``value`` is not a number, an integer target cannot hold it
        exactly, or a finite value overflows a floating point target.
    """
    dt = as_numeric_dtype(dtype)
    if isinstance(value, (str, bytes, complex, np.complexfloating)) or not isinstance(
        value, Numeric
    ):
        raise ElementValueError(value, dt)
    try:
        with np.errstate(over="ignore", invalid="ignore"):
            cast = dt.type(value)
    except (TypeError, ValueError, OverflowError) as e:
        raise ElementValueError(value, dt) from e

    if is_integer_dtype(dt):
        if not bool(cast == value):
            raise ElementValueError(value, dt)
    elif np.isinf(cast) and not np.isinf(value):
        raise ElementValueError(value, dt)
    return cast


def as_buffer(values: Any, dtype: Optional[Any] = None, *, copy: bool = False) -> np.ndarray:
    """
    Coerce ``values`` into a flat, C-contiguous NumPy buffer.

    Parameters
    ----------
    values : Any
        Array-like input. Must be one-dimensional.
    dtype : Any, optional
        Target dtype. If None, the dtype inferred by NumPy is kept (and
        validated).
    copy : bool, optional
        Force a copy even when ``values`` is already a compatible buffer.

    Returns
    -------
    np.ndarray
        One-dimensional buffer.

    Raises
    ------
    InvalidShapeError
        If ``values`` is not one-dimensional.
    UnsupportedDTypeError
        If the resulting dtype is not numeric.
    """
    if dtype is not None:
        dt = as_numeric_dtype(dtype)
        arr = np.array(values, dtype=dt, copy=True) if copy else np.asarray(values, dtype=dt)
    else:
        arr = np.array(values, copy=True) if copy else np.asarray(values)
        as_numeric_dtype(arr.dtype)

    if arr.ndim != 1:
        raise InvalidShapeError(arr.shape, "expected a flat one-dimensional buffer")
    return np.ascontiguousarray(arr)
