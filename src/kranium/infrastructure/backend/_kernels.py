"""
CPU kernels shared by the sequential and parallel backends.

Each kernel comes in two halves:

- a ``prepare_*`` function that validates operands, coerces them to flat
  buffers of a common dtype, and allocates the output; it raises before any
  arithmetic happens, and
- a range kernel (``binary_range`` / ``matmul_rows``) that fills a disjoint
  slice of the output from read-only inputs.

The sequential backend runs a range kernel once over the whole output; the
parallel backend runs it over contiguous sub-ranges on worker threads. Since
both paths execute the exact same per-element instruction sequence, their
results are bit-identical.
"""

from __future__ import annotations

from typing import Any, Callable, Sequence

import numpy as np

from ...domain._errors import (
    DivisionByZeroError,
    DivisionOverflowError,
    LengthMismatchError,
    MatmulShapeError,
)
from .._dtypes import as_buffer, as_numeric_dtype, is_integer_dtype, one_of
from .._shape import normalize_shape, shape_size


BINARY_OPS = ("add", "sub", "mul", "div")


def fill_zeros(shape: Sequence[int], dtype: Any = None) -> np.ndarray:
    """Flat buffer of ``product(shape)`` default (zero) elements."""
    size = shape_size(normalize_shape(shape))
    return np.zeros(size, dtype=as_numeric_dtype(dtype))


def fill_ones(shape: Sequence[int], dtype: Any = None) -> np.ndarray:
    """Flat buffer of ``product(shape)`` one elements."""
    size = shape_size(normalize_shape(shape))
    dt = as_numeric_dtype(dtype)
    return np.full(size, one_of(dt), dtype=dt)


def _truncating_divide(a: np.ndarray, b: np.ndarray, out: np.ndarray) -> None:
    # integer division rounding toward zero, kept in the integer dtype
    np.floor_divide(a, b, out=out)
    rem = np.remainder(a, b)
    fix = (rem != 0) & ((a < 0) != (b < 0))
    out += fix.astype(out.dtype)


def _true_divide(a: np.ndarray, b: np.ndarray, out: np.ndarray) -> None:
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        np.true_divide(a, b, out=out)


_UFUNC_KERNELS: dict[str, Callable[[np.ndarray, np.ndarray, np.ndarray], Any]] = {
    "add": lambda a, b, out: np.add(a, b, out=out),
    "sub": lambda a, b, out: np.subtract(a, b, out=out),
    "mul": lambda a, b, out: np.multiply(a, b, out=out),
}


def prepare_binary(op: str, a: Any, b: Any) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Validate and coerce the operands of an elementwise operation.

    Parameters
    ----------
    op : str
        One of ``"add"``, ``"sub"``, ``"mul"``, ``"div"``.
    a, b : Any
        Flat array-like operands.

    Returns
    -------
    tuple[np.ndarray, np.ndarray, np.ndarray]
        ``(a, b, out)`` where ``a`` and ``b`` share the promoted dtype and
        ``out`` is an uninitialized buffer of the same length and dtype.

    Raises
    ------
    LengthMismatchError
        If the operands differ in length.
    DivisionByZeroError
        For an integer ``div`` with any zero divisor.
    DivisionOverflowError
        For a signed integer ``div`` of the dtype minimum by -1.
    """
    if op not in BINARY_OPS:
        raise ValueError(f"Unknown elementwise op {op!r}")

    a_buf = as_buffer(a)
    b_buf = as_buffer(b)
    if a_buf.size != b_buf.size:
        raise LengthMismatchError(op, int(a_buf.size), int(b_buf.size))

    dt = as_numeric_dtype(np.result_type(a_buf, b_buf))
    a_buf = a_buf.astype(dt, copy=False)
    b_buf = b_buf.astype(dt, copy=False)

    if op == "div" and is_integer_dtype(dt) and b_buf.size and not np.all(b_buf):
        raise DivisionByZeroError(dt)
    if op == "div" and dt.kind == "i" and a_buf.size:
        if np.any((a_buf == np.iinfo(dt).min) & (b_buf == -1)):
            raise DivisionOverflowError(dt)

    return a_buf, b_buf, np.empty(a_buf.size, dtype=dt)


def binary_range(
    op: str, a: np.ndarray, b: np.ndarray, out: np.ndarray, start: int, stop: int
) -> None:
    """
    Apply ``op`` to ``a[start:stop]`` and ``b[start:stop]`` into
    ``out[start:stop]``.
    """
    if start >= stop:
        return
    sa, sb, so = a[start:stop], b[start:stop], out[start:stop]
    if op == "div":
        if is_integer_dtype(out.dtype):
            _truncating_divide(sa, sb, so)
        else:
            _true_divide(sa, sb, so)
        return
    _UFUNC_KERNELS[op](sa, sb, so)


def prepare_matmul(
    a: Any, a_shape: Sequence[int], b: Any, b_shape: Sequence[int]
) -> tuple[np.ndarray, np.ndarray, np.ndarray, int, int, int]:
    """
    Validate and coerce the operands of a matrix product.

    Returns
    -------
    tuple
        ``(a, b, out, m, k, n)`` with ``out`` zero-initialized with ``m * n``
        elements.

    Raises
    ------
    MatmulShapeError
        If a shape is not 2D, the inner dimensions differ, or a buffer length
        disagrees with its shape.
    """
    a_shape = normalize_shape(a_shape)
    b_shape = normalize_shape(b_shape)

    if len(a_shape) != 2:
        raise MatmulShapeError(
            f"First tensor must be 2D for matrix multiplication, got shape {a_shape}",
            a_shape,
            b_shape,
        )
    if len(b_shape) != 2:
        raise MatmulShapeError(
            f"Second tensor must be 2D for matrix multiplication, got shape {b_shape}",
            a_shape,
            b_shape,
        )
    if a_shape[1] != b_shape[0]:
        raise MatmulShapeError(
            "Inner dimensions must match for matrix multiplication: "
            f"{a_shape[1]} vs {b_shape[0]}",
            a_shape,
            b_shape,
        )

    m, k = a_shape
    n = b_shape[1]

    a_buf = as_buffer(a)
    b_buf = as_buffer(b)
    if a_buf.size != m * k or b_buf.size != k * n:
        raise MatmulShapeError(
            f"Buffer lengths ({a_buf.size}, {b_buf.size}) do not match shapes "
            f"{a_shape} and {b_shape}",
            a_shape,
            b_shape,
        )

    dt = as_numeric_dtype(np.result_type(a_buf, b_buf))
    a_buf = a_buf.astype(dt, copy=False)
    b_buf = b_buf.astype(dt, copy=False)

    return a_buf, b_buf, np.zeros(m * n, dtype=dt), m, k, n


def matmul_rows(
    a: np.ndarray,
    b: np.ndarray,
    out: np.ndarray,
    k: int,
    n: int,
    row_start: int,
    row_stop: int,
) -> None:
    """
    Fill output rows ``[row_start, row_stop)`` of a row-major matrix product.

    For every output cell ``(i, j)`` in the range the accumulator starts at
    zero and adds ``a[i, l] * b[l, j]`` for ``l = 0, 1, ..., k - 1`` in that
    order. A row is processed as a vector of ``n`` independent accumulators,
    which performs the same rounding steps per cell as a scalar loop.
    """
    if n == 0:
        return
    acc = np.empty(n, dtype=out.dtype)
    tmp = np.empty(n, dtype=out.dtype)
    for i in range(row_start, row_stop):
        a_row = a[i * k : (i + 1) * k]
        acc.fill(0)
        for l in range(k):
            np.multiply(a_row[l], b[l * n : (l + 1) * n], out=tmp)
            np.add(acc, tmp, out=acc)
        out[i * n : (i + 1) * n] = acc
