"""
Sequential CPU backend.

`CpuBackend` is the single-threaded reference implementation of the backend
contract. Every call is synchronous and runs on the caller's thread.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, Optional, Sequence

import numpy as np

from ...domain._backend import BackendKind
from ._kernels import (
    binary_range,
    fill_ones,
    fill_zeros,
    matmul_rows,
    prepare_binary,
    prepare_matmul,
)


@dataclass(frozen=True)
class CpuBackend:
    """
    Sequential NumPy CPU backend.

    Notes
    -----
    - Frozen and field-less: every instance is equal to every other one and
      copying is free.
    - Elementwise ops apply one NumPy ufunc over the whole buffer.
    - `matmul` walks output rows in order; inside a row each cell accumulates
      over the contraction dimension in ascending order.
    """

    name: ClassVar[str] = BackendKind.CPU.value

    def allocate(self, shape: Sequence[int], dtype: Optional[Any] = None) -> np.ndarray:
        """
        Allocate a buffer for ``shape``.

        Returns
        -------
        np.ndarray
            ``product(shape)`` elements, all set to the dtype's default value.
        """
        return fill_zeros(shape, dtype)

    def zeros(self, shape: Sequence[int], dtype: Optional[Any] = None) -> np.ndarray:
        return fill_zeros(shape, dtype)

    def ones(self, shape: Sequence[int], dtype: Optional[Any] = None) -> np.ndarray:
        return fill_ones(shape, dtype)

    def _binary(self, op: str, a: Any, b: Any) -> np.ndarray:
        a_buf, b_buf, out = prepare_binary(op, a, b)
        binary_range(op, a_buf, b_buf, out, 0, out.size)
        return out

    def add(self, a: Any, b: Any) -> np.ndarray:
        return self._binary("add", a, b)

    def sub(self, a: Any, b: Any) -> np.ndarray:
        return self._binary("sub", a, b)

    def mul(self, a: Any, b: Any) -> np.ndarray:
        return self._binary("mul", a, b)

    def div(self, a: Any, b: Any) -> np.ndarray:
        """
        Elementwise division.

        Floating point dtypes follow IEEE semantics (``x / 0`` gives ``inf`` or
        ``nan``). Integer dtypes truncate toward zero and reject zero divisors
        with `DivisionByZeroError`.
        """
        return self._binary("div", a, b)

    def matmul(
        self,
        a: Any,
        a_shape: Sequence[int],
        b: Any,
        b_shape: Sequence[int],
    ) -> np.ndarray:
        """
        Row-major matrix product of ``a`` (m x k) and ``b`` (k x n).

        Raises
        ------
        MatmulShapeError
            If either shape is not 2D or ``a_shape[1] != b_shape[0]``.
        """
        a_buf, b_buf, out, m, k, n = prepare_matmul(a, a_shape, b, b_shape)
        matmul_rows(a_buf, b_buf, out, k, n, 0, m)
        return out
