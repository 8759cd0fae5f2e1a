"""
Data-parallel CPU backend.

`ParallelCpuBackend` implements the same contract as `CpuBackend` but fans
`matmul` and large elementwise operations out over a shared thread pool:

- `matmul` splits the output rows into contiguous row ranges, one task per
  range. Each task reads the two immutable inputs and writes only its own
  rows of the output buffer.
- Elementwise ops split the flat index range into contiguous chunks once the
  buffer holds at least `min_parallel_size` elements.

Tasks run the same range kernels as the sequential backend, so the output is
bit-identical to `CpuBackend` for identical inputs. The caller blocks until
all tasks have joined; there is no cancellation.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import partial
from typing import Any, ClassVar, Optional, Sequence

import numpy as np

from ...domain._backend import BackendKind
from .._config import num_threads
from ._kernels import (
    binary_range,
    fill_ones,
    fill_zeros,
    matmul_rows,
    prepare_binary,
    prepare_matmul,
)
from ._worker_pool import partition, run_ranges

DEFAULT_MIN_PARALLEL_SIZE = 4096


@dataclass(frozen=True)
class ParallelCpuBackend:
    """
    Thread-parallel NumPy CPU backend.

    Parameters
    ----------
    num_workers : Optional[int], optional
        Worker count. ``None`` uses ``KRANIUM_NUM_THREADS`` or, if unset, the
        number of available CPUs.
    min_parallel_size : int, optional
        Elementwise buffers shorter than this run inline on the caller's
        thread. Defaults to 4096.

    Notes
    -----
    Allocation is not worth distributing; `allocate` returns the same
    full-length default-filled buffer as `CpuBackend.allocate`.
    """

    name: ClassVar[str] = BackendKind.CPU_PARALLEL.value

    num_workers: Optional[int] = None
    min_parallel_size: int = DEFAULT_MIN_PARALLEL_SIZE

    def __post_init__(self) -> None:
        if self.num_workers is not None and self.num_workers <= 0:
            raise ValueError(
                f"num_workers must be a positive integer or None, got {self.num_workers}"
            )
        if self.min_parallel_size < 0:
            raise ValueError(
                f"min_parallel_size must be non-negative, got {self.min_parallel_size}"
            )

    @property
    def workers(self) -> int:
        """Effective worker count."""
        return self.num_workers if self.num_workers is not None else num_threads()

    def allocate(self, shape: Sequence[int], dtype: Optional[Any] = None) -> np.ndarray:
        return fill_zeros(shape, dtype)

    def zeros(self, shape: Sequence[int], dtype: Optional[Any] = None) -> np.ndarray:
        return fill_zeros(shape, dtype)

    def ones(self, shape: Sequence[int], dtype: Optional[Any] = None) -> np.ndarray:
        return fill_ones(shape, dtype)

    def _binary(self, op: str, a: Any, b: Any) -> np.ndarray:
        a_buf, b_buf, out = prepare_binary(op, a, b)
        if out.size < self.min_parallel_size:
            binary_range(op, a_buf, b_buf, out, 0, out.size)
            return out

        workers = self.workers
        run_ranges(
            partial(binary_range, op, a_buf, b_buf, out),
            partition(out.size, workers),
            workers,
        )
        return out

    def add(self, a: Any, b: Any) -> np.ndarray:
        return self._binary("add", a, b)

    def sub(self, a: Any, b: Any) -> np.ndarray:
        return self._binary("sub", a, b)

    def mul(self, a: Any, b: Any) -> np.ndarray:
        return self._binary("mul", a, b)

    def div(self, a: Any, b: Any) -> np.ndarray:
        """Elementwise division with the same dtype rules as `CpuBackend.div`."""
        return self._binary("div", a, b)

    def matmul(
        self,
        a: Any,
        a_shape: Sequence[int],
        b: Any,
        b_shape: Sequence[int],
    ) -> np.ndarray:
        """
        Row-parallel matrix product of ``a`` (m x k) and ``b`` (k x n).

        Raises
        ------
        MatmulShapeError
            If either shape is not 2D or ``a_shape[1] != b_shape[0]``.
        """
        a_buf, b_buf, out, m, k, n = prepare_matmul(a, a_shape, b, b_shape)
        workers = self.workers
        run_ranges(
            partial(matmul_rows, a_buf, b_buf, out, k, n),
            partition(m, workers),
            workers,
        )
        return out
