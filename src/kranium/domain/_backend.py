"""
Backend abstraction contracts for kranium.

A backend is a *stateless compute policy*: it owns no data, carries no
mutable state, and implements the numeric kernels a tensor delegates to.
Every operation takes flat buffers plus explicit shape metadata and returns a
newly allocated buffer; inputs are never mutated.

This module defines:

- `BackendKind`: the closed set of built-in backend variants
- `IBackend`: the duck-typed contract any backend (built-in or third-party,
  e.g. a future accelerator backend) must satisfy

Design notes
------------
- Uses `typing.Protocol` and `@runtime_checkable` so tensors accept any object
  with the right surface instead of requiring a common base class.
- Backends are injected into tensors as values and copied onto every derived
  tensor. Implementations should therefore be cheap to copy (e.g., frozen
  dataclasses).
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional, Protocol, Sequence, runtime_checkable

from ._buffer import BufferLike


class BackendKind(Enum):
    """
    Enumeration of the built-in backend variants.

    Attributes
    ----------
    CPU : BackendKind
        Sequential single-threaded reference backend.
    CPU_PARALLEL : BackendKind
        Data-parallel CPU backend backed by a shared worker pool.
    """

    CPU = "cpu"
    CPU_PARALLEL = "cpu_parallel"


@runtime_checkable
class IBackend(Protocol):
    """
    Duck-typed backend contract.

    Notes
    -----
    - `dtype=None` means "the configured default element dtype".
    - Elementwise operations require equal-length inputs and raise
      `LengthMismatchError` otherwise.
    - `matmul` requires two 2D shapes with matching inner dimensions and
      raises `MatmulShapeError` otherwise. Each output cell is accumulated
      from zero over the contraction dimension in ascending order; every
      implementation must keep that order so results agree bit-for-bit.
    """

    @property
    def name(self) -> str:
        """Short identifier of the backend (e.g., "cpu")."""
        ...

    def allocate(self, shape: Sequence[int], dtype: Optional[Any] = None) -> BufferLike:
        """
        Return a buffer of exactly ``product(shape)`` elements.

        Element values are the dtype's default (zero).
        """
        ...

    def zeros(self, shape: Sequence[int], dtype: Optional[Any] = None) -> BufferLike:
        """Return a buffer of ``product(shape)`` zeros."""
        ...

    def ones(self, shape: Sequence[int], dtype: Optional[Any] = None) -> BufferLike:
        """Return a buffer of ``product(shape)`` ones."""
        ...

    def add(self, a: BufferLike, b: BufferLike) -> BufferLike:
        """Elementwise ``a + b``."""
        ...

    def sub(self, a: BufferLike, b: BufferLike) -> BufferLike:
        """Elementwise ``a - b``."""
        ...

    def mul(self, a: BufferLike, b: BufferLike) -> BufferLike:
        """Elementwise ``a * b``."""
        ...

    def div(self, a: BufferLike, b: BufferLike) -> BufferLike:
        """Elementwise ``a / b``."""
        ...

    def matmul(
        self,
        a: BufferLike,
        a_shape: Sequence[int],
        b: BufferLike,
        b_shape: Sequence[int],
    ) -> BufferLike:
        """
        Dense row-major matrix product of ``a`` (m x k) and ``b`` (k x n).

        Returns
        -------
        BufferLike
            Buffer of ``m * n`` elements in row-major order.
        """
        ...
