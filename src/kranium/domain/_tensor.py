"""
Tensor interface definitions.

This module defines the domain-level interface for tensor-like objects using
structural typing. The interface captures the public surface higher-level
numeric pipelines rely on: shape metadata, scalar access, structural
transforms, and backend-delegated arithmetic.

Notes
-----
Every method except `set` returns a new tensor; tensors never share their
backing buffers.
"""

from __future__ import annotations

from typing import Any, Protocol, Sequence, runtime_checkable

from typing_extensions import Self

from ._backend import IBackend
from ._buffer import BufferLike


@runtime_checkable
class ITensor(Protocol):
    """
    Tensor interface.

    An `ITensor` is an n-dimensional array stored in a single flat row-major
    buffer, together with its shape, row-major strides, and the backend that
    performs its numeric work.
    """

    # ---------------------------------------------------------------------
    # Metadata
    # ---------------------------------------------------------------------
    @property
    def shape(self) -> tuple[int, ...]:
        """
        Return the shape of the tensor.

        Returns
        -------
        tuple[int, ...]
            Per-dimension sizes.
        """
        ...

    @property
    def strides(self) -> tuple[int, ...]:
        """
        Return the row-major strides of the tensor, in elements.

        Returns
        -------
        tuple[int, ...]
            Per-dimension step sizes within the flat buffer.
        """
        ...

    @property
    def ndim(self) -> int:
        """Number of dimensions."""
        ...

    @property
    def size(self) -> int:
        """Number of elements."""
        ...

    @property
    def dtype(self) -> Any:
        """Element dtype."""
        ...

    @property
    def backend(self) -> IBackend:
        """Backend used for numeric work."""
        ...

    @property
    def data(self) -> BufferLike:
        """Read-only flat view of the backing buffer."""
        ...

    # ---------------------------------------------------------------------
    # Scalar access
    # ---------------------------------------------------------------------
    def get_flat_index(self, indices: Sequence[int]) -> int:
        """
        Map a multi-index to an offset in the flat buffer.

        Raises
        ------
        IndexCountError
            If ``len(indices) != ndim``.
        IndexOutOfBoundsError
            If any index is outside its dimension.
        """
        ...

    def get(self, indices: Sequence[int]) -> Any:
        """Return the element at ``indices``."""
        ...

    def set(self, indices: Sequence[int], value: Any) -> None:
        """Overwrite the element at ``indices`` in place."""
        ...

    # ---------------------------------------------------------------------
    # Structural transforms
    # ---------------------------------------------------------------------
    def reshape(self, new_shape: Sequence[int]) -> Self:
        """Return a copy of this tensor with a new, size-compatible shape."""
        ...

    def transpose(self) -> Self:
        """Return a materialized transpose of a 2D tensor."""
        ...

    def clone(self) -> Self:
        """Return an independent copy of this tensor."""
        ...

    # ---------------------------------------------------------------------
    # Arithmetic
    # ---------------------------------------------------------------------
    def add(self, other: Self) -> Self: ...

    def sub(self, other: Self) -> Self: ...

    def mul(self, other: Self) -> Self: ...

    def div(self, other: Self) -> Self: ...

    def matmul(self, other: Self) -> Self: ...

    def __add__(self, other: Self) -> Self: ...

    def __sub__(self, other: Self) -> Self: ...

    def __mul__(self, other: Self) -> Self: ...

    def __truediv__(self, other: Self) -> Self: ...

    def __matmul__(self, other: Self) -> Self: ...

    # ---------------------------------------------------------------------
    # Host interop
    # ---------------------------------------------------------------------
    def to_numpy(self) -> Any:
        """Return a shaped copy of the tensor as a backend-native array."""
        ...

    def tolist(self) -> list[Any]:
        """Return the flat element sequence as a Python list."""
        ...
