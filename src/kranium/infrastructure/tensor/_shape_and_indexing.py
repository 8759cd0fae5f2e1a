"""
Tensor shape, indexing, and structural ops mixin.

This module defines `TensorShapeAndIndexingMixin`, which implements the
index arithmetic and the shape-transforming methods of the concrete Tensor.

Design notes
------------
- The mixin does not import `Tensor`; new tensors are built through the host
  class's ``_derive`` so subclasses keep their own type.
- `reshape` and `transpose` always materialize a fresh buffer. Tensors never
  share storage, so no view can be invalidated by a later `set`.
"""

from __future__ import annotations

import operator
from typing import Any, Sequence

import numpy as np

from ...domain._errors import (
    IndexCountError,
    IndexOutOfBoundsError,
    ReshapeError,
    TransposeError,
)
from .._dtypes import as_element
from .._shape import normalize_shape, shape_size


class TensorShapeAndIndexingMixin:
    """
    Shape and indexing operations for the concrete Tensor implementation.

    Notes
    -----
    Methods assume the host class provides ``shape``, ``strides``, ``ndim``,
    ``size``, ``_data`` and ``_derive(buffer, shape)``.
    """

    # ----------------------------
    # Index arithmetic
    # ----------------------------
    def get_flat_index(self, indices: Sequence[int]) -> int:
        """
        Map a multi-index to its offset in the flat row-major buffer.

        Parameters
        ----------
        indices : Sequence[int]
            One index per dimension. A bare int is accepted for 1D tensors.

        Returns
        -------
        int
            ``sum(indices[i] * strides[i])``.

        Raises
        ------
        IndexCountError
            If ``len(indices) != ndim``.
        IndexOutOfBoundsError
            If some ``indices[i]`` is negative or ``>= shape[i]``.
        TypeError
            If an index is a bool.
        """
        if isinstance(indices, (int, np.integer, np.bool_)):
            indices = (indices,)
        if any(isinstance(i, (bool, np.bool_)) for i in indices):
            raise TypeError("Tensor indices must be integers, not bool")
        idx = tuple(operator.index(i) for i in indices)

        if len(idx) != self.ndim:
            raise IndexCountError(len(idx), self.ndim)

        for dim, (i, size) in enumerate(zip(idx, self.shape)):
            if i < 0 or i >= size:
                raise IndexOutOfBoundsError(i, dim, size)

        flat = 0
        for i, stride in zip(idx, self.strides):
            flat += i * stride
        return flat

    def get(self, indices: Sequence[int]) -> Any:
        """
        Return the element at ``indices``.

        Returns
        -------
        numpy.generic
            Scalar of the tensor's dtype.
        """
        return self._data[self.get_flat_index(indices)]

    def set(self, indices: Sequence[int], value: Any) -> None:
        """
        Overwrite the element at ``indices`` in place.

        ``value`` is converted to the tensor's dtype first; a value the dtype
        cannot represent raises `ElementValueError` and the tensor is left
        unchanged. All other elements are left untouched.
        """
        flat = self.get_flat_index(indices)
        self._data[flat] = as_element(value, self._data.dtype)

    def __getitem__(self, key: Any) -> Any:
        """Scalar access sugar: ``t[i, j]`` is ``t.get((i, j))``."""
        if isinstance(key, slice) or (
            isinstance(key, tuple) and any(isinstance(k, slice) for k in key)
        ):
            raise TypeError("Tensor indexing supports integer indices only")
        return self.get(key)

    def __setitem__(self, key: Any, value: Any) -> None:
        """Scalar assignment sugar: ``t[i, j] = v`` is ``t.set((i, j), v)``."""
        if isinstance(key, slice) or (
            isinstance(key, tuple) and any(isinstance(k, slice) for k in key)
        ):
            raise TypeError("Tensor indexing supports integer indices only")
        self.set(key, value)

    # ----------------------------
    # Structural transforms
    # ----------------------------
    def reshape(self, new_shape: Sequence[int]):
        """
        Return a copy of this tensor with shape ``new_shape``.

        Element order is preserved; strides are recomputed for the new shape.

        Raises
        ------
        ReshapeError
            If ``product(new_shape) != size``.
        """
        new_shape = normalize_shape(new_shape)
        new_size = shape_size(new_shape)
        if new_size != self.size:
            raise ReshapeError(self.size, new_shape, new_size)
        return self._derive(self._data.copy(), new_shape)

    def transpose(self):
        """
        2D transpose: ``out[j, i] = self[i, j]``.

        Returns
        -------
        Tensor
            Tensor of shape ``(cols, rows)`` backed by a newly materialized
            buffer.

        Raises
        ------
        TransposeError
            If the tensor is not 2D.
        """
        if self.ndim != 2:
            raise TransposeError(self.shape)
        r, c = self.shape
        out = self._data.reshape(r, c).T.copy(order="C").reshape(-1)
        return self._derive(out, (c, r))

    @property
    def T(self):
        """
        Convenience property for 2D transpose.
        """
        return self.transpose()
