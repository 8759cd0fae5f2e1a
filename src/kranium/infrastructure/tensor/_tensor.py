"""
Concrete Tensor implementation.

This module provides `Tensor`, the concrete implementation of the
domain-level `ITensor` protocol. A tensor owns:

- a flat, row-major NumPy buffer (exclusively; no two tensors share one),
- its shape and the row-major strides derived from it,
- a backend value that performs its numeric work.

Design notes
------------
- Shape-dependent preconditions are checked here; numeric kernels live in
  the backend. The tensor forwards raw buffers and shape metadata and wraps
  the returned buffer.
- Every derived tensor (operation results, reshapes, transposes, clones)
  receives a *copy* of the backend value, never a shared reference.
- Element values may be changed in place through `set` / `__setitem__`;
  shape is immutable.
"""

from __future__ import annotations

import copy
from typing import Any, Optional, Sequence

import numpy as np

from ...domain._backend import IBackend
from ...domain._errors import DataLengthError
from ...domain._tensor import ITensor
from .._dtypes import as_buffer, as_numeric_dtype
from .._shape import compute_strides, normalize_shape, shape_size
from ..backend._registry import get_backend
from ._arithmetic import TensorMixinArithmetic
from ._shape_and_indexing import TensorShapeAndIndexingMixin


class Tensor(TensorMixinArithmetic, TensorShapeAndIndexingMixin, ITensor):
    """
    N-dimensional array over a pluggable compute backend.

    Parameters
    ----------
    shape : Sequence[int]
        Tensor shape. Dimensions must be non-negative ints; ``()`` is a 0-d
        tensor holding one element.
    backend : IBackend, optional
        Compute backend. Defaults to the backend named by ``KRANIUM_BACKEND``
        (the sequential `CpuBackend` unless configured otherwise).
    dtype : Any, optional
        Element dtype; integer or floating point. Defaults to float32.

    Notes
    -----
    The constructor allocates storage through ``backend.allocate`` (elements
    hold the dtype's default value). Use `zeros`, `ones`, `from_data` or
    `from_numpy` for the other construction paths.
    """

    def __init__(
        self,
        shape: Sequence[int],
        backend: Optional[IBackend] = None,
        *,
        dtype: Any = None,
    ) -> None:
        backend = backend if backend is not None else get_backend()
        shape = normalize_shape(shape)
        self._init_storage(backend.allocate(shape, as_numeric_dtype(dtype)), shape, backend)

    def _init_storage(self, buffer: Any, shape: tuple[int, ...], backend: IBackend) -> None:
        data = as_buffer(buffer)
        expected = shape_size(shape)
        if data.size != expected:
            raise DataLengthError(int(data.size), expected, shape)
        self._data = data
        self._shape = shape
        self._strides = compute_strides(shape)
        self._backend = backend

    @classmethod
    def _wrap(cls, buffer: Any, shape: tuple[int, ...], backend: IBackend) -> "Tensor":
        """
        Build a tensor around ``buffer`` without copying it (bypasses
        ``__init__``). The caller hands over ownership of ``buffer``.
        """
        obj = cls.__new__(cls)
        obj._init_storage(buffer, shape, backend)
        return obj

    def _derive(self, buffer: Any, shape: Sequence[int]) -> "Tensor":
        """Wrap a freshly produced buffer with a copy of this tensor's backend."""
        return type(self)._wrap(buffer, tuple(shape), copy.copy(self._backend))

    # ----------------------------
    # Factories
    # ----------------------------
    @classmethod
    def zeros(
        cls, shape: Sequence[int], backend: Optional[IBackend] = None, *, dtype: Any = None
    ) -> "Tensor":
        """
        Create a tensor filled with zeros.

        Returns
        -------
        Tensor
            Tensor whose buffer comes from ``backend.zeros``.
        """
        backend = backend if backend is not None else get_backend()
        shape = normalize_shape(shape)
        return cls._wrap(backend.zeros(shape, as_numeric_dtype(dtype)), shape, backend)

    @classmethod
    def ones(
        cls, shape: Sequence[int], backend: Optional[IBackend] = None, *, dtype: Any = None
    ) -> "Tensor":
        """
        Create a tensor filled with ones.

        Returns
        -------
        Tensor
            Tensor whose buffer comes from ``backend.ones``.
        """
        backend = backend if backend is not None else get_backend()
        shape = normalize_shape(shape)
        return cls._wrap(backend.ones(shape, as_numeric_dtype(dtype)), shape, backend)

    @classmethod
    def from_data(
        cls,
        data: Any,
        shape: Sequence[int],
        backend: Optional[IBackend] = None,
        *,
        dtype: Any = None,
    ) -> "Tensor":
        """
        Create a tensor from an externally supplied flat element sequence.

        Parameters
        ----------
        data : Any
            One-dimensional array-like in row-major order. It is copied.
        shape : Sequence[int]
            Target shape; ``product(shape)`` must equal ``len(data)``.
        backend : IBackend, optional
            Compute backend (configured default if omitted).
        dtype : Any, optional
            Element dtype. If omitted, the dtype NumPy infers for ``data`` is
            used (e.g., int64 for a list of Python ints).

        Raises
        ------
        DataLengthError
            If the data length does not match the shape.
        InvalidShapeError
            If ``data`` is not one-dimensional or ``shape`` is invalid.
        UnsupportedDTypeError
            If the element dtype is not integer or floating point.
        """
        backend = backend if backend is not None else get_backend()
        shape = normalize_shape(shape)
        return cls._wrap(as_buffer(data, dtype, copy=True), shape, backend)

    @classmethod
    def from_numpy(
        cls, arr: Any, backend: Optional[IBackend] = None, *, dtype: Any = None
    ) -> "Tensor":
        """
        Create a tensor from an n-dimensional array, keeping its shape.

        The array is copied in row-major (C) order.
        """
        arr = np.asarray(arr)
        flat = arr.reshape(-1, order="C")
        return cls.from_data(flat, arr.shape, backend, dtype=dtype)

    # ----------------------------
    # Metadata
    # ----------------------------
    @staticmethod
    def compute_strides(shape: Sequence[int]) -> tuple[int, ...]:
        """Row-major strides for ``shape``; see `kranium.compute_strides`."""
        return compute_strides(normalize_shape(shape))

    @property
    def shape(self) -> tuple[int, ...]:
        return self._shape

    @property
    def strides(self) -> tuple[int, ...]:
        return self._strides

    @property
    def ndim(self) -> int:
        return len(self._shape)

    @property
    def size(self) -> int:
        return int(self._data.size)

    @property
    def dtype(self) -> np.dtype:
        return self._data.dtype

    @property
    def backend(self) -> IBackend:
        return self._backend

    @property
    def data(self) -> np.ndarray:
        """
        Read-only flat view of the backing buffer.

        Returns
        -------
        np.ndarray
            One-dimensional view; writing through it raises ``ValueError``.
            Use `set` or `data_mut` to modify elements.
        """
        view = self._data.view()
        view.flags.writeable = False
        return view

    def data_mut(self) -> np.ndarray:
        """
        Writable flat view of the backing buffer.

        Writes through the returned view change this tensor's elements. The
        view must not be used to resize the buffer.
        """
        return self._data.view()

    # ----------------------------
    # Copies and host interop
    # ----------------------------
    def clone(self) -> "Tensor":
        """Return an independent copy (data, shape, and a copy of the backend)."""
        return self._derive(self._data.copy(), self._shape)

    def __copy__(self) -> "Tensor":
        return self.clone()

    def __deepcopy__(self, memo: dict) -> "Tensor":
        return self.clone()

    def to_numpy(self) -> np.ndarray:
        """
        Return a copy of the tensor as an ndarray shaped like the tensor.
        """
        return self._data.reshape(self._shape).copy()

    def tolist(self) -> list[Any]:
        """Flat row-major element list."""
        return self._data.tolist()

    def equal(self, other: Any) -> bool:
        """
        Exact equality of shape, dtype, and every element.

        NaN elements never compare equal.
        """
        if not isinstance(other, Tensor):
            return False
        return (
            self._shape == other._shape
            and self.dtype == other.dtype
            and bool(np.array_equal(self._data, other._data))
        )

    def __len__(self) -> int:
        if not self._shape:
            raise TypeError("len() of a 0-d tensor")
        return self._shape[0]

    def __repr__(self) -> str:
        return (
            f"Tensor(shape={self._shape}, dtype={self.dtype}, "
            f"backend={getattr(self._backend, 'name', type(self._backend).__name__)}, "
            f"data={self._data.tolist()})"
        )
