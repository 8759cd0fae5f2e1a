"""
Precondition errors for kranium.

Every shape, length, index, or dtype violation in the library is a programmer
error detected *before* any computation starts. This module defines the
exception classes used to signal those violations so callers (and tests) can
catch them precisely while still being able to catch the whole family through
:class:`PreconditionError`.

Each error keeps the offending values as attributes to aid debugging.
"""

from __future__ import annotations

from typing import Any, Sequence


class PreconditionError(ValueError):
    """
    Base class for all kranium precondition violations.

    Raised when an operation is invoked with operands that violate its
    documented contract. No partial result is ever produced.
    """


class InvalidShapeError(PreconditionError):
    """
    Raised when a shape contains a negative or non-integer dimension.

    Attributes
    ----------
    shape : Any
        The rejected shape as supplied by the caller.
    """

    def __init__(self, shape: Any, reason: str) -> None:
        super().__init__(f"Invalid shape {shape!r}: {reason}")
        self.shape = shape


class DataLengthError(PreconditionError):
    """
    Raised when externally supplied data does not match the requested shape.

    Attributes
    ----------
    length : int
        Number of elements supplied.
    expected : int
        Number of elements implied by the shape.
    shape : tuple[int, ...]
        The requested shape.
    """

    def __init__(self, length: int, expected: int, shape: Sequence[int]) -> None:
        super().__init__(
            f"Data length {length} doesn't match expected size {expected} "
            f"from shape {tuple(shape)}"
        )
        self.length = length
        self.expected = expected
        self.shape = tuple(shape)


class LengthMismatchError(PreconditionError):
    """
    Raised when an elementwise backend operation receives buffers of
    different lengths.

    Attributes
    ----------
    op : str
        Operation name (e.g., "add").
    len_a : int
        Length of the left buffer.
    len_b : int
        Length of the right buffer.
    """

    def __init__(self, op: str, len_a: int, len_b: int) -> None:
        super().__init__(
            f"Buffers must have the same length for {op}: {len_a} vs {len_b}"
        )
        self.op = op
        self.len_a = len_a
        self.len_b = len_b


class ShapeMismatchError(PreconditionError):
    """
    Raised when an elementwise tensor operation receives tensors whose shapes
    differ. Broadcasting is not supported.
    """

    def __init__(self, op: str, shape_a: Sequence[int], shape_b: Sequence[int]) -> None:
        super().__init__(
            f"Tensor shapes must match for {op}: {tuple(shape_a)} vs {tuple(shape_b)}"
        )
        self.op = op
        self.shape_a = tuple(shape_a)
        self.shape_b = tuple(shape_b)


class DTypeMismatchError(PreconditionError, TypeError):
    """
    Raised when a binary tensor operation mixes element dtypes.
    """

    def __init__(self, op: str, dtype_a: Any, dtype_b: Any) -> None:
        super().__init__(
            f"Tensor dtypes must match for {op}: {dtype_a} vs {dtype_b}"
        )
        self.op = op
        self.dtype_a = dtype_a
        self.dtype_b = dtype_b


class MatmulShapeError(PreconditionError):
    """
    Raised when matrix multiplication operands are not 2D or their inner
    dimensions disagree.
    """

    def __init__(self, message: str, shape_a: Sequence[int], shape_b: Sequence[int]) -> None:
        super().__init__(message)
        self.shape_a = tuple(shape_a)
        self.shape_b = tuple(shape_b)


class IndexCountError(PreconditionError):
    """
    Raised when the number of indices differs from the tensor rank.
    """

    def __init__(self, count: int, ndim: int) -> None:
        super().__init__(
            f"Number of indices {count} must match tensor dimensions {ndim}"
        )
        self.count = count
        self.ndim = ndim


class IndexOutOfBoundsError(PreconditionError, IndexError):
    """
    Raised when an index falls outside ``[0, shape[dim])``.

    Attributes
    ----------
    index : int
        The offending index.
    dim : int
        Dimension position.
    size : int
        Size of that dimension.
    """

    def __init__(self, index: int, dim: int, size: int) -> None:
        super().__init__(
            f"Index {index} out of bounds for dimension {dim} with size {size}"
        )
        self.index = index
        self.dim = dim
        self.size = size


class ReshapeError(PreconditionError):
    """
    Raised when a reshape would change the number of elements.
    """

    def __init__(self, size: int, new_shape: Sequence[int], new_size: int) -> None:
        super().__init__(
            f"Cannot reshape tensor of size {size} to shape {tuple(new_shape)} "
            f"with size {new_size}"
        )
        self.size = size
        self.new_shape = tuple(new_shape)
        self.new_size = new_size


class TransposeError(PreconditionError):
    """Raised when transpose is requested for a tensor that is not 2D."""

    def __init__(self, shape: Sequence[int]) -> None:
        super().__init__(
            f"Transpose is only implemented for 2D tensors, got shape {tuple(shape)}"
        )
        self.shape = tuple(shape)


class UnsupportedDTypeError(PreconditionError, TypeError):
    """
    Raised when a dtype does not satisfy the numeric element contract
    (integer or floating point).
    """

    def __init__(self, dtype: Any) -> None:
        super().__init__(
            f"dtype {dtype!r} is not a supported tensor element type; "
            "expected a signed/unsigned integer or floating point dtype"
        )
        self.dtype = dtype


class DivisionByZeroError(PreconditionError, ZeroDivisionError):
    """Raised when an integer elementwise division has a zero divisor."""

    def __init__(self, dtype: Any) -> None:
        super().__init__(f"Integer division by zero (dtype={dtype})")
        self.dtype = dtype


class DivisionOverflowError(PreconditionError, OverflowError):
    """
    Raised when a signed integer division would overflow its dtype
    (the dtype's minimum divided by -1).
    """

    def __init__(self, dtype: Any) -> None:
        super().__init__(f"Integer division overflows dtype {dtype} (minimum / -1)")
        self.dtype = dtype


class ElementValueError(PreconditionError):
    """
    Raised when a value written into a tensor cannot be represented by the
    tensor's dtype.

    Integer dtypes accept only values they hold exactly. Floating point
    dtypes accept any numeric value that rounds to a finite element (or is
    itself infinite or NaN).

    Attributes
    ----------
    value : Any
        The rejected value.
    dtype : Any
        The tensor's element dtype.
    """

    def __init__(self, value: Any, dtype: Any) -> None:
        super().__init__(f"Value {value!r} is not representable as {dtype}")
        self.value = value
        self.dtype = dtype


class UnknownBackendError(PreconditionError, KeyError):
    """
    Raised when a backend name cannot be resolved.
    """

    def __init__(self, name: str, known: Sequence[str]) -> None:
        super().__init__(
            f"Unknown backend {name!r}; expected one of {sorted(known)}"
        )
        self.name = name
        self.known = tuple(known)

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the message
        return str(self.args[0])
