"""
kranium: a minimal n-dimensional tensor library over pluggable compute
backends.

Typical usage
-------------
>>> from kranium import Tensor, CpuBackend
>>> a = Tensor.from_data([1.0, 2.0, 3.0, 4.0, 5.0, 6.0], (2, 3), CpuBackend())
>>> b = Tensor.from_data([7.0, 8.0, 9.0, 10.0, 11.0, 12.0], (3, 2), CpuBackend())
>>> (a @ b).tolist()
[58.0, 64.0, 139.0, 154.0]
"""

from .domain import (
    BackendKind,
    BufferLike,
    DataLengthError,
    DivisionByZeroError,
    DTypeMismatchError,
    DivisionOverflowError,
    ElementValueError,
    IBackend,
    IndexCountError,
    IndexOutOfBoundsError,
    InvalidShapeError,
    ITensor,
    LengthMismatchError,
    MatmulShapeError,
    Numeric,
    PreconditionError,
    ReshapeError,
    ShapeMismatchError,
    TransposeError,
    UnknownBackendError,
    UnsupportedDTypeError,
)
from .infrastructure._shape import compute_strides
from .infrastructure.backend import CpuBackend, ParallelCpuBackend, get_backend
from .infrastructure.tensor import Tensor

__version__ = "0.1.0a0"

__all__ = [
    "Tensor",
    "CpuBackend",
    "ParallelCpuBackend",
    "get_backend",
    "compute_strides",
    "BackendKind",
    "BufferLike",
    "IBackend",
    "ITensor",
    "Numeric",
    "PreconditionError",
    "DataLengthError",
    "DivisionByZeroError",
    "DTypeMismatchError",
    "DivisionOverflowError",
    "ElementValueError",
    "IndexCountError",
    "IndexOutOfBoundsError",
    "InvalidShapeError",
    "LengthMismatchError",
    "MatmulShapeError",
    "ReshapeError",
    "ShapeMismatchError",
    "TransposeError",
    "UnknownBackendError",
    "UnsupportedDTypeError",
]
