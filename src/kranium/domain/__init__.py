"""
Domain contracts: element, buffer, backend and tensor protocols plus the
precondition error hierarchy. Nothing in this package imports NumPy.
"""

from ._backend import BackendKind, IBackend
from ._buffer import BufferLike
from ._errors import (
    DataLengthError,
    DivisionByZeroError,
    DTypeMismatchError,
    DivisionOverflowError,
    ElementValueError,
    IndexCountError,
    IndexOutOfBoundsError,
    InvalidShapeError,
    LengthMismatchError,
    MatmulShapeError,
    PreconditionError,
    ReshapeError,
    ShapeMismatchError,
    TransposeError,
    UnknownBackendError,
    UnsupportedDTypeError,
)
from ._numeric import Numeric
from ._tensor import ITensor

__all__ = [
    BackendKind.__name__,
    IBackend.__name__,
    BufferLike.__name__,
    ITensor.__name__,
    Numeric.__name__,
    PreconditionError.__name__,
    DataLengthError.__name__,
    DivisionByZeroError.__name__,
    DTypeMismatchError.__name__,
    DivisionOverflowError.__name__,
    ElementValueError.__name__,
    IndexCountError.__name__,
    IndexOutOfBoundsError.__name__,
    InvalidShapeError.__name__,
    LengthMismatchError.__name__,
    MatmulShapeError.__name__,
    ReshapeError.__name__,
    ShapeMismatchError.__name__,
    TransposeError.__name__,
    UnknownBackendError.__name__,
    UnsupportedDTypeError.__name__,
]
