"""
Arithmetic mixin for the concrete Tensor.

This module defines :class:`TensorMixinArithmetic`, which implements the
elementwise operations (``add``, ``sub``, ``mul``, ``div``), matrix
multiplication, and the matching Python operators.

Every method validates the shape preconditions on the tensor side, hands the
raw buffers and shape metadata to ``self.backend``, and wraps the returned
buffer into a new tensor carrying a copy of the backend.

Notes
-----
- Broadcasting is not supported; elementwise operands must have identical
  shapes and dtypes.
- Operators only accept tensors. ``tensor + 1`` raises ``TypeError``.
"""

from __future__ import annotations

from abc import ABC
from typing import Any

from ...domain._errors import DTypeMismatchError, MatmulShapeError, ShapeMismatchError


class TensorMixinArithmetic(ABC):
    """
    Elementwise arithmetic and matrix multiplication.

    Notes
    -----
    The host class provides ``shape``, ``ndim``, ``dtype``, ``backend``,
    ``_data`` and ``_derive(buffer, shape)``.
    """

    @staticmethod
    def _binary_op_check(op: str, a: "TensorMixinArithmetic", b: Any) -> None:
        """
        Validate the operands of an elementwise operation.

        Raises
        ------
        TypeError
            If ``b`` is not a tensor.
        ShapeMismatchError
            If the shapes differ.
        DTypeMismatchError
            If the dtypes differ.
        """
        if not isinstance(b, TensorMixinArithmetic):
            raise TypeError(
                f"Tensor.{op}() expects a Tensor operand, got {type(b).__name__}"
            )
        if a.shape != b.shape:
            raise ShapeMismatchError(op, a.shape, b.shape)
        if a.dtype != b.dtype:
            raise DTypeMismatchError(op, a.dtype, b.dtype)

    def _elementwise(self, op: str, other: Any):
        self._binary_op_check(op, self, other)
        out = getattr(self.backend, op)(self._data, other._data)
        return self._derive(out, self.shape)

    # ----------------------------
    # Named operations
    # ----------------------------
    def add(self, other):
        """
        Elementwise addition.

        Parameters
        ----------
        other : Tensor
            Tensor with the same shape and dtype.

        Returns
        -------
        Tensor
            New tensor with ``out[i] = self[i] + other[i]``.
        """
        return self._elementwise("add", other)

    def sub(self, other):
        """Elementwise subtraction, ``out[i] = self[i] - other[i]``."""
        return self._elementwise("sub", other)

    def mul(self, other):
        """Elementwise multiplication, ``out[i] = self[i] * other[i]``."""
        return self._elementwise("mul", other)

    def div(self, other):
        """
        Elementwise division, ``out[i] = self[i] / other[i]``.

        Floating point tensors follow IEEE rules; integer tensors truncate
        toward zero and raise `DivisionByZeroError` on a zero divisor.
        """
        return self._elementwise("div", other)

    def matmul(self, other):
        """
        Matrix product of two 2D tensors.

        Parameters
        ----------
        other : Tensor
            Tensor of shape ``(k, n)`` when ``self`` has shape ``(m, k)``.

        Returns
        -------
        Tensor
            Tensor of shape ``(m, n)``.

        Raises
        ------
        MatmulShapeError
            If either tensor is not 2D or the inner dimensions differ.
        DTypeMismatchError
            If the dtypes differ.
        """
        if not isinstance(other, TensorMixinArithmetic):
            raise TypeError(
                f"Tensor.matmul() expects a Tensor operand, got {type(other).__name__}"
            )
        if self.ndim != 2:
            raise MatmulShapeError(
                f"First tensor must be 2D for matrix multiplication, got {self.shape}",
                self.shape,
                other.shape,
            )
        if other.ndim != 2:
            raise MatmulShapeError(
                f"Second tensor must be 2D for matrix multiplication, got {other.shape}",
                self.shape,
                other.shape,
            )
        if self.shape[1] != other.shape[0]:
            raise MatmulShapeError(
                "Inner dimensions must match for matrix multiplication: "
                f"{self.shape[1]} vs {other.shape[0]}",
                self.shape,
                other.shape,
            )
        if self.dtype != other.dtype:
            raise DTypeMismatchError("matmul", self.dtype, other.dtype)

        out = self.backend.matmul(self._data, self.shape, other._data, other.shape)
        return self._derive(out, (self.shape[0], other.shape[1]))

    # ----------------------------
    # Operators
    # ----------------------------
    def __add__(self, other):
        if not isinstance(other, TensorMixinArithmetic):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other):
        if not isinstance(other, TensorMixinArithmetic):
            return NotImplemented
        return self.sub(other)

    def __mul__(self, other):
        if not isinstance(other, TensorMixinArithmetic):
            return NotImplemented
        return self.mul(other)

    def __truediv__(self, other):
        if not isinstance(other, TensorMixinArithmetic):
            return NotImplemented
        return self.div(other)

    def __matmul__(self, other):
        if not isinstance(other, TensorMixinArithmetic):
            return NotImplemented
        return self.matmul(other)
