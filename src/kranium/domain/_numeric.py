"""
Numeric element contract.

This module defines :class:`Numeric`, the single capability bound shared by
every backend and by the tensor type. An element type is a legal tensor
payload when it:

- can be copied and has a default ("zero") value,
- can be constructed from a small unsigned integer (used to synthesize "one"),
- supports ``+``, ``-``, ``*``, ``/`` and ``+=``,
- can be read concurrently by worker threads.

The protocol is structural and exists for typing and documentation; the
runtime gate that maps the contract onto concrete NumPy dtypes lives in the
infrastructure layer (``kranium.infrastructure._dtypes``) so the domain layer
stays free of NumPy imports.
"""

from __future__ import annotations

from typing import Protocol, TypeVar, runtime_checkable


@runtime_checkable
class Numeric(Protocol):
    """
    Structural contract for tensor element values.

    Notes
    -----
    Python ints and floats as well as NumPy integer/floating scalars satisfy
    this protocol. Complex and boolean values are excluded at runtime by the
    dtype gate even though they implement some of these operators.
    """

    def __add__(self, other, /): ...
    def __sub__(self, other, /): ...
    def __mul__(self, other, /): ...
    def __truediv__(self, other, /): ...


T = TypeVar("T", bound=Numeric)
"""Type variable for tensor element values."""
