"""
Domain-level structural typing for flat element buffers.

This module defines :class:`BufferLike`, a backend-agnostic Protocol for the
one-dimensional element buffers exchanged between tensors and backends,
without introducing a dependency on NumPy in the domain layer.

Typical implementers include:
- one-dimensional ``numpy.ndarray`` instances (the CPU backends),
- device-resident arrays of a future accelerator backend that emulate the
  same minimal surface.
"""

from __future__ import annotations

from typing import Any, Iterator, Protocol, Tuple, runtime_checkable


@runtime_checkable
class BufferLike(Protocol):
    """
    Flat buffer contract.

    Notes
    -----
    - Buffers handed to a backend are treated as immutable inputs.
    - Buffers returned by a backend are newly allocated and owned by the
      caller.
    """

    @property
    def shape(self) -> Tuple[int, ...]:
        """Shape of the buffer; always ``(length,)`` for flat buffers."""
        ...

    @property
    def size(self) -> int:
        """Total number of elements."""
        ...

    @property
    def dtype(self) -> Any:
        """Backend-defined dtype descriptor of the elements."""
        ...

    def __len__(self) -> int: ...

    def __getitem__(self, key: Any) -> Any: ...

    def __setitem__(self, key: Any, value: Any) -> None: ...

    def __iter__(self) -> Iterator[Any]: ...

    def copy(self) -> "BufferLike":
        """Return an independent copy of the buffer."""
        ...

    def tolist(self) -> list[Any]:
        """Convert the buffer to a Python list."""
        ...
