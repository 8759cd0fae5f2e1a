"""
CPU backends and backend resolution.

- ``CpuBackend``: sequential reference implementation
- ``ParallelCpuBackend``: thread-parallel implementation, bit-identical to
  ``CpuBackend``
- ``get_backend``: build a backend by name (or from ``KRANIUM_BACKEND``)
"""

from ._cpu import CpuBackend
from ._parallel_cpu import ParallelCpuBackend
from ._registry import get_backend

__all__ = [
    CpuBackend.__name__,
    ParallelCpuBackend.__name__,
    get_backend.__name__,
]
